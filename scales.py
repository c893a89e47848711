from __future__ import annotations

import math
from bisect import bisect_right
from datetime import datetime
from typing import Hashable, Iterable, Optional, Sequence

from utils.time import to_seconds

# Thresholds for snapping a raw step to 1, 2, 5 or 10 times a power of ten
_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)

_MONTH_SECONDS = 30 * 86400
_YEAR_SECONDS = 365 * 86400
# (months per tick, approximate duration in seconds)
_TIME_INTERVALS = ((1, _MONTH_SECONDS), (3, 3 * _MONTH_SECONDS), (12, _YEAR_SECONDS))


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def _tick_spec(start: float, stop: float, count: float) -> tuple[int, int, float]:
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10**power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    if power < 0:
        # negative increments mean "divide by", which keeps decimals exact
        inc = 10 ** (-power) / factor
        i1 = _round_half_up(start * inc)
        i2 = _round_half_up(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10**power * factor
        i1 = _round_half_up(start / inc)
        i2 = _round_half_up(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def ticks(start: float, stop: float, count: int = 10) -> list[float]:
    """Roughly ``count`` evenly spaced, human-friendly values within [start, stop]."""
    if not count > 0:
        return []
    if start == stop:
        return [start]
    reverse = stop < start
    lo, hi = (stop, start) if reverse else (start, stop)
    i1, i2, inc = _tick_spec(lo, hi, count)
    if i2 < i1:
        return []
    if inc < 0:
        values = [(i1 + i) / -inc for i in range(i2 - i1 + 1)]
    else:
        values = [(i1 + i) * inc for i in range(i2 - i1 + 1)]
    return values[::-1] if reverse else values


def tick_step(start: float, stop: float, count: int = 10) -> float:
    reverse = stop < start
    lo, hi = (stop, start) if reverse else (start, stop)
    if lo == hi:
        return 0.0
    inc = _tick_spec(lo, hi, count)[2]
    step = 1 / -inc if inc < 0 else inc
    return -step if reverse else step


def tick_precision(step: float) -> int:
    """Number of decimals needed to tell ticks ``step`` apart."""
    if step == 0:
        return 0
    return max(0, -math.floor(math.log10(abs(step))))


class LinearScale:
    """
    Continuous numeric scale. Mapping interpolates between the first two
    domain and range entries; ticks span the first to the last domain entry.
    A longer domain is accepted as-is, which is how the legend axis treats
    the color scale's domain.
    """

    def __init__(self, domain: Sequence[float], range_: Sequence[float] = (0.0, 1.0)) -> None:
        self.domain = tuple(float(v) for v in domain)
        self.range = tuple(float(v) for v in range_)

    def __call__(self, value: float) -> float:
        r0, r1 = self.range[0], self.range[1]
        if len(self.domain) < 2 or self.domain[0] == self.domain[1]:
            return (r0 + r1) / 2
        d0, d1 = self.domain[0], self.domain[1]
        return r0 + (float(value) - d0) / (d1 - d0) * (r1 - r0)

    def ticks(self, count: int = 10) -> list[float]:
        if not self.domain:
            return []
        return ticks(self.domain[0], self.domain[-1], count)

    def tick_format(self, count: int = 10):
        step = tick_step(self.domain[0], self.domain[-1], count) if self.domain else 0.0
        if step == 0:
            return str
        precision = tick_precision(step)
        return lambda value: f"{value:.{precision}f}"


class TimeScale:
    """Linear mapping from datetimes onto a pixel range."""

    def __init__(self, domain: tuple[datetime, datetime], range_: Sequence[float] = (0.0, 1.0)) -> None:
        self.domain = (domain[0], domain[1])
        self.range = (float(range_[0]), float(range_[1]))

    def __call__(self, instant: datetime) -> float:
        r0, r1 = self.range
        s0, s1 = to_seconds(self.domain[0]), to_seconds(self.domain[1])
        if s0 == s1:
            return (r0 + r1) / 2
        return r0 + (to_seconds(instant) - s0) / (s1 - s0) * (r1 - r0)

    def ticks(self, count: int = 10) -> list[datetime]:
        """
        Calendar-aligned ticks: monthly, quarterly or yearly depending on the
        span, widening to multiples of 2, 5, 10, 20, ... years for long spans.
        """
        start, stop = sorted(self.domain)
        if start == stop:
            return [start]
        s0, s1 = to_seconds(start), to_seconds(stop)
        target = (s1 - s0) / count
        durations = [seconds for _, seconds in _TIME_INTERVALS]
        i = bisect_right(durations, target)
        if i == len(_TIME_INTERVALS):
            years = max(1, int(tick_step(s0 / _YEAR_SECONDS, s1 / _YEAR_SECONDS, count)))
            return _year_ticks(start, stop, years)
        if i > 0 and target / durations[i - 1] < durations[i] / target:
            i -= 1
        months = _TIME_INTERVALS[i][0]
        if months == 12:
            return _year_ticks(start, stop, 1)
        return _month_ticks(start, stop, months)


def _year_ticks(start: datetime, stop: datetime, every: int) -> list[datetime]:
    first = start.year if start == datetime(start.year, 1, 1) else start.year + 1
    first = math.ceil(first / every) * every
    return [datetime(year, 1, 1) for year in range(first, stop.year + 1, every)]


def _month_ticks(start: datetime, stop: datetime, every: int) -> list[datetime]:
    index = start.year * 12 + start.month - 1
    if start != datetime(start.year, start.month, 1):
        index += 1
    out = []
    while True:
        year, month_index = divmod(index, 12)
        instant = datetime(year, month_index + 1, 1)
        if instant > stop:
            return out
        if month_index % every == 0:
            out.append(instant)
        index += 1


class BandScale:
    """Discrete scale splitting the range into equal bands, one per distinct domain value."""

    def __init__(self, domain: Iterable[Hashable], range_: Sequence[float] = (0.0, 1.0)) -> None:
        self.domain = tuple(dict.fromkeys(domain))
        self.range = (float(range_[0]), float(range_[1]))
        self._index = {value: i for i, value in enumerate(self.domain)}
        n = len(self.domain)
        self.step = (self.range[1] - self.range[0]) / n if n else 0.0

    @property
    def bandwidth(self) -> float:
        return self.step

    def __call__(self, value: Hashable) -> Optional[float]:
        i = self._index.get(value)
        if i is None:
            return None
        return self.range[0] + self.step * i


class OrdinalScale:
    """
    Maps each distinct input value to the next palette entry, cycling. The
    domain grows implicitly in first-seen order.
    """

    def __init__(self, palette: Sequence[str]) -> None:
        self.range = tuple(palette)
        self._index: dict[Hashable, int] = {}

    @property
    def domain(self) -> tuple:
        return tuple(self._index)

    def __call__(self, value: Hashable) -> str:
        i = self._index.setdefault(value, len(self._index))
        return self.range[i % len(self.range)]
