from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

import pandas as pd

from utils.time import month_name, year_month_instant


class DatasetFormatError(ValueError):
    """Raised when a payload does not have the baseTemperature/monthlyVariance shape."""


@dataclass(frozen=True)
class Observation:
    year: int
    month: int
    variance: float

    @property
    def instant(self) -> datetime:
        return year_month_instant(self.year, self.month)

    @property
    def month_label(self) -> str:
        return month_name(self.instant)


@dataclass(frozen=True)
class Dataset:
    base_temperature: float
    monthly_variance: tuple[Observation, ...]

    def __len__(self) -> int:
        return len(self.monthly_variance)

    def temperature_of(self, observation: Observation) -> float:
        return self.base_temperature + observation.variance

    def to_frame(self) -> pd.DataFrame:
        """One row per observation with the derived calendar and temperature columns."""
        rows = [
            {
                "year": o.year,
                "month": o.month,
                "month_name": o.month_label,
                "date": o.instant,
                "variance": o.variance,
                "temperature": self.temperature_of(o),
            }
            for o in self.monthly_variance
        ]
        columns = ["year", "month", "month_name", "date", "variance", "temperature"]
        return pd.DataFrame(rows, columns=columns)


def _number(value: Any, field: str) -> float:
    # bool is an int subclass but never a valid measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DatasetFormatError(f"Field {field!r} must be a number, got {value!r}.")
    number = float(value)
    if not math.isfinite(number):
        raise DatasetFormatError(f"Field {field!r} must be finite, got {value!r}.")
    return number


def _observation(raw: Any, index: int) -> Observation:
    if not isinstance(raw, Mapping):
        raise DatasetFormatError(f"monthlyVariance[{index}] must be an object.")
    missing = [key for key in ("year", "month", "variance") if key not in raw]
    if missing:
        raise DatasetFormatError(
            f"monthlyVariance[{index}] is missing {', '.join(missing)}."
        )
    observation = Observation(
        year=int(_number(raw["year"], "year")),
        month=int(_number(raw["month"], "month")),
        variance=_number(raw["variance"], "variance"),
    )
    try:
        year_month_instant(observation.year, observation.month)
    except (ValueError, OverflowError) as exc:
        raise DatasetFormatError(
            f"monthlyVariance[{index}] has no calendar date: {exc}"
        ) from exc
    return observation


def parse_dataset(payload: Any) -> Dataset:
    """
    Build a Dataset from the decoded JSON document. Checks the shape and
    that every year/month names a representable date; months outside 1-12
    still roll over into neighbouring years and land in the wrong place.
    """
    if not isinstance(payload, Mapping):
        raise DatasetFormatError("Dataset document must be a JSON object.")
    if "baseTemperature" not in payload:
        raise DatasetFormatError("Dataset document is missing baseTemperature.")
    records = payload.get("monthlyVariance")
    if not isinstance(records, list):
        raise DatasetFormatError("monthlyVariance must be a list.")
    return Dataset(
        base_temperature=_number(payload["baseTemperature"], "baseTemperature"),
        monthly_variance=tuple(_observation(raw, i) for i, raw in enumerate(records)),
    )
