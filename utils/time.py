from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

EPOCH = datetime(1970, 1, 1)

# Locale-independent, unlike strftime("%B")
_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def year_month_instant(year: int, month: int) -> datetime:
    """
    Combine a calendar year and 1-based month into the first day of that
    month. Months outside 1-12 roll over into the neighbouring years, e.g.
    (1900, 13) -> 1901-01-01 and (1900, 0) -> 1899-12-01.
    """
    carry, month_index = divmod(int(month) - 1, 12)
    return datetime(int(year) + carry, month_index + 1, 1)


def month_name(instant: datetime) -> str:
    return _MONTH_NAMES[instant.month - 1]


def format_year(instant: datetime) -> str:
    """4-digit, zero-padded year, e.g. '0950' or '1753'."""
    return f"{instant.year:04d}"


def to_seconds(instant: datetime) -> float:
    return (instant - EPOCH).total_seconds()


def format_number(value: float | None) -> str:
    """
    Render a number the way it reads in the source JSON: integral floats
    without a trailing '.0', everything else with its shortest repr.
    A missing value renders as empty text.
    """
    if value is None:
        return ""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_fixed(value: float, digits: int = 2) -> str:
    """
    Fixed-point text with ties rounded away from zero, e.g. 0.625 -> '0.63'
    and -0.125 -> '-0.13'. Decimal(float) is exact, so only true binary
    ties are affected.
    """
    if value == 0:
        value = 0.0  # no '-0.00'
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
