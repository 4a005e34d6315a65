"""Day-level date helpers shared by the grid builder and the cell engine."""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from datetime import date, datetime, time


def to_day(value: date | datetime) -> date:
    """Return the wall-clock calendar day of a date or datetime.

    Aware datetimes keep their own zone: 23:30 in Tokyo is that Tokyo day,
    not the UTC one.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def normalize_to_midnight(value: date | datetime) -> datetime:
    """Zero out hour/minute/second/microsecond, keeping any tzinfo."""
    if isinstance(value, datetime):
        return value.replace(hour=0, minute=0, second=0, microsecond=0)
    return datetime.combine(to_day(value), time())


def same_calendar_day(a: date | datetime, b: date | datetime) -> bool:
    """True when both values fall on the same year, month and day-of-month."""
    da, db = to_day(a), to_day(b)
    return (da.year, da.month, da.day) == (db.year, db.month, db.day)


def within_half_open_interval(d: date | datetime, lo: date | datetime,
                              hi_exclusive: date | datetime) -> bool:
    """``lo <= d < hi_exclusive``, compared at day level."""
    day = to_day(d)
    return to_day(lo) <= day < to_day(hi_exclusive)


def contains_date(dates: Iterable[date | datetime], d: date | datetime) -> bool:
    return any(same_calendar_day(d, other) for other in dates)


def min_date(dates: Iterable[date | datetime]) -> date | None:
    """Earliest day in *dates*, or None when empty. Does not reorder input."""
    return min((to_day(d) for d in dates), default=None)


def max_date(dates: Iterable[date | datetime]) -> date | None:
    """Latest day in *dates*, or None when empty. Does not reorder input."""
    return max((to_day(d) for d in dates), default=None)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1


def add_months(d: date, months: int) -> date:
    """Shift *d* by whole months, clamping the day (Jan 31 + 1 -> Feb 28/29)."""
    year, month0 = divmod(d.year * 12 + d.month - 1 + months, 12)
    month = month0 + 1
    return date(year, month, min(d.day, days_in_month(year, month)))


def months_between(lo: date, hi: date) -> list[tuple[int, int]]:
    """(year, month) pairs from *lo*'s month through *hi*'s month inclusive."""
    result: list[tuple[int, int]] = []
    year, month = lo.year, lo.month
    while (year, month) <= (hi.year, hi.month):
        result.append((year, month))
        year, month = next_month(year, month)
    return result
