"""Pure calendar calculations — no UI dependencies.

Turns a ``[min, max)`` date range into the months a picker shows and, per
month, the week rows of :class:`~cell_state.DayCell` values.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from cell_state import DayCell, describe_cell, range_bounds
from date_utils import next_month, normalize_to_midnight, to_day
from formatting import DateFormatter
from logger import LOGGER_NAME

log = logging.getLogger(LOGGER_NAME)

_EPOCH_DAY = date(1970, 1, 1)
_EPOCH = datetime(1970, 1, 1)
_EPOCH_UTC = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Padding rows reach up to 6 days past either end of a month, so the first
# and last month of the date type cannot be laid out.
EARLIEST_MIN_DAY = date(1, 2, 1)
LATEST_MAX_DAY = date(9999, 12, 1)

WeekGrid = tuple[tuple[DayCell, ...], ...]


class InvalidArgumentError(ValueError):
    """Raised for an unusable range or locale."""


@dataclass(frozen=True)
class MonthDescriptor:
    """One calendar month in the pickable range.

    ``month`` is 1-based like :class:`datetime.date`; ``month_index`` is the
    zero-based form. A locale change replaces the descriptor with a relabelled
    copy.
    """
    month: int
    year: int
    date: date
    label: str

    @property
    def month_index(self) -> int:
        return self.month - 1

    def contains(self, d: date | datetime) -> bool:
        day = to_day(d)
        return day.year == self.year and day.month == self.month

    def __str__(self) -> str:
        return f"MonthDescriptor(label={self.label!r}, month={self.month}, year={self.year})"


MonthGrid = tuple[MonthDescriptor, WeekGrid]


@dataclass(frozen=True)
class RangeBounds:
    """Normalized picker range.

    ``min_day`` is inclusive, ``max_day`` exclusive. ``last_instant`` is
    midnight of ``max_day`` minus one minute; its month is the last one shown,
    so a max on the 1st of a month does not pull that month in.
    """
    min_day: date
    max_day: date
    last_instant: datetime

    @property
    def last_day(self) -> date:
        """Last selectable day."""
        return self.max_day - timedelta(days=1)

    def contains(self, d: date | datetime) -> bool:
        return self.min_day <= to_day(d) < self.max_day


def is_zero_epoch(value: date | datetime) -> bool:
    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            return value == _EPOCH_UTC
        return value == _EPOCH
    return value == _EPOCH_DAY


def validate_range(min_date: date | datetime | None,
                   max_date: date | datetime | None) -> RangeBounds:
    """Check and normalize a ``[min_date, max_date)`` pair.

    Time of day is dropped before the ordering check, so two times on the
    same day are rejected.
    """
    if min_date is None or max_date is None:
        raise InvalidArgumentError(
            f"min_date and max_date must be non-null: min={min_date}, max={max_date}")
    if not isinstance(min_date, date) or not isinstance(max_date, date):
        raise InvalidArgumentError(
            f"min_date and max_date must be dates: min={min_date!r}, max={max_date!r}")
    if is_zero_epoch(min_date) or is_zero_epoch(max_date):
        raise InvalidArgumentError(
            f"min_date and max_date must be non-zero: min={min_date}, max={max_date}")

    min_midnight = normalize_to_midnight(min_date)
    max_midnight = normalize_to_midnight(max_date)
    if to_day(min_midnight) >= to_day(max_midnight):
        raise InvalidArgumentError(
            f"min_date must be before max_date: min={min_date}, max={max_date}")
    if to_day(min_midnight) < EARLIEST_MIN_DAY or to_day(max_midnight) > LATEST_MAX_DAY:
        raise InvalidArgumentError(
            f"range must lie within {EARLIEST_MIN_DAY} .. {LATEST_MAX_DAY}: "
            f"min={min_date}, max={max_date}")

    return RangeBounds(
        min_day=to_day(min_midnight),
        max_day=to_day(max_midnight),
        last_instant=max_midnight - timedelta(minutes=1),
    )


def iter_months(bounds: RangeBounds) -> Iterator[tuple[int, int]]:
    """Yield (year, month) for every month touching the range, in order."""
    max_month = bounds.last_instant.month
    max_year = bounds.last_instant.year
    year, month = bounds.min_day.year, bounds.min_day.month
    while (month <= max_month or year < max_year) and year < max_year + 1:
        yield year, month
        year, month = next_month(year, month)


def first_row_start(year: int, month: int, first_weekday: int) -> date:
    """First day shown in the month's top row (may be in the previous month)."""
    first = date(year, month, 1)
    offset = first_weekday - first.weekday()
    if offset > 0:
        offset -= 7
    return first + timedelta(days=offset)


def build_weeks(
    month: MonthDescriptor,
    bounds: RangeBounds,
    first_weekday: int,
    today: date | datetime,
    selected: Sequence[date | datetime] = (),
    highlighted: Sequence[date | datetime] = (),
) -> WeekGrid:
    """Build the week rows for *month*, 7 cells each.

    Rows run from the locale's first weekday on or before the 1st and stop
    once a row would start after the month, so the last row is completed
    with next-month padding.
    """
    sel_bounds = range_bounds(selected)
    cur = first_row_start(month.year, month.month, first_weekday)
    weeks: list[tuple[DayCell, ...]] = []
    while ((cur.month < month.month + 1 or cur.year < month.year)
           and cur.year <= month.year):
        log.debug("Building week row starting at %s", cur)
        row: list[DayCell] = []
        for _ in range(7):
            row.append(describe_cell(
                cur, month, bounds.min_day, bounds.max_day,
                selected, highlighted, today, sel_bounds=sel_bounds,
            ))
            cur += timedelta(days=1)
        weeks.append(tuple(row))
    return tuple(weeks)


def build_months(bounds: RangeBounds, formatter: DateFormatter) -> list[MonthDescriptor]:
    months: list[MonthDescriptor] = []
    for year, month in iter_months(bounds):
        first = date(year, month, 1)
        descriptor = MonthDescriptor(
            month=month, year=year, date=first,
            label=formatter.format_month_label(first),
        )
        log.debug("Adding month %s", descriptor)
        months.append(descriptor)
    return months


def build_range(
    min_date: date | datetime | None,
    max_date: date | datetime | None,
    formatter: DateFormatter | None,
    today: date | datetime,
    selected: Sequence[date | datetime] = (),
    highlighted: Sequence[date | datetime] = (),
) -> list[MonthGrid]:
    """Return ``[(MonthDescriptor, weeks), ...]`` for ``[min_date, max_date)``.

    Raises InvalidArgumentError for a missing, zero-epoch or inverted range,
    a range touching the first or last month of the date type, or a missing
    formatter.
    """
    if formatter is None:
        raise InvalidArgumentError("Locale is null.")
    bounds = validate_range(min_date, max_date)
    first_weekday = formatter.first_day_of_week()
    return [
        (month, build_weeks(month, bounds, first_weekday, today, selected, highlighted))
        for month in build_months(bounds, formatter)
    ]
