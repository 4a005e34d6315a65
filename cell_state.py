"""Per-cell selection, highlight and range-state flags."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING

from date_utils import (
    contains_date,
    max_date,
    min_date,
    same_calendar_day,
    to_day,
    within_half_open_interval,
)

if TYPE_CHECKING:
    from calendar_logic import MonthDescriptor


class RangeState(Enum):
    """Where a cell sits inside a multi-date selection bar."""
    NONE = "none"
    FIRST = "first"
    MIDDLE = "middle"
    LAST = "last"


@dataclass(frozen=True)
class DayCell:
    """One day slot in a week row (current-month day or padding)."""
    date: date
    value: int
    is_current_month: bool
    is_selectable: bool
    is_selected: bool
    is_today: bool
    is_highlighted: bool
    range_state: RangeState = RangeState.NONE


def range_bounds(selected: Sequence[date | datetime]) -> tuple[date | None, date | None]:
    """Return (min, max) of a selection, or (None, None) below two picks.

    Range-state only exists for two or more picks, so callers that get
    None back skip range-state entirely.
    """
    if len(selected) < 2:
        return None, None
    return min_date(selected), max_date(selected)


def _range_state(day: date, sel_lo: date | None, sel_hi: date | None) -> RangeState:
    if sel_lo is None or sel_hi is None:
        return RangeState.NONE
    # FIRST is checked before LAST, so a collapsed range (lo == hi) is FIRST.
    if same_calendar_day(day, sel_lo):
        return RangeState.FIRST
    if same_calendar_day(day, sel_hi):
        return RangeState.LAST
    if within_half_open_interval(day, sel_lo, sel_hi):
        return RangeState.MIDDLE
    return RangeState.NONE


def describe_cell(
    d: date | datetime,
    month: MonthDescriptor,
    min_bound: date | datetime,
    max_bound: date | datetime,
    selected: Sequence[date | datetime],
    highlighted: Sequence[date | datetime],
    today: date | datetime,
    sel_bounds: tuple[date | None, date | None] | None = None,
) -> DayCell:
    """Compute the flags of the cell showing *d* inside *month*.

    *max_bound* is exclusive. *sel_bounds* lets a caller building a whole
    month pass precomputed ``range_bounds(selected)`` instead of rescanning
    the selection for every cell.
    """
    day = to_day(d)
    is_current_month = day.month == month.month and day.year == month.year
    is_selectable = is_current_month and within_half_open_interval(
        day, min_bound, max_bound)
    is_selected = is_current_month and contains_date(selected, day)

    if sel_bounds is None:
        sel_bounds = range_bounds(selected)
    state = RangeState.NONE
    if is_current_month:
        state = _range_state(day, *sel_bounds)

    return DayCell(
        date=day,
        value=day.day,
        is_current_month=is_current_month,
        is_selectable=is_selectable,
        is_selected=is_selected,
        is_today=same_calendar_day(day, today),
        is_highlighted=contains_date(highlighted, day),
        range_state=state,
    )
