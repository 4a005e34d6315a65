"""Selection-mode policies deciding how a pick changes the selection."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from date_utils import contains_date, same_calendar_day, to_day


class SelectionMode(Enum):
    SINGLE = "single"
    MULTIPLE = "multiple"
    RANGE = "range"


class SelectionPolicy:
    """Applies one pick to a selection according to a :class:`SelectionMode`.

    SINGLE replaces the selection. MULTIPLE adds up to *max_selections*
    dates and toggles off a date picked twice. RANGE keeps at most two
    dates: a third pick, or a second pick earlier than the first, starts a
    new range.
    """

    def __init__(self, mode: SelectionMode = SelectionMode.SINGLE,
                 max_selections: int | None = None) -> None:
        if max_selections is not None and max_selections < 1:
            raise ValueError(f"max_selections must be >= 1, got {max_selections}")
        self.mode = mode
        self.max_selections = max_selections

    def __repr__(self) -> str:
        return f"SelectionPolicy({self.mode.name}, max_selections={self.max_selections})"

    @property
    def capacity(self) -> int | None:
        """How many dates may be selected at once (None = unbounded)."""
        if self.mode is SelectionMode.SINGLE:
            return 1
        if self.mode is SelectionMode.RANGE:
            return 2
        return self.max_selections

    def can_select(self, d: date | datetime, min_day: date, max_day: date) -> bool:
        return min_day <= to_day(d) < max_day

    def apply(self, selected: list[date], d: date | datetime) -> list[date] | None:
        """Return the new selection after picking *d*, or None if refused.

        *selected* is not modified.
        """
        day = to_day(d)
        if self.mode is SelectionMode.SINGLE:
            return [day]

        if self.mode is SelectionMode.MULTIPLE:
            if contains_date(selected, day):
                return [s for s in selected if not same_calendar_day(s, day)]
            if self.max_selections is not None and len(selected) >= self.max_selections:
                return None
            return [*selected, day]

        # RANGE
        if len(selected) > 1 or (len(selected) == 1 and day < selected[0]):
            return [day]
        if contains_date(selected, day):
            return list(selected)
        return [*selected, day]
