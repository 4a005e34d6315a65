"""Stateful date picker: range, selection and highlight sets, and the grid."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date, datetime

from babel import Locale, UnknownLocaleError

from calendar_logic import (
    InvalidArgumentError,
    MonthDescriptor,
    MonthGrid,
    RangeBounds,
    WeekGrid,
    build_months,
    build_weeks,
    validate_range,
)
from cell_state import DayCell, range_bounds
from date_utils import (
    add_months,
    contains_date,
    months_between,
    next_month,
    prev_month,
    to_day,
)
from formatting import BabelFormatter, DateFormatter, weekday_labels
from logger import LOGGER_NAME
from selection_mode import SelectionMode, SelectionPolicy

log = logging.getLogger(LOGGER_NAME)


def resolve_formatter(locale: str | Locale | DateFormatter | None) -> DateFormatter:
    """Turn a locale identifier, Babel locale or formatter into a formatter."""
    if locale is None:
        raise InvalidArgumentError("Locale is null.")
    if hasattr(locale, "first_day_of_week"):
        return locale
    try:
        return BabelFormatter(locale)
    except (UnknownLocaleError, ValueError, TypeError) as e:
        raise InvalidArgumentError(f"Unknown locale {locale!r}: {e}") from e


class DatePicker:
    """Holds the picker state and keeps the month grids in step with it.

    The host calls :meth:`initialize_range` once, then mutates the
    selection with :meth:`select` / :meth:`deselect` and the highlights with
    :meth:`set_highlighted`. Each mutation rebuilds only the months whose
    cells can change. Not thread-safe; drive it from one thread.
    """

    def __init__(self, policy: SelectionPolicy | None = None,
                 today_provider: Callable[[], date | datetime] = date.today) -> None:
        self.policy = policy or SelectionPolicy()
        self._today_provider = today_provider
        self._formatter: DateFormatter | None = None
        self._bounds: RangeBounds | None = None
        self._months: list[MonthDescriptor] = []
        self._weeks: list[WeekGrid] = []
        self._selected: list[date] = []
        self._highlighted: list[date] = []

    @classmethod
    def from_settings(cls, settings: dict,
                      today_provider: Callable[[], date | datetime] = date.today,
                      ) -> DatePicker:
        """Build a picker spanning today .. today + ``months_ahead`` months."""
        policy = SelectionPolicy(
            SelectionMode(settings["selection_mode"]),
            settings.get("max_selections"),
        )
        picker = cls(policy, today_provider)
        today = to_day(today_provider())
        picker.initialize_range(
            today, add_months(today, settings["months_ahead"]), settings["locale"])
        return picker

    # ------------------------------------------------------------------
    # Range
    # ------------------------------------------------------------------
    def initialize_range(self, min_date: date | datetime | None,
                         max_date: date | datetime | None,
                         locale: str | Locale | DateFormatter | None,
                         ) -> list[MonthGrid]:
        """(Re)build every month for ``[min_date, max_date)`` in *locale*.

        Clears the selection and highlights. On InvalidArgumentError the
        previous state is left untouched.
        """
        formatter = resolve_formatter(locale)
        bounds = validate_range(min_date, max_date)

        self._formatter = formatter
        self._bounds = bounds
        self._selected = []
        self._highlighted = []
        self._months = build_months(bounds, formatter)
        self._rebuild_all()
        log.info("Initialized %d months from %s to %s (exclusive)",
                 len(self._months), bounds.min_day, bounds.max_day)
        return self.grid

    def set_locale(self, locale: str | Locale | DateFormatter) -> None:
        """Relabel months and rebuild rows, since the week start may move."""
        self._require_range()
        self._formatter = resolve_formatter(locale)
        self._months = [
            replace(month, label=self._formatter.format_month_label(month.date))
            for month in self._months
        ]
        self._rebuild_all()

    def refresh(self) -> None:
        """Rebuild every month, e.g. after midnight moved ``today``."""
        self._require_range()
        self._rebuild_all()

    def rebuild_month(self, month: MonthDescriptor,
                      selected: Iterable[date | datetime] | None = None,
                      highlighted: Iterable[date | datetime] | None = None,
                      today: date | datetime | None = None) -> WeekGrid:
        """Return fresh week rows for *month*; stored grids are not touched.

        Arguments left as None default to the picker's current state.
        """
        self._require_range()
        return build_weeks(
            month, self._bounds, self._formatter.first_day_of_week(),
            self._today() if today is None else today,
            self._selected if selected is None else list(selected),
            self._highlighted if highlighted is None else list(highlighted),
        )

    # ------------------------------------------------------------------
    # Selection / highlight mutation
    # ------------------------------------------------------------------
    def select(self, d: date | datetime) -> bool:
        """Pick *d* through the selection policy; False if refused."""
        self._require_range()
        day = to_day(d)
        bounds = self._bounds
        if not self.policy.can_select(day, bounds.min_day, bounds.max_day):
            log.warning(
                "Invalid selection: %s is not between %s and %s",
                self._formatter.format_full_date(day),
                self._formatter.format_full_date(bounds.min_day),
                self._formatter.format_full_date(bounds.last_day),
            )
            return False

        new_selection = self.policy.apply(self._selected, day)
        if new_selection is None:
            log.warning("Selection limit of %s reached, %s not selected",
                        self.policy.capacity, day)
            return False
        self._set_selection(new_selection)
        return True

    def deselect(self, d: date | datetime) -> bool:
        day = to_day(d)
        if not contains_date(self._selected, day):
            return False
        self._set_selection([s for s in self._selected if s != day])
        return True

    def clear_selection(self) -> None:
        if self._selected:
            self._set_selection([])

    def set_highlighted(self, dates: Iterable[date | datetime]) -> None:
        """Replace the highlight set."""
        self._require_range()
        new = _dedupe(dates)
        changed = set(self._highlighted).symmetric_difference(new)
        self._highlighted = new
        # Highlights also show on padding cells of the neighbouring months.
        wanted = set()
        for day in changed:
            wanted.add((day.year, day.month))
            wanted.add(prev_month(day.year, day.month))
            wanted.add(next_month(day.year, day.month))
        self._refresh_months(
            {i for i, m in enumerate(self._months) if (m.year, m.month) in wanted})

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def bounds(self) -> RangeBounds | None:
        return self._bounds

    @property
    def formatter(self) -> DateFormatter | None:
        return self._formatter

    @property
    def months(self) -> list[MonthDescriptor]:
        return list(self._months)

    @property
    def grid(self) -> list[MonthGrid]:
        """Months with their week rows; descriptors, rows and cells are immutable."""
        return list(zip(self._months, self._weeks))

    @property
    def selected_dates(self) -> list[date]:
        """Selected days in pick order."""
        return list(self._selected)

    @property
    def selected_date(self) -> date | None:
        return self._selected[0] if self._selected else None

    @property
    def highlighted_dates(self) -> list[date]:
        return list(self._highlighted)

    def weeks(self, month: MonthDescriptor) -> WeekGrid:
        return self._weeks[self._months.index(month)]

    def weekday_labels(self) -> list[str]:
        self._require_range()
        return weekday_labels(self._formatter)

    def month_index_for(self, d: date | datetime) -> int | None:
        for i, month in enumerate(self._months):
            if month.contains(d):
                return i
        return None

    def cell_for(self, d: date | datetime) -> DayCell | None:
        """Current-month cell showing *d*, or None outside the grid."""
        index = self.month_index_for(d)
        if index is None:
            return None
        day = to_day(d)
        for row in self._weeks[index]:
            for cell in row:
                if cell.is_current_month and cell.date == day:
                    return cell
        return None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _today(self) -> date:
        return to_day(self._today_provider())

    def _require_range(self) -> None:
        if self._bounds is None or self._formatter is None:
            raise RuntimeError("initialize_range() must be called first")

    def _rebuild_all(self) -> None:
        self._weeks = [self.rebuild_month(month) for month in self._months]

    def _set_selection(self, new_selection: list[date]) -> None:
        old_selection = self._selected
        self._selected = _dedupe(new_selection)

        changed = set(old_selection).symmetric_difference(self._selected)
        indices = self._month_indices(changed)
        old_span, new_span = range_bounds(old_selection), range_bounds(self._selected)
        if old_span != new_span:
            for lo, hi in (old_span, new_span):
                if lo is not None:
                    indices |= self._span_indices(lo, hi)
        self._refresh_months(indices)

    def _refresh_months(self, indices: set[int]) -> None:
        today = self._today()
        for i in sorted(indices):
            self._weeks[i] = self.rebuild_month(self._months[i], today=today)

    def _month_indices(self, days: Iterable[date]) -> set[int]:
        indices = set()
        for day in days:
            index = self.month_index_for(day)
            if index is not None:
                indices.add(index)
        return indices

    def _span_indices(self, lo: date, hi: date) -> set[int]:
        wanted = set(months_between(lo, hi))
        return {i for i, m in enumerate(self._months) if (m.year, m.month) in wanted}


def _dedupe(dates: Iterable[date | datetime]) -> list[date]:
    """Normalize to days, dropping repeats and keeping first-seen order."""
    result: list[date] = []
    for d in dates:
        day = to_day(d)
        if day not in result:
            result.append(day)
    return result
