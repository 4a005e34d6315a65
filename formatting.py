"""Locale-aware labels and week-start lookup, backed by Babel."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Protocol

from babel import Locale
from babel.dates import format_date

MONTH_LABEL_FORMAT = "LLLL yyyy"
WEEKDAY_LABEL_FORMAT = "EEE"

# Any week works as a template; 2024-01-01 is a Monday.
_REFERENCE_MONDAY = date(2024, 1, 1)


class DateFormatter(Protocol):
    """What the grid builder and picker need from a locale."""

    def format_month_label(self, d: date) -> str: ...

    def format_weekday_label(self, d: date) -> str: ...

    def format_full_date(self, d: date) -> str: ...

    def first_day_of_week(self) -> int:
        """0 = Monday … 6 = Sunday, same numbering as ``date.weekday()``."""
        ...


def parse_locale(identifier: str | Locale) -> Locale:
    """Accept ``"de_CH"``, ``"de-CH"`` or a ready :class:`babel.Locale`."""
    if isinstance(identifier, Locale):
        return identifier
    return Locale.parse(str(identifier).replace("-", "_"))


class BabelFormatter:
    """Default :class:`DateFormatter` using the CLDR data shipped with Babel.

    *first_weekday* overrides the locale's own week start (0 = Monday).
    """

    def __init__(self, locale: str | Locale, first_weekday: int | None = None) -> None:
        self.locale = parse_locale(locale)
        if first_weekday is not None and not 0 <= first_weekday <= 6:
            raise ValueError(f"first_weekday must be 0..6, got {first_weekday}")
        self._first_weekday = first_weekday

    def __repr__(self) -> str:
        return f"BabelFormatter({str(self.locale)!r})"

    def format_month_label(self, d: date) -> str:
        return format_date(d, MONTH_LABEL_FORMAT, locale=self.locale)

    def format_weekday_label(self, d: date) -> str:
        return format_date(d, WEEKDAY_LABEL_FORMAT, locale=self.locale)

    def format_full_date(self, d: date) -> str:
        return format_date(d, "medium", locale=self.locale)

    def first_day_of_week(self) -> int:
        if self._first_weekday is not None:
            return self._first_weekday
        return self.locale.first_week_day


def weekday_labels(formatter: DateFormatter) -> list[str]:
    """Seven weekday labels ordered from the formatter's first day of week."""
    start = _REFERENCE_MONDAY + timedelta(days=formatter.first_day_of_week())
    return [formatter.format_weekday_label(start + timedelta(days=i)) for i in range(7)]
