from datetime import date

import pytest


class FixedWeekFormatter:
    """Locale-free formatter with a chosen week start (0 = Monday)."""

    def __init__(self, first_weekday: int = 0) -> None:
        self._first_weekday = first_weekday

    def format_month_label(self, d: date) -> str:
        return d.strftime("%Y-%m")

    def format_weekday_label(self, d: date) -> str:
        return ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"][d.weekday()]

    def format_full_date(self, d: date) -> str:
        return d.isoformat()

    def first_day_of_week(self) -> int:
        return self._first_weekday


@pytest.fixture
def monday_formatter() -> FixedWeekFormatter:
    return FixedWeekFormatter(0)


@pytest.fixture
def sunday_formatter() -> FixedWeekFormatter:
    return FixedWeekFormatter(6)
