"""Tests for the per-cell selection and range-state engine."""

from datetime import date, datetime, timedelta

from calendar_logic import MonthDescriptor
from cell_state import RangeState, describe_cell, range_bounds

JAN = MonthDescriptor(month=1, year=2013, date=date(2013, 1, 1), label="January 2013")
MIN = date(2013, 1, 1)
MAX = date(2013, 2, 1)
TODAY = date(2013, 1, 8)


def cell(d, selected=(), highlighted=(), today=TODAY, month=JAN):
    return describe_cell(d, month, MIN, MAX, list(selected), list(highlighted), today)


class TestFlags:
    def test_current_month_day(self) -> None:
        c = cell(date(2013, 1, 5))
        assert c.is_current_month
        assert c.is_selectable
        assert c.value == 5
        assert not c.is_selected
        assert c.range_state is RangeState.NONE

    def test_padding_day_is_never_selectable_or_selected(self) -> None:
        c = cell(date(2012, 12, 31), selected=[date(2012, 12, 31)])
        assert not c.is_current_month
        assert not c.is_selectable
        assert not c.is_selected

    def test_today_ignores_time(self) -> None:
        assert cell(date(2013, 1, 8), today=datetime(2013, 1, 8, 18, 45)).is_today
        assert not cell(date(2013, 1, 9)).is_today

    def test_highlight_applies_to_padding(self) -> None:
        c = cell(date(2013, 2, 1), highlighted=[date(2013, 2, 1)])
        assert c.is_highlighted
        assert not c.is_current_month

    def test_selectable_is_half_open(self) -> None:
        def narrow(d):
            return describe_cell(d, JAN, date(2013, 1, 10), date(2013, 1, 20), [], [], TODAY)

        assert not narrow(date(2013, 1, 9)).is_selectable
        assert narrow(date(2013, 1, 10)).is_selectable
        assert narrow(date(2013, 1, 19)).is_selectable
        assert not narrow(date(2013, 1, 20)).is_selectable

    def test_selected_outside_bounds_still_reflected(self) -> None:
        out_of_range = describe_cell(
            date(2013, 1, 25), JAN, MIN, date(2013, 1, 20),
            [date(2013, 1, 25)], [], TODAY)
        assert out_of_range.is_selected
        assert not out_of_range.is_selectable


class TestRangeState:
    def test_two_picks_make_a_bar(self) -> None:
        picks = [date(2013, 1, 5), date(2013, 1, 10)]
        assert cell(date(2013, 1, 5), picks).range_state is RangeState.FIRST
        for day in range(6, 10):
            assert cell(date(2013, 1, day), picks).range_state is RangeState.MIDDLE
        assert cell(date(2013, 1, 10), picks).range_state is RangeState.LAST
        assert cell(date(2013, 1, 4), picks).range_state is RangeState.NONE
        assert cell(date(2013, 1, 11), picks).range_state is RangeState.NONE

    def test_pick_order_does_not_matter(self) -> None:
        picks = [date(2013, 1, 10), date(2013, 1, 5)]
        assert cell(date(2013, 1, 5), picks).range_state is RangeState.FIRST
        assert cell(date(2013, 1, 10), picks).range_state is RangeState.LAST
        assert picks == [date(2013, 1, 10), date(2013, 1, 5)]

    def test_single_pick_has_no_range_state(self) -> None:
        assert cell(date(2013, 1, 5), [date(2013, 1, 5)]).range_state is RangeState.NONE

    def test_collapsed_range_is_first(self) -> None:
        """When min and max coincide, FIRST wins over LAST."""
        picks = [date(2013, 1, 5), date(2013, 1, 5)]
        assert cell(date(2013, 1, 5), picks).range_state is RangeState.FIRST

    def test_padding_cells_inside_span_stay_none(self) -> None:
        picks = [date(2012, 12, 20), date(2013, 1, 10)]
        c = cell(date(2012, 12, 31), picks)
        assert c.range_state is RangeState.NONE
        assert cell(date(2013, 1, 1), picks).range_state is RangeState.MIDDLE

    def test_time_of_day_in_selection_is_ignored(self) -> None:
        picks = [datetime(2013, 1, 5, 9), datetime(2013, 1, 10, 23, 59)]
        assert cell(date(2013, 1, 5), picks).range_state is RangeState.FIRST
        assert cell(date(2013, 1, 10), picks).range_state is RangeState.LAST

    def test_range_bounds(self) -> None:
        assert range_bounds([]) == (None, None)
        assert range_bounds([date(2013, 1, 5)]) == (None, None)
        picks = [date(2013, 1, 7), date(2013, 1, 2), date(2013, 1, 9)]
        assert range_bounds(picks) == (date(2013, 1, 2), date(2013, 1, 9))

    def test_precomputed_bounds_match(self) -> None:
        picks = [date(2013, 1, 5), date(2013, 1, 10)]
        for offset in range(-3, 35):
            d = date(2013, 1, 1) + timedelta(days=offset)
            plain = describe_cell(d, JAN, MIN, MAX, picks, [], TODAY)
            fast = describe_cell(d, JAN, MIN, MAX, picks, [], TODAY,
                                 sel_bounds=range_bounds(picks))
            assert plain == fast
