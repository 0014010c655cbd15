"""Tests for view state transitions."""

from datetime import date

from calorie_tracker.domain.models import MonthCursor
from calorie_tracker.domain.view_state import (
    ViewState,
    next_month,
    previous_month,
    select_date,
)


def test_previous_from_january_rolls_back_a_year() -> None:
    assert MonthCursor(2024, 1).previous() == MonthCursor(2023, 12)


def test_next_from_december_rolls_forward_a_year() -> None:
    assert MonthCursor(2023, 12).next() == MonthCursor(2024, 1)


def test_mid_year_navigation() -> None:
    assert MonthCursor(2024, 6).previous() == MonthCursor(2024, 5)
    assert MonthCursor(2024, 6).next() == MonthCursor(2024, 7)


def test_month_navigation_keeps_selected_date() -> None:
    state = ViewState.starting_at(date(2024, 1, 15))

    moved = previous_month(state)

    assert moved.month_cursor == MonthCursor(2023, 12)
    assert moved.selected_date == date(2024, 1, 15)
    assert next_month(moved).month_cursor == MonthCursor(2024, 1)


def test_select_date_keeps_month_cursor() -> None:
    state = ViewState.starting_at(date(2024, 3, 14))

    selected = select_date(state, date(2024, 4, 1))

    assert selected.selected_date == date(2024, 4, 1)
    assert selected.month_cursor == MonthCursor(2024, 3)
    assert state.selected_date == date(2024, 3, 14)


def test_cursor_formats_as_year_month() -> None:
    assert str(MonthCursor(2024, 3)) == "2024-03"
    assert MonthCursor.containing(date(2021, 11, 30)) == MonthCursor(2021, 11)
