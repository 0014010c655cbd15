"""Selected day and displayed month, with pure transitions."""

from dataclasses import dataclass, replace
from datetime import date

from calorie_tracker.domain.models import MonthCursor


@dataclass(frozen=True)
class ViewState:
    """Which day is shown and which month the calendar paints.

    The cursor may point at a month that does not contain ``selected_date``.
    """

    selected_date: date
    month_cursor: MonthCursor

    @classmethod
    def starting_at(cls, day: date) -> "ViewState":
        return cls(selected_date=day, month_cursor=MonthCursor.containing(day))


def select_date(state: ViewState, day: date) -> ViewState:
    """Show ``day`` without moving the calendar."""
    return replace(state, selected_date=day)


def previous_month(state: ViewState) -> ViewState:
    return replace(state, month_cursor=state.month_cursor.previous())


def next_month(state: ViewState) -> ViewState:
    return replace(state, month_cursor=state.month_cursor.next())
