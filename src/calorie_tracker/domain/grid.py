"""Domain models for the month calendar."""

from dataclasses import dataclass
from datetime import date

from calorie_tracker.domain.models import MonthCursor


@dataclass(frozen=True)
class LossShade:
    """Estimated weight loss in grams with its background color."""

    grams: int
    color: str


@dataclass(frozen=True)
class DayCell:
    """A single day in the calendar grid."""

    date: date
    in_month: bool
    selected: bool
    today: bool
    total: float | None = None
    loss: LossShade | None = None

    @property
    def has_data(self) -> bool:
        return self.total is not None


@dataclass(frozen=True)
class WeekRow:
    """Seven consecutive days starting on Monday and the week's loss."""

    days: tuple[DayCell, ...]
    total: float
    days_with_data: int
    loss: LossShade | None = None


@dataclass(frozen=True)
class CalendarGrid:
    """Rendered month page."""

    cursor: MonthCursor
    weeks: tuple[WeekRow, ...]
    padding_rows: int = 0

    @property
    def cells(self) -> list[DayCell]:
        return [cell for week in self.weeks for cell in week.days]
