"""Month grid construction and weight-loss estimates."""

import calendar
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, timedelta

from calorie_tracker.domain.grid import CalendarGrid, DayCell, LossShade, WeekRow
from calorie_tracker.domain.models import Configuration, MonthCursor

CALORIES_PER_GRAM = 7.7
DAYS_PER_WEEK = 7
STABLE_GRID_WEEKS = 5
MAX_SATURATION = 100
LOSS_HUE = 120
GAIN_HUE = 0


def weight_loss(total: float, metabolism: float) -> int:
    """Estimate grams lost for ``total`` calories against ``metabolism``.

    Positive means a deficit. Halves round up.
    """
    return math.floor((metabolism - total) / CALORIES_PER_GRAM + 0.5)


def loss_color(loss: int) -> str:
    """Background color for a loss estimate; saturation caps at 100."""
    saturation = min(MAX_SATURATION, abs(loss))
    if loss >= 0:
        return f"hsl({LOSS_HUE}, {saturation}%, {98 - saturation / 4:g}%)"
    return f"hsl({GAIN_HUE}, {saturation}%, {95 - saturation / 4:g}%)"


def shade(total: float, metabolism: float) -> LossShade:
    grams = weight_loss(total, metabolism)
    return LossShade(grams=grams, color=loss_color(grams))


def grid_bounds(cursor: MonthCursor) -> tuple[date, date]:
    """Return the Monday on or before the 1st and the Sunday on or after the last day."""
    first = cursor.first_day()
    last = first.replace(day=calendar.monthrange(cursor.year, cursor.month)[1])
    start = first - timedelta(days=first.weekday())
    end = last + timedelta(days=6 - last.weekday())
    return start, end


@dataclass
class CalendarAggregator:
    """Builds the decorated month grid from sparse daily totals."""

    def render(
        self,
        cursor: MonthCursor,
        daily_totals: Mapping[date, float],
        configuration: Configuration,
        selected_date: date,
        today: date,
    ) -> CalendarGrid:
        """Return the grid for ``cursor`` with per-day and per-week estimates."""
        start, end = grid_bounds(cursor)
        weeks: list[WeekRow] = []
        row: list[DayCell] = []
        week_total = 0.0
        days_with_data = 0
        day = start
        while day <= end:
            total = daily_totals.get(day)
            row.append(
                DayCell(
                    date=day,
                    in_month=cursor.contains(day),
                    selected=day == selected_date,
                    today=day == today,
                    total=total,
                    loss=(
                        shade(total, configuration.metabolism)
                        if total is not None
                        else None
                    ),
                )
            )
            if total is not None:
                week_total += total
                days_with_data += 1
            if len(row) == DAYS_PER_WEEK:
                weeks.append(
                    _close_week(row, week_total, days_with_data, configuration)
                )
                row, week_total, days_with_data = [], 0.0, 0
            day += timedelta(days=1)
        padding = 1 if len(weeks) <= STABLE_GRID_WEEKS else 0
        return CalendarGrid(cursor=cursor, weeks=tuple(weeks), padding_rows=padding)


def _close_week(
    days: list[DayCell],
    week_total: float,
    days_with_data: int,
    configuration: Configuration,
) -> WeekRow:
    # Blank only when nothing was logged; a zero-sum week still gets a figure.
    loss = None
    if days_with_data:
        loss = shade(week_total, configuration.metabolism * days_with_data)
    return WeekRow(
        days=tuple(days),
        total=week_total,
        days_with_data=days_with_data,
        loss=loss,
    )
