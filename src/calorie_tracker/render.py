"""Text rendering of view snapshots."""

import sys
from dataclasses import dataclass, field
from typing import Protocol, TextIO

from calorie_tracker.domain.grid import DayCell, WeekRow
from calorie_tracker.domain.highlight import segments
from calorie_tracker.services.view_controller import SuggestionView, ViewSnapshot

WEEKDAY_HEADER = "Mo Tu We Th Fr Sa Su"


class Renderer(Protocol):
    """Receives a fresh snapshot whenever the view changes."""

    def render(self, snapshot: ViewSnapshot) -> None:
        """Paint the snapshot."""


@dataclass
class TextRenderer(Renderer):
    """Writes a plain text rendition of each snapshot to a stream."""

    stream: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, snapshot: ViewSnapshot) -> None:
        self.stream.write(render_text(snapshot) + "\n")
        self.stream.flush()


def render_text(snapshot: ViewSnapshot) -> str:
    """Return the whole view as text."""
    lines: list[str] = []
    if snapshot.error:
        lines.append(f"!! {snapshot.error}")
    lines.append(f"Day {snapshot.state.selected_date.isoformat()}")
    day = snapshot.day
    if day is not None:
        lines.append(
            f"Total: {_number(day.total)} kcal"
            f"  Budget left: {_number(day.budget_left)} kcal"
            f"  Lost today: {day.weight_lost_today} g"
        )
        if day.weight is not None:
            lines.append(f"Weight: {_number(day.weight)}")
        for item in day.items:
            lines.append(
                f"  #{item.id} {item.name}: {_number(item.calories)}"
                f" x {_number(item.multiplier)} = {_number(item.effective_calories)}"
            )
    lines.append(f"Calendar {snapshot.calendar.cursor}")
    lines.append(WEEKDAY_HEADER)
    for week in snapshot.calendar.weeks:
        lines.append(_week_line(week))
    lines.extend("" for _ in range(snapshot.calendar.padding_rows))
    lines.extend(_suggestion_line(view) for view in snapshot.suggestions)
    return "\n".join(lines)


def render_suggestion(view: SuggestionView) -> str:
    """Render a suggestion name with each run of matched characters in parentheses."""
    return "".join(
        f"({text})" if emphasized else text
        for text, emphasized in segments(view.chars)
    )


def _suggestion_line(view: SuggestionView) -> str:
    marker = ">" if view.focused else " "
    calories = _number(view.suggestion.calories)
    return f"{marker} {render_suggestion(view)} ({calories} kcal)"


def _week_line(week: WeekRow) -> str:
    cells = " ".join(_cell(cell) for cell in week.days)
    if week.loss is None:
        return cells
    return f"{cells} | {week.loss.grams:+d} g"


def _cell(cell: DayCell) -> str:
    if cell.selected:
        mark = "*"
    elif cell.today:
        mark = "!"
    else:
        mark = " "
    number = f"{cell.date.day:02d}" if cell.in_month else f"[{cell.date.day:02d}]"
    if cell.loss is None:
        return f"{mark}{number}"
    return f"{mark}{number}({cell.loss.grams:+d})"


def _number(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return f"{value:.1f}"
