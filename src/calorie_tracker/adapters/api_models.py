"""Pydantic models for the calorie service payloads."""

from datetime import UTC, date, datetime

from pydantic import BaseModel, Field, RootModel

from calorie_tracker.domain.models import (
    DaySummary,
    Item,
    Suggestion,
    WeightEntry,
)


class ItemPayload(BaseModel):
    """Item row returned with a day summary."""

    id: int
    name: str
    calories: float
    multiplier: float
    timestamp: int

    def to_domain(self, day: date) -> Item:
        return Item(
            id=self.id,
            name=self.name,
            calories=self.calories,
            multiplier=self.multiplier,
            date=day,
            timestamp=datetime.fromtimestamp(self.timestamp, tz=UTC),
        )


class SummaryPayload(BaseModel):
    """Day summary payload."""

    total: float
    items: list[ItemPayload] = Field(default_factory=list)
    conf: dict[str, str] = Field(default_factory=dict)
    weight: float | None = None

    def to_domain(self, day: date) -> DaySummary:
        items = sorted(
            (item.to_domain(day) for item in self.items),
            key=lambda item: item.timestamp,
        )
        return DaySummary(
            date=day,
            total=self.total,
            items=items,
            conf=dict(self.conf),
            weight=self.weight,
        )


class CalendarEntryPayload(BaseModel):
    """Per-day aggregate in the calendar payload."""

    total: float


class CalendarPayload(RootModel[dict[date, CalendarEntryPayload]]):
    """Calendar payload keyed by ISO date."""

    def totals(self) -> dict[date, float]:
        return {day: entry.total for day, entry in self.root.items()}


class SuggestionPayload(BaseModel):
    """Autocomplete hit."""

    name: str
    calories: float
    positions: list[int] = Field(default_factory=list)

    def to_domain(self) -> Suggestion:
        return Suggestion(
            name=self.name,
            calories=self.calories,
            matched_positions=tuple(self.positions),
        )


class SuggestionListPayload(RootModel[list[SuggestionPayload]]):
    """Ordered autocomplete results."""


class WeightHistoryPayload(BaseModel):
    """Weight history payload."""

    weights: list[tuple[date, float]] = Field(default_factory=list)

    def to_domain(self) -> list[WeightEntry]:
        return [WeightEntry(date=day, weight=weight) for day, weight in self.weights]


class ConfPayload(RootModel[dict[str, str]]):
    """Raw configuration key/value pairs."""
