"""Domain models for the calorie tracker client."""

from dataclasses import dataclass, field
from datetime import date, datetime

DECEMBER = 12
CONF_KEYS = ("metabolism", "budget")


@dataclass(frozen=True)
class Item:
    """A logged food item as stored by the remote service."""

    id: int
    name: str
    calories: float
    multiplier: float
    date: date
    timestamp: datetime

    @property
    def effective_calories(self) -> float:
        """Calories counted towards the day total."""
        return self.calories * self.multiplier


@dataclass(frozen=True)
class Suggestion:
    """A search hit with the indices of the characters that matched."""

    name: str
    calories: float
    matched_positions: tuple[int, ...] = ()


@dataclass(frozen=True)
class Configuration:
    """Daily metabolism and calorie budget."""

    metabolism: float
    budget: float


@dataclass(frozen=True)
class WeightEntry:
    """A recorded body weight."""

    date: date
    weight: float


@dataclass(frozen=True)
class DaySummary:
    """Server view of a single day."""

    date: date
    total: float
    items: list[Item] = field(default_factory=list)
    conf: dict[str, str] = field(default_factory=dict)
    weight: float | None = None


@dataclass(frozen=True, order=True)
class MonthCursor:
    """A (year, month) pair identifying a calendar page."""

    year: int
    month: int

    @classmethod
    def containing(cls, day: date) -> "MonthCursor":
        """Return the cursor for the month containing ``day``."""
        return cls(year=day.year, month=day.month)

    def previous(self) -> "MonthCursor":
        """Return the preceding month, rolling over to December."""
        if self.month == 1:
            return MonthCursor(year=self.year - 1, month=DECEMBER)
        return MonthCursor(year=self.year, month=self.month - 1)

    def next(self) -> "MonthCursor":
        """Return the following month, rolling over to January."""
        if self.month == DECEMBER:
            return MonthCursor(year=self.year + 1, month=1)
        return MonthCursor(year=self.year, month=self.month + 1)

    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def contains(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
