"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, date, datetime

import httpx
import pytest

from calorie_tracker.adapters.calorie_api_client import CalorieApi
from calorie_tracker.config import Settings
from calorie_tracker.domain.models import (
    Configuration,
    DaySummary,
    Item,
    MonthCursor,
    Suggestion,
    WeightEntry,
)
from calorie_tracker.services.tasks import TaskTracker
from calorie_tracker.services.view_controller import ViewController, ViewSnapshot

TODAY = date(2024, 3, 14)


def make_item(
    item_id: int,
    name: str,
    calories: float,
    multiplier: float = 1,
    day: date = TODAY,
) -> Item:
    return Item(
        id=item_id,
        name=name,
        calories=calories,
        multiplier=multiplier,
        date=day,
        timestamp=datetime(day.year, day.month, day.day, 12, item_id, tzinfo=UTC),
    )


@dataclass
class FakeCalorieApi(CalorieApi):
    """In-memory calorie service.

    Method names listed in ``held`` block until the test releases them, which
    lets a test choose the order in which replies arrive.
    """

    days: dict[date, DaySummary] = field(default_factory=dict)
    months: dict[MonthCursor, dict[date, float]] = field(default_factory=dict)
    suggestions: dict[str, list[Suggestion]] = field(default_factory=dict)
    conf: dict[str, str] = field(default_factory=dict)
    weights: list[WeightEntry] = field(default_factory=list)
    failing: set[str] = field(default_factory=set)
    held: set[str] = field(default_factory=set)
    waiting: dict[str, list[asyncio.Future]] = field(default_factory=dict)
    calls: list[tuple[str, tuple]] = field(default_factory=list)

    async def _call(self, name: str, *args):  # type: ignore[no-untyped-def]
        self.calls.append((name, args))
        if name in self.held:
            future = asyncio.get_running_loop().create_future()
            self.waiting.setdefault(name, []).append(future)
            await future
        if name in self.failing:
            raise httpx.ConnectError("connection refused")

    def release(self, name: str, index: int = 0) -> None:
        self.waiting[name][index].set_result(None)

    def calls_to(self, name: str) -> list[tuple]:
        return [args for called, args in self.calls if called == name]

    async def fetch_day(self, day: date) -> DaySummary:
        await self._call("fetch_day", day)
        return self.days.get(day, DaySummary(date=day, total=0, conf=dict(self.conf)))

    async def fetch_month(self, cursor: MonthCursor) -> dict[date, float]:
        await self._call("fetch_month", cursor)
        return dict(self.months.get(cursor, {}))

    async def search(self, text: str) -> list[Suggestion]:
        await self._call("search", text)
        return list(self.suggestions.get(text, []))

    async def fetch_conf(self) -> dict[str, str]:
        await self._call("fetch_conf")
        return dict(self.conf)

    async def set_conf(self, key: str, value: str) -> None:
        await self._call("set_conf", key, value)
        self.conf[key] = value

    async def add_item(
        self, name: str, calories: float, multiplier: float, day: date
    ) -> None:
        await self._call("add_item", name, calories, multiplier, day)

    async def edit_item(
        self,
        item_id: int,
        name: str | None = None,
        calories: float | None = None,
        multiplier: float | None = None,
    ) -> None:
        await self._call("edit_item", item_id, name, calories, multiplier)

    async def delete_item(self, item_id: int) -> None:
        await self._call("delete_item", item_id)

    async def record_weight(self, day: date, weight: float) -> None:
        await self._call("record_weight", day, weight)

    async def fetch_weight_history(self, since: date) -> list[WeightEntry]:
        await self._call("fetch_weight_history", since)
        return [entry for entry in self.weights if entry.date >= since]


@dataclass
class RecordingRenderer:
    """Keeps every snapshot it is asked to paint."""

    snapshots: list[ViewSnapshot] = field(default_factory=list)

    def render(self, snapshot: ViewSnapshot) -> None:
        self.snapshots.append(snapshot)

    @property
    def last(self) -> ViewSnapshot:
        return self.snapshots[-1]


DEFAULTS = Configuration(metabolism=2000, budget=2000)


def build_controller(
    api: FakeCalorieApi, renderer: RecordingRenderer
) -> tuple[ViewController, TaskTracker]:
    tasks = TaskTracker()
    controller = ViewController(
        api=api,
        tasks=tasks,
        renderer=renderer,
        defaults=DEFAULTS,
        today=lambda: TODAY,
        weight_history_days=30,
    )
    return controller, tasks


@pytest.fixture
def api() -> FakeCalorieApi:
    return FakeCalorieApi()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_base_url="https://calories.test",
        request_timeout_seconds=5,
        weight_history_days=90,
        default_metabolism=2100,
        default_budget=1900,
        environment="test",
    )
