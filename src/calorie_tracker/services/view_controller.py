"""Composition root wiring user actions to view state and controllers."""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any

from calorie_tracker.adapters.calorie_api_client import API_ERRORS, CalorieApi
from calorie_tracker.domain.grid import CalendarGrid
from calorie_tracker.domain.events import (
    CaloriesTyped,
    ConfEdited,
    DeleteItem,
    DuplicateItem,
    EditItem,
    Event,
    MultiplierTyped,
    NameTyped,
    NextMonth,
    PreviousMonth,
    RecordWeight,
    Reload,
    SelectDay,
    SuggestionCommit,
    SuggestionNext,
    SuggestionPrevious,
    SuggestionsClosed,
    WeightTyped,
)
from calorie_tracker.domain.highlight import HighlightedChar, highlight
from calorie_tracker.domain.models import (
    Configuration,
    DaySummary,
    MonthCursor,
    Suggestion,
    WeightEntry,
)
from calorie_tracker.domain.view_state import (
    ViewState,
    next_month,
    previous_month,
    select_date,
)
from calorie_tracker.services.autocomplete import AutocompleteController
from calorie_tracker.services.calendar_aggregator import CalendarAggregator
from calorie_tracker.services.conf_sync import ConfSync
from calorie_tracker.services.day_view import (
    DayView,
    configuration_from_conf,
    parse_multiplier,
    parse_number,
    summarize_day,
)
from calorie_tracker.services.tasks import TaskTracker

if TYPE_CHECKING:
    from calorie_tracker.render import Renderer

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal error, please retry."


@dataclass
class ItemForm:
    """Raw text typed by the user."""

    name: str = ""
    calories: str = ""
    multiplier: str = ""
    weight: str = ""
    conf: dict[str, str] = field(default_factory=dict)

    def clear_item(self) -> None:
        self.name = ""
        self.calories = ""
        self.multiplier = ""


@dataclass(frozen=True)
class SuggestionView:
    suggestion: Suggestion
    chars: tuple[HighlightedChar, ...]
    focused: bool


@dataclass(frozen=True)
class ViewSnapshot:
    """Everything needed to paint the view once."""

    state: ViewState
    configuration: Configuration
    day: DayView | None
    calendar: CalendarGrid
    suggestions: tuple[SuggestionView, ...]
    weights: tuple[WeightEntry, ...]
    form: ItemForm
    error: str | None = None


class ViewController:
    """Owns the session state and turns events into state changes and requests.

    Must be used from within a running event loop; network exchanges run as
    tracked tasks and re-render on completion.
    """

    def __init__(  # noqa: PLR0913
        self,
        api: CalorieApi,
        tasks: TaskTracker,
        renderer: "Renderer",
        defaults: Configuration,
        today: Callable[[], date] = date.today,
        weight_history_days: int = 365,
    ) -> None:
        self._api = api
        self._tasks = tasks
        self._renderer = renderer
        self._defaults = defaults
        self._today = today
        self._weight_history_days = weight_history_days
        self.state = ViewState.starting_at(today())
        self.day: DaySummary | None = None
        self.month_totals: dict[date, float] = {}
        self.weights: list[WeightEntry] = []
        self.form = ItemForm()
        self._failures: set[str] = set()
        self.aggregator = CalendarAggregator()
        self.conf_sync = ConfSync(
            api, tasks, defaults, on_commit=lambda configuration: self.render()
        )
        self.autocomplete = AutocompleteController(
            api,
            tasks,
            on_submit=self._submit_suggestion,
            on_empty_submit=self._submit_form,
            on_change=self.render,
        )
        self._handlers: dict[type, Callable[[Any], None]] = {
            SelectDay: self._select_day,
            PreviousMonth: self._previous_month,
            NextMonth: self._next_month,
            NameTyped: self._name_typed,
            CaloriesTyped: self._calories_typed,
            MultiplierTyped: self._multiplier_typed,
            SuggestionNext: lambda event: self.autocomplete.next(),
            SuggestionPrevious: lambda event: self.autocomplete.previous(),
            SuggestionCommit: lambda event: self.autocomplete.commit(),
            SuggestionsClosed: lambda event: self.autocomplete.close(),
            ConfEdited: self._conf_edited,
            EditItem: self._edit_item,
            DeleteItem: self._delete_item,
            DuplicateItem: self._duplicate_item,
            WeightTyped: self._weight_typed,
            RecordWeight: self._record_weight,
            Reload: self._reload,
        }

    def start(self) -> None:
        """Load the initial day, month and weight history."""
        self._reload(Reload())
        self.render()

    def dispatch(self, event: Event) -> None:
        """Apply a user action and repaint."""
        self._handlers[type(event)](event)
        self.render()

    def snapshot(self) -> ViewSnapshot:
        configuration = self.conf_sync.configuration
        day = None
        if self.day is not None and self.day.date == self.state.selected_date:
            day = summarize_day(self.day, configuration)
        calendar = self.aggregator.render(
            self.state.month_cursor,
            self.month_totals,
            configuration,
            self.state.selected_date,
            self._today(),
        )
        suggestions = tuple(
            SuggestionView(
                suggestion=suggestion,
                chars=tuple(highlight(suggestion.name, suggestion.matched_positions)),
                focused=index == self.autocomplete.focus,
            )
            for index, suggestion in enumerate(self.autocomplete.suggestions)
        )
        return ViewSnapshot(
            state=self.state,
            configuration=configuration,
            day=day,
            calendar=calendar,
            suggestions=suggestions,
            weights=tuple(self.weights),
            form=replace(self.form, conf=dict(self.form.conf)),
            error=self.error,
        )

    @property
    def error(self) -> str | None:
        """Banner text while any channel has an unrecovered failure."""
        return INTERNAL_ERROR if self._failures else None

    def render(self) -> None:
        self._renderer.render(self.snapshot())

    def _select_day(self, event: SelectDay) -> None:
        self.state = select_date(self.state, event.day)
        self._spawn(self._load_day())

    def _previous_month(self, event: PreviousMonth) -> None:
        self.state = previous_month(self.state)
        self.month_totals = {}
        self._spawn(self._load_month())

    def _next_month(self, event: NextMonth) -> None:
        self.state = next_month(self.state)
        self.month_totals = {}
        self._spawn(self._load_month())

    def _name_typed(self, event: NameTyped) -> None:
        self.form.name = event.text
        self.autocomplete.on_text_changed(event.text)

    def _calories_typed(self, event: CaloriesTyped) -> None:
        self.form.calories = event.text

    def _multiplier_typed(self, event: MultiplierTyped) -> None:
        self.form.multiplier = event.text

    def _weight_typed(self, event: WeightTyped) -> None:
        self.form.weight = event.text

    def _conf_edited(self, event: ConfEdited) -> None:
        self.form.conf[event.key] = event.text
        value = parse_number(event.text)
        if value is None:
            return
        self.conf_sync.set(event.key, value)

    def _submit_suggestion(self, suggestion: Suggestion) -> None:
        multiplier = parse_multiplier(self.form.multiplier)
        if multiplier is None:
            return
        self._add_item(suggestion.name, suggestion.calories, multiplier)

    def _submit_form(self) -> None:
        calories = parse_number(self.form.calories)
        multiplier = parse_multiplier(self.form.multiplier)
        name = self.form.name.strip()
        if not name or calories is None or multiplier is None:
            return
        self._add_item(name, calories, multiplier)

    def _add_item(self, name: str, calories: float, multiplier: float) -> None:
        self.autocomplete.close()
        request = self._api.add_item(
            name, calories, multiplier, self.state.selected_date
        )
        self._spawn(self._mutate(request, clear_form=True))

    def _edit_item(self, event: EditItem) -> None:
        calories = multiplier = None
        if event.calories is not None:
            calories = parse_number(event.calories)
            if calories is None:
                return
        if event.multiplier is not None:
            multiplier = parse_number(event.multiplier)
            if multiplier is None:
                return
        request = self._api.edit_item(
            event.item_id, name=event.name, calories=calories, multiplier=multiplier
        )
        self._spawn(self._mutate(request))

    def _delete_item(self, event: DeleteItem) -> None:
        self._spawn(self._mutate(self._api.delete_item(event.item_id)))

    def _duplicate_item(self, event: DuplicateItem) -> None:
        if self.day is None:
            return
        item = next((item for item in self.day.items if item.id == event.item_id), None)
        if item is None:
            return
        request = self._api.edit_item(item.id, multiplier=item.multiplier + 1)
        self._spawn(self._mutate(request))

    def _record_weight(self, event: RecordWeight) -> None:
        weight = parse_number(self.form.weight)
        if weight is None:
            return
        self._spawn(self._save_weight(self.state.selected_date, weight))

    def _reload(self, event: Reload) -> None:
        self._spawn(self._load_day())
        self._spawn(self._load_month())
        self._spawn(self._refresh_weights())

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        self._tasks.spawn(coro)

    def _load_day(self) -> Coroutine[Any, Any, None]:
        return self._refresh_day(self.state.selected_date, self.conf_sync.revisions())

    def _load_month(self) -> Coroutine[Any, Any, None]:
        return self._refresh_month(self.state.month_cursor)

    async def _refresh_day(self, day: date, revisions: dict[str, int]) -> None:
        try:
            summary = await self._api.fetch_day(day)
        except API_ERRORS:
            if day != self.state.selected_date:
                return
            logger.warning("Failed to load day %s", day, exc_info=True)
            self._fail("day")
            return
        if day != self.state.selected_date:
            return
        self.day = summary
        self.conf_sync.load(
            configuration_from_conf(summary.conf, self._defaults), revisions
        )
        self._failures -= {"day", "write"}
        self.render()

    async def _refresh_month(self, cursor: MonthCursor) -> None:
        try:
            totals = await self._api.fetch_month(cursor)
        except API_ERRORS:
            if cursor != self.state.month_cursor:
                return
            logger.warning("Failed to load calendar for %s", cursor, exc_info=True)
            self._fail("month")
            return
        if cursor != self.state.month_cursor:
            return
        self.month_totals = totals
        self._failures.discard("month")
        self.render()

    async def _refresh_weights(self) -> None:
        since = self._today() - timedelta(days=self._weight_history_days)
        try:
            weights = await self._api.fetch_weight_history(since)
        except API_ERRORS:
            logger.warning("Failed to load weight history", exc_info=True)
            self._fail("weights")
            return
        self.weights = weights
        self._failures.discard("weights")
        self.render()

    async def _mutate(
        self, request: Coroutine[Any, Any, None], clear_form: bool = False
    ) -> None:
        try:
            await request
        except API_ERRORS:
            logger.warning("Item update failed", exc_info=True)
            self._fail("write")
            return
        if clear_form:
            self.form.clear_item()
        await asyncio.gather(self._load_day(), self._load_month())

    async def _save_weight(self, day: date, weight: float) -> None:
        try:
            await self._api.record_weight(day, weight)
        except API_ERRORS:
            logger.warning("Recording weight failed", exc_info=True)
            self._fail("write")
            return
        self.form.weight = ""
        await asyncio.gather(self._load_day(), self._refresh_weights())

    def _fail(self, channel: str) -> None:
        self._failures.add(channel)
        self.render()
