"""Autocomplete controller for the item name field."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from calorie_tracker.adapters.calorie_api_client import API_ERRORS, CalorieApi
from calorie_tracker.domain.models import Suggestion
from calorie_tracker.services.tasks import TaskTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingQuery:
    """A search in flight with the sequence number it was issued under."""

    seq: int
    text: str


def focus_next(index: int | None, count: int) -> int | None:
    """Move focus down, wrapping; unfocused goes to the first entry."""
    if count == 0:
        return None
    if index is None:
        return 0
    return (index + 1) % count


def focus_previous(index: int | None, count: int) -> int | None:
    """Move focus up, wrapping; unfocused goes to the last entry."""
    if count == 0:
        return None
    if index is None:
        return count - 1
    return (index - 1 + count) % count


class AutocompleteController:
    """Issues searches and keeps only the reply to the latest one.

    Requests are never cancelled. A reply is applied only if its sequence
    number still equals the current one; anything older is dropped.
    """

    def __init__(
        self,
        api: CalorieApi,
        tasks: TaskTracker,
        on_submit: Callable[[Suggestion], None],
        on_empty_submit: Callable[[], None],
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._api = api
        self._tasks = tasks
        self._on_submit = on_submit
        self._on_empty_submit = on_empty_submit
        self._on_change = on_change or (lambda: None)
        self.seq = 0
        self.suggestions: list[Suggestion] = []
        self.focus: int | None = None

    @property
    def focused(self) -> Suggestion | None:
        if self.focus is None:
            return None
        return self.suggestions[self.focus]

    def on_text_changed(self, text: str) -> asyncio.Task[bool] | None:
        """Start a search for ``text``; an empty text only clears the list.

        Returns the spawned task, or ``None`` when nothing was sent.
        """
        self.seq += 1
        self.close()
        if not text:
            return None
        query = PendingQuery(seq=self.seq, text=text)
        return self._tasks.spawn(self._resolve(query))

    async def _resolve(self, query: PendingQuery) -> bool:
        try:
            results = await self._api.search(query.text)
        except API_ERRORS:
            if query.seq == self.seq:
                logger.warning("Autocomplete failed for %r", query.text)
            return False
        if query.seq != self.seq:
            return False
        self.suggestions = list(results)
        self.focus = None
        self._on_change()
        return True

    def next(self) -> None:
        self.focus = focus_next(self.focus, len(self.suggestions))

    def previous(self) -> None:
        self.focus = focus_previous(self.focus, len(self.suggestions))

    def commit(self) -> None:
        """Submit the focused suggestion, or the raw text when unfocused."""
        suggestion = self.focused
        if suggestion is None:
            self._on_empty_submit()
            return
        self.close()
        self._on_submit(suggestion)

    def close(self) -> None:
        """Hide the list and drop focus."""
        self.suggestions = []
        self.focus = None
