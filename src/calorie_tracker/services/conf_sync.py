"""Optimistic configuration writes guarded by per-key versions."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from calorie_tracker.adapters.calorie_api_client import API_ERRORS, CalorieApi
from calorie_tracker.domain.models import CONF_KEYS, Configuration
from calorie_tracker.services.tasks import TaskTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingWrite:
    """A configuration write in flight."""

    key: str
    version: int
    value: float


class ConfSync:
    """Commits a value only if no newer write for the same key was issued."""

    def __init__(
        self,
        api: CalorieApi,
        tasks: TaskTracker,
        configuration: Configuration,
        on_commit: Callable[[Configuration], None] | None = None,
    ) -> None:
        self._api = api
        self._tasks = tasks
        self._on_commit = on_commit or (lambda configuration: None)
        self._versions: dict[str, int] = {}
        self._revisions: dict[str, int] = {}
        self.configuration = configuration

    def version(self, key: str) -> int:
        return self._versions.get(key, 0)

    def revisions(self) -> dict[str, int]:
        """Per-key counters bumped by every write issued and every commit."""
        return {key: self._revisions.get(key, 0) for key in CONF_KEYS}

    def load(
        self, configuration: Configuration, revisions: dict[str, int] | None = None
    ) -> None:
        """Take freshly fetched values.

        With ``revisions`` captured when the fetch was issued, keys written or
        committed since then keep their current value.
        """
        values = {
            key: getattr(configuration, key)
            for key in CONF_KEYS
            if revisions is None or self._revisions.get(key, 0) == revisions[key]
        }
        self.configuration = replace(self.configuration, **values)

    def set(self, key: str, value: float) -> asyncio.Task[bool]:
        """Send ``value`` for ``key``; returns the spawned write task."""
        if key not in CONF_KEYS:
            raise ValueError(f"Unknown configuration key: {key}")
        version = self.version(key) + 1
        self._versions[key] = version
        self._bump(key)
        write = PendingWrite(key=key, version=version, value=value)
        return self._tasks.spawn(self._complete(write))

    async def _complete(self, write: PendingWrite) -> bool:
        try:
            await self._api.set_conf(write.key, _format_value(write.value))
        except API_ERRORS:
            logger.info("Configuration write for %s failed", write.key)
            return False
        if write.version != self._versions[write.key]:
            return False
        self.configuration = replace(self.configuration, **{write.key: write.value})
        self._bump(write.key)
        self._on_commit(self.configuration)
        return True

    def _bump(self, key: str) -> None:
        self._revisions[key] = self._revisions.get(key, 0) + 1


def _format_value(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
