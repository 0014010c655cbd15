"""Tests for background task tracking."""

import asyncio
import logging

import pytest

from calorie_tracker.services.tasks import TaskTracker


def test_drain_waits_for_tasks_spawned_meanwhile() -> None:
    tracker = TaskTracker()
    finished: list[str] = []

    async def child() -> None:
        await asyncio.sleep(0)
        finished.append("child")

    async def parent() -> None:
        await asyncio.sleep(0)
        tracker.spawn(child())
        finished.append("parent")

    async def scenario() -> None:
        tracker.spawn(parent())
        await tracker.drain()

    asyncio.run(scenario())

    assert finished == ["parent", "child"]
    assert tracker.pending == 0


def test_failed_task_is_logged(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(logging.getLogger("calorie_tracker"), "propagate", True)
    tracker = TaskTracker()

    async def boom() -> None:
        raise RuntimeError("boom")

    async def scenario() -> None:
        tracker.spawn(boom())
        await tracker.drain()

    with caplog.at_level(logging.ERROR, logger="calorie_tracker"):
        asyncio.run(scenario())

    assert "Background task failed" in caplog.text
