"""Dependency container wiring for the client."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date

from calorie_tracker.adapters.calorie_api_client import HttpxCalorieApiClient
from calorie_tracker.config import Settings
from calorie_tracker.domain.models import Configuration
from calorie_tracker.render import Renderer, TextRenderer
from calorie_tracker.services.tasks import TaskTracker
from calorie_tracker.services.view_controller import ViewController


@dataclass
class AppContainer:
    """Holds session-wide dependencies."""

    settings: Settings
    api_client: HttpxCalorieApiClient
    tasks: TaskTracker
    renderer: Renderer
    view_controller: ViewController
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    renderer: Renderer | None = None,
    today: Callable[[], date] | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    api_client = HttpxCalorieApiClient.create(
        base_url=resolved_settings.api_base_url,
        timeout=resolved_settings.request_timeout_seconds,
    )
    tasks = TaskTracker()
    resolved_renderer = renderer or TextRenderer()
    view_controller = ViewController(
        api=api_client,
        tasks=tasks,
        renderer=resolved_renderer,
        defaults=Configuration(
            metabolism=resolved_settings.default_metabolism,
            budget=resolved_settings.default_budget,
        ),
        today=today or date.today,
        weight_history_days=resolved_settings.weight_history_days,
    )

    async def close_resources() -> None:
        await tasks.drain()
        await api_client.close()

    return AppContainer(
        settings=resolved_settings,
        api_client=api_client,
        tasks=tasks,
        renderer=resolved_renderer,
        view_controller=view_controller,
        close_resources=close_resources,
    )
