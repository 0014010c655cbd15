"""Calorie tracking service client."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from calorie_tracker.adapters.api_models import (
    CalendarPayload,
    ConfPayload,
    SuggestionListPayload,
    SummaryPayload,
    WeightHistoryPayload,
)
from calorie_tracker.domain.models import (
    DaySummary,
    MonthCursor,
    Suggestion,
    WeightEntry,
)

API_ERRORS = (httpx.HTTPError, ValidationError)


class CalorieApi(Protocol):
    """Interface for the remote calorie store."""

    async def fetch_day(self, day: date) -> DaySummary:
        """Return the items, total and configuration for a day."""

    async def fetch_month(self, cursor: MonthCursor) -> dict[date, float]:
        """Return total calories for each day of a month that has data."""

    async def search(self, text: str) -> list[Suggestion]:
        """Return suggestions for free text, best match first."""

    async def fetch_conf(self) -> dict[str, str]:
        """Return the raw configuration values."""

    async def set_conf(self, key: str, value: str) -> None:
        """Store a configuration value."""

    async def add_item(
        self, name: str, calories: float, multiplier: float, day: date
    ) -> None:
        """Log a food item on a day."""

    async def edit_item(
        self,
        item_id: int,
        name: str | None = None,
        calories: float | None = None,
        multiplier: float | None = None,
    ) -> None:
        """Update the given fields of an item."""

    async def delete_item(self, item_id: int) -> None:
        """Remove an item."""

    async def record_weight(self, day: date, weight: float) -> None:
        """Store the weight measured on a day."""

    async def fetch_weight_history(self, since: date) -> list[WeightEntry]:
        """Return recorded weights from ``since`` onwards, oldest first."""


@dataclass
class HttpxCalorieApiClient(CalorieApi):
    """HTTPX-backed calorie service client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10

    @classmethod
    def create(cls, base_url: str, timeout: float = 10) -> "HttpxCalorieApiClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def fetch_day(self, day: date) -> DaySummary:
        """Fetch the summary of a day."""
        response = await self._get(f"/api/summary/{day.isoformat()}")
        return SummaryPayload.model_validate(response.json()).to_domain(day)

    async def fetch_month(self, cursor: MonthCursor) -> dict[date, float]:
        """Fetch per-day totals for a month."""
        response = await self._get(f"/api/calendar_data/{cursor}")
        return CalendarPayload.model_validate(response.json()).totals()

    async def search(self, text: str) -> list[Suggestion]:
        """Fetch autocomplete suggestions."""
        response = await self._get(f"/api/autocomplete/{quote(text, safe='')}")
        payload = SuggestionListPayload.model_validate(response.json())
        return [entry.to_domain() for entry in payload.root]

    async def fetch_conf(self) -> dict[str, str]:
        """Fetch the raw configuration."""
        response = await self._get("/api/conf")
        return ConfPayload.model_validate(response.json()).root

    async def set_conf(self, key: str, value: str) -> None:
        """Store a configuration value."""
        await self._send("POST", "/api/conf", {"key": key, "value": value})

    async def add_item(
        self, name: str, calories: float, multiplier: float, day: date
    ) -> None:
        """Log a new item."""
        payload: dict[str, object] = {
            "name": name,
            "calories": calories,
            "multiplier": multiplier,
            "date": day.isoformat(),
        }
        await self._send("POST", "/api/item", payload)

    async def edit_item(
        self,
        item_id: int,
        name: str | None = None,
        calories: float | None = None,
        multiplier: float | None = None,
    ) -> None:
        """Update an item; omitted fields are left unchanged by the server."""
        payload: dict[str, object] = {}
        if name is not None:
            payload["name"] = name
        if calories is not None:
            payload["calories"] = calories
        if multiplier is not None:
            payload["multiplier"] = multiplier
        await self._send("PUT", f"/api/item/{item_id}", payload)

    async def delete_item(self, item_id: int) -> None:
        """Delete an item."""
        await self._send("DELETE", f"/api/item/{item_id}")

    async def record_weight(self, day: date, weight: float) -> None:
        """Store a weight measurement."""
        await self._send(
            "POST", "/api/weight", {"date": day.isoformat(), "weight": weight}
        )

    async def fetch_weight_history(self, since: date) -> list[WeightEntry]:
        """Fetch weights recorded since a date."""
        response = await self._get(f"/api/weight_history/{since.isoformat()}")
        return WeightHistoryPayload.model_validate(response.json()).to_domain()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get(self, path: str) -> httpx.Response:
        response = await self.http_client.get(
            f"{self.base_url}{path}", timeout=self.timeout
        )
        response.raise_for_status()
        return response

    async def _send(
        self, method: str, path: str, payload: dict[str, object] | None = None
    ) -> None:
        response = await self.http_client.request(
            method, f"{self.base_url}{path}", json=payload, timeout=self.timeout
        )
        response.raise_for_status()
