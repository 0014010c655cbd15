"""Day summary figures and input parsing."""

import logging
import math
from dataclasses import dataclass
from datetime import date

from calorie_tracker.domain.models import CONF_KEYS, Configuration, DaySummary, Item
from calorie_tracker.services.calendar_aggregator import weight_loss

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayView:
    """Figures shown for the selected day."""

    date: date
    total: float
    budget_left: float
    weight_lost_today: int
    items: tuple[Item, ...]
    weight: float | None = None


def summarize_day(summary: DaySummary, configuration: Configuration) -> DayView:
    """Compute the day figures against the committed configuration."""
    return DayView(
        date=summary.date,
        total=summary.total,
        budget_left=configuration.budget - summary.total,
        weight_lost_today=weight_loss(summary.total, configuration.metabolism),
        items=tuple(summary.items),
        weight=summary.weight,
    )


def configuration_from_conf(
    conf: dict[str, str], defaults: Configuration
) -> Configuration:
    """Parse raw configuration strings, keeping defaults for bad values."""
    values: dict[str, float] = {}
    for key in CONF_KEYS:
        raw = conf.get(key)
        parsed = parse_number(raw) if raw is not None else None
        if parsed is None:
            if raw is not None:
                logger.warning("Ignoring invalid %s value %r", key, raw)
            parsed = getattr(defaults, key)
        values[key] = parsed
    return Configuration(**values)


def parse_number(text: str) -> float | None:
    """Return ``text`` as a finite float, or ``None`` when it is not one."""
    try:
        value = float(text.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_multiplier(text: str) -> float | None:
    """Parse a serving multiplier; an empty field means one serving."""
    if not text.strip():
        return 1.0
    return parse_number(text)
