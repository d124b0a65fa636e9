"""Account health helpers for borrow dashboards.

Health is a measure of how close an account is to liquidation; at or below
1.0 the account may be liquidated.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Final

from .dto import HealthGauge, HealthLevel
from .numbers import round_places

MIN_HEALTH: Final = 0.5
MAX_HEALTH: Final = 3.0

RED_HEALTH_CEILING: Final = 1.02
YELLOW_HEALTH_CEILING: Final = 1.25


def health_percent(health: float) -> float:
    """Map a health ratio onto a 0-100 gauge, clamped to [MIN_HEALTH, MAX_HEALTH]."""

    bounded = max(min(health, MAX_HEALTH), MIN_HEALTH)
    return (bounded - MIN_HEALTH) / (MAX_HEALTH - MIN_HEALTH) * 100


def health_label(health: float) -> str:
    """Return `3+` above the gauge maximum, otherwise the ratio with two decimals."""

    if health > MAX_HEALTH:
        return f"{MAX_HEALTH:g}+"
    return f"{round_places(Decimal(health), 2):.2f}"


def health_level(health: float) -> HealthLevel:
    if health <= RED_HEALTH_CEILING:
        return "red"
    if health <= YELLOW_HEALTH_CEILING:
        return "yellow"
    return "green"


def health_gauge(health: float) -> HealthGauge:
    """Build the display-ready gauge for a health ratio."""

    return HealthGauge(
        health=health,
        percent=health_percent(health),
        label=health_label(health),
        level=health_level(health),
    )
