"""Unit tests for account health display helpers."""

from __future__ import annotations

import pytest

from analysis.dto import HealthGauge
from analysis.health import health_gauge, health_label, health_level, health_percent

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("health", "expected"),
    [
        (0.1, 0.0),
        (0.5, 0.0),
        (1.75, 50.0),
        (3.0, 100.0),
        (10.0, 100.0),
    ],
)
def test_health_percent_clamps_to_gauge_range(health: float, expected: float) -> None:
    """Health maps linearly onto the gauge and clamps at both ends."""

    assert health_percent(health) == pytest.approx(expected)


def test_health_label() -> None:
    """Labels show two decimals and cap above the gauge maximum."""

    assert health_label(3.5) == "3+"
    assert health_label(3.0) == "3.00"
    assert health_label(1.125) == "1.13"
    assert health_label(0.9) == "0.90"


@pytest.mark.parametrize(
    ("health", "expected"),
    [
        (0.8, "red"),
        (1.02, "red"),
        (1.2, "yellow"),
        (1.25, "yellow"),
        (1.3, "green"),
    ],
)
def test_health_level(health: float, expected: str) -> None:
    """Color tiers switch at 1.02 and 1.25."""

    assert health_level(health) == expected


def test_health_gauge_bundles_display_values() -> None:
    """The gauge DTO carries every display value for a ratio."""

    gauge = health_gauge(2.5)
    assert isinstance(gauge, HealthGauge)
    assert gauge.health == 2.5
    assert gauge.percent == pytest.approx(80.0)
    assert gauge.label == "2.50"
    assert gauge.level == "green"
