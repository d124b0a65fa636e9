"""DTO types returned by the analysis helpers.

DTOs are plain data containers used to transport computed values to the UI.
They intentionally avoid any Django/ORM dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Literal

HealthLevel = Literal["red", "yellow", "green"]


@dataclass(frozen=True, slots=True)
class PieSlice:
    """A single pie-chart slice input.

    Attributes:
        percent: Fraction of the full circle in [0, 1].
        label: Optional display label (e.g. a token ticker).
        color: Optional CSS color used to fill the slice.
    """

    percent: float
    label: str | None = None
    color: str | None = None


@dataclass(frozen=True, slots=True)
class PieSlicePath:
    """SVG path data for one pie-chart slice.

    Attributes:
        path_data: SVG path (`M`, `A`, `L` commands) tracing the sector on a
            unit circle centered at the origin.
        percent: Originating slice percent.
        label: Originating slice label.
        color: Originating slice color.
    """

    path_data: str
    percent: float
    label: str | None = None
    color: str | None = None


@dataclass(frozen=True)
class SeriesPoint:
    """A time-series point with any number of numeric fields.

    Attributes:
        timestamp: Epoch milliseconds used as the x-axis.
        values: Mapping of field name -> numeric value (e.g. `IV`, `LTV`).
    """

    timestamp: float
    values: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class HealthGauge:
    """Display-ready account health.

    Attributes:
        health: Raw health ratio.
        percent: Position on the gauge in [0, 100].
        label: Short label (`"3+"` above the gauge maximum).
        level: Color tier for the ratio.
    """

    health: float
    percent: float
    label: str
    level: HealthLevel
