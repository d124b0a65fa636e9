"""Pie-chart slice geometry.

Slices are drawn on a unit circle centered at the origin, starting at angle 0
and proceeding in input order. Each slice becomes an SVG path that moves to the
start of its arc, sweeps to the end, and closes back to the center.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from html import escape
from typing import Final

from .dto import PieSlice, PieSlicePath

PIE_CHART_HOVER_GROWTH: Final = 1.05


def coordinates_for_percent(percent: float) -> tuple[float, float]:
    """Return the unit-circle point at a fraction of a full turn."""

    return math.cos(2 * math.pi * percent), math.sin(2 * math.pi * percent)


def pie_slice_paths(slices: Sequence[PieSlice]) -> tuple[PieSlicePath, ...]:
    """Convert ordered slices into SVG sector paths.

    Args:
        slices: Slices in drawing order. Percents are expected to sum to at
            most 1; a smaller total leaves the circle open after the last slice.

    Returns:
        One PieSlicePath per input slice, in the same order.
    """

    paths: list[PieSlicePath] = []
    cumulative_percent = 0.0
    for pie_slice in slices:
        start_x, start_y = coordinates_for_percent(cumulative_percent)
        cumulative_percent += pie_slice.percent
        end_x, end_y = coordinates_for_percent(cumulative_percent)
        # Slices over half the circle take the long way around.
        large_arc_flag = 1 if pie_slice.percent > 0.5 else 0

        path_data = " ".join(
            (
                f"M {start_x} {start_y}",
                f"A 1 1 0 {large_arc_flag} 1 {end_x} {end_y}",
                "L 0 0",
            )
        )
        paths.append(
            PieSlicePath(
                path_data=path_data,
                percent=pie_slice.percent,
                label=pie_slice.label,
                color=pie_slice.color,
            )
        )
    return tuple(paths)


def render_pie_chart_svg(paths: Sequence[PieSlicePath], *, hover_growth: float = PIE_CHART_HOVER_GROWTH) -> str:
    """Wrap slice paths in a standalone SVG document.

    Args:
        paths: Slice paths from `pie_slice_paths`.
        hover_growth: Scale applied to a slice while hovered.

    Returns:
        SVG markup with a `-1 -1 2 2` view box and one `<path>` per slice.
    """

    lines = [
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="-1 -1 2 2" overflow="visible">',
        f"<style>path{{transition:transform 0.15s ease-in}}path:hover{{transform:scale({hover_growth})}}</style>",
    ]
    for path in paths:
        fill = escape(path.color or "transparent", quote=True)
        title = f"<title>{escape(path.label)}</title>" if path.label else ""
        lines.append(f'<path d="{path.path_data}" fill="{fill}">{title}</path>')
    lines.append("</svg>")
    return "\n".join(lines)
