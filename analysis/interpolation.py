"""Resampling of irregular time series for graph display.

Borrow graphs receive points at whatever cadence the indexer produced them.
This module resamples a trailing window of those points onto evenly spaced
timestamps using linear interpolation, so charts render a fixed number of
points regardless of the source density.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from .dto import SeriesPoint

logger = logging.getLogger(__name__)

MILLIS_PER_DAY = 24 * 60 * 60 * 1000


def interpolate_point(a: SeriesPoint, b: SeriesPoint, timestamp: float) -> SeriesPoint:
    """Linearly interpolate every shared field between two points.

    Args:
        a: Point at or before `timestamp`.
        b: Point at or after `timestamp`.
        timestamp: Epoch milliseconds of the desired point.

    Returns:
        A new point at `timestamp`. Fields missing from either input are
        omitted. When `a` and `b` share a timestamp, `b`'s values are used.
    """

    delta_t = b.timestamp - a.timestamp
    values: dict[str, float] = {}
    for key, a_value in a.values.items():
        if key not in b.values:
            continue
        b_value = b.values[key]
        if delta_t == 0:
            values[key] = b_value
            continue
        slope = (b_value - a_value) / delta_t
        values[key] = slope * (timestamp - a.timestamp) + a_value
    return SeriesPoint(timestamp=timestamp, values=values)


def _sorted_unique(points: Iterable[SeriesPoint]) -> list[SeriesPoint]:
    """Sort by timestamp, keeping the later input point when timestamps tie."""

    unique: list[SeriesPoint] = []
    for point in sorted(points, key=lambda p: p.timestamp):
        if unique and unique[-1].timestamp == point.timestamp:
            unique[-1] = point
        else:
            unique.append(point)
    return unique


def interpolate_series(
    points: Iterable[SeriesPoint],
    window_ms: float,
    target_count: int,
    *,
    now_ms: float | None = None,
) -> tuple[SeriesPoint, ...]:
    """Resample the trailing window of a series onto evenly spaced points.

    Args:
        points: Source points in any order.
        window_ms: Trailing window length; points older than `now - window_ms`
            are ignored.
        target_count: Number of evenly spaced samples to produce.
        now_ms: Reference "now" in epoch milliseconds. Defaults to the wall clock.

    Returns:
        Up to `target_count` points spaced evenly from the first in-window
        timestamp (inclusive) toward the last timestamp (exclusive). An empty
        tuple when fewer than two points fall in the window.
    """

    if window_ms < 0:
        raise ValueError("window_ms must be >= 0")
    if target_count <= 0:
        return ()
    if now_ms is None:
        now_ms = time.time() * 1000

    ordered = _sorted_unique(points)
    start_idx = next(
        (idx for idx, point in enumerate(ordered) if now_ms - point.timestamp <= window_ms),
        None,
    )
    end_idx = len(ordered) - 1
    if start_idx is None or start_idx == end_idx:
        logger.debug("Not enough points in the trailing window to interpolate (points=%s).", len(ordered))
        return ()

    t0 = ordered[start_idx].timestamp
    t1 = ordered[end_idx].timestamp
    dt = (t1 - t0) / target_count

    interpolated: list[SeriesPoint] = []
    idx = start_idx
    for step in range(target_count):
        t = t0 + step * dt
        while idx + 1 < end_idx and t > ordered[idx + 1].timestamp:
            idx += 1
        interpolated.append(interpolate_point(ordered[idx], ordered[idx + 1], t))
    return tuple(interpolated)
