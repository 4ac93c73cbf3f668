"""
Largest-Triangle-Three-Buckets (LTTB) downsampling.

Reduces a time series to a fixed point budget while keeping its visual
shape: the first and last points are always retained, and from every
interior bucket the point forming the largest triangle with the previously
kept point and the next bucket's centroid is selected.
"""

import math
from typing import Callable, List, Optional, Sequence, TypeVar

from ..exceptions import InvalidParameterError

T = TypeVar("T")

ValueSelector = Callable[[T], Optional[float]]


def _numeric(value: object) -> Optional[float]:
    """Return ``value`` as float when it is a real number, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return None
        return float(value)
    return None


def downsample_lttb(
    series: Sequence[T],
    target_count: int,
    value_selector: ValueSelector,
) -> List[T]:
    """
    Downsample ``series`` to ``target_count`` points using LTTB.

    The x coordinate of every point is its index in the input, the y
    coordinate is ``value_selector(point)``. Points whose value is None are
    ignored for centroid and area computation.

    Args:
        series: Chronologically ordered points
        target_count: Maximum number of points to keep
        value_selector: Maps a point to its numeric value (or None)

    Returns:
        ``series`` unchanged (as a list) when it already fits the budget,
        otherwise exactly ``target_count`` points.

    Raises:
        InvalidParameterError: if reduction is needed and target_count < 2
    """
    n = len(series)
    if n <= target_count:
        return list(series)
    if target_count < 2:
        raise InvalidParameterError(
            f"Cannot downsample {n} points to {target_count}; need at least 2",
            parameter="target_count",
        )

    values = [_numeric(value_selector(point)) for point in series]

    sampled_indices = [0]
    bucket_count = target_count - 2

    if bucket_count > 0:
        bucket_size = (n - 2) / bucket_count

        for i in range(bucket_count):
            bucket_start = math.floor(i * bucket_size) + 1
            bucket_end = math.floor((i + 1) * bucket_size) + 1
            next_start = bucket_end
            next_end = min(math.floor((i + 2) * bucket_size) + 1, n)

            # Centroid of the next bucket's valid points
            avg_x = 0.0
            avg_y = 0.0
            count = 0
            for j in range(next_start, next_end):
                val = values[j]
                if val is not None:
                    avg_x += j
                    avg_y += val
                    count += 1
            if count > 0:
                avg_x /= count
                avg_y /= count

            prev_x = sampled_indices[-1]
            prev_y = values[prev_x] or 0.0

            max_area = -1.0
            max_area_index = bucket_start
            for j in range(bucket_start, min(bucket_end, n)):
                val = values[j]
                if val is None:
                    continue
                area = abs(
                    (prev_x - avg_x) * (val - prev_y)
                    - (prev_x - j) * (avg_y - prev_y)
                ) / 2
                if area > max_area:
                    max_area = area
                    max_area_index = j

            sampled_indices.append(max_area_index)

    sampled_indices.append(n - 1)
    return [series[i] for i in sampled_indices]
