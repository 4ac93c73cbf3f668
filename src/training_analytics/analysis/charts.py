"""
Chart preparation for workout streams.

Converts raw activity streams into rows keyed by elapsed time (and, for
rides, distance), computes axis domains from the full data, and downsamples
the rows to a point budget with LTTB.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from ..models.workouts import ActivityStreams
from ..utils.downsample import downsample_lttb
from ..utils.numbers import round_half_up

MAX_CHART_POINTS = 500

METRIC_KEYS = ("heart_rate", "speed_kmh", "power", "cadence", "altitude")


@dataclass
class ChartRow:
    """One sample prepared for plotting."""

    index: int
    timestamp: datetime
    time_seconds: int
    distance_km: float
    heart_rate: Optional[float] = None
    speed_kmh: Optional[float] = None
    power: Optional[float] = None
    cadence: Optional[float] = None
    altitude: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "timestamp": self.timestamp.isoformat(),
            "time_seconds": self.time_seconds,
            "distance_km": self.distance_km,
            "heart_rate": self.heart_rate,
            "speed_kmh": self.speed_kmh,
            "power": self.power,
            "cadence": self.cadence,
            "altitude": self.altitude,
        }


@dataclass
class PreparedChart:
    """Downsampled rows plus per-metric axis domains."""

    rows: List[ChartRow] = field(default_factory=list)
    domains: Dict[str, Tuple[int, int]] = field(default_factory=dict)
    available: List[str] = field(default_factory=list)
    x_axis: str = "time_seconds"
    total_points: int = 0

    def to_dict(self) -> dict:
        return {
            "rows": [r.to_dict() for r in self.rows],
            "domains": {k: list(v) for k, v in self.domains.items()},
            "available": list(self.available),
            "x_axis": self.x_axis,
            "total_points": self.total_points,
        }


def _is_cycling(workout_type: Optional[str]) -> bool:
    return bool(workout_type) and workout_type.lower() == "cycling"


def build_chart_rows(streams: ActivityStreams, workout_type: Optional[str] = None) -> List[ChartRow]:
    """
    Build one row per sample.

    Elapsed time is whole seconds since the first sample. For rides, distance
    is integrated from speed (m/s) over elapsed time wherever speed is present.
    Speed is shown in km/h; a zero reading is reported as None so stationary
    samples leave a gap in the speed line.
    """
    if not streams.timestamps:
        return []

    cycling = _is_cycling(workout_type)
    heart_rate = streams.stream("heart_rate")
    speed = streams.stream("speed")
    power = streams.stream("power")
    cadence = streams.stream("cadence")
    altitude = streams.stream("altitude")

    start = streams.timestamps[0]
    rows: List[ChartRow] = []
    distance_m = 0.0
    prev_seconds = 0

    for i, ts in enumerate(streams.timestamps):
        seconds = math.floor((ts - start).total_seconds())
        if cycling and i > 0 and speed[i] is not None:
            distance_m += speed[i] * (seconds - prev_seconds)
        prev_seconds = seconds

        rows.append(
            ChartRow(
                index=i,
                timestamp=ts,
                time_seconds=seconds,
                distance_km=distance_m / 1000,
                heart_rate=heart_rate[i],
                speed_kmh=speed[i] * 3.6 if speed[i] else None,
                power=power[i],
                cadence=cadence[i],
                altitude=altitude[i],
            )
        )

    return rows


def axis_domain(
    values: Iterable[Optional[float]],
    padding_fraction: float = 0.1,
    min_padding: int = 5,
) -> Tuple[int, int]:
    """
    Padded y-axis domain for a metric.

    The data range is widened to whole numbers and padded by
    ``padding_fraction`` of the range (at least ``min_padding``); the lower
    bound never goes below 0. Without any values the domain is (0, 100).
    """
    numbers = [v for v in values if v is not None]
    if not numbers:
        return 0, 100

    lo = math.floor(min(numbers))
    hi = math.ceil(max(numbers))
    padding = max(min_padding, round_half_up((hi - lo) * padding_fraction))
    return max(0, lo - padding), hi + padding


def prepare_chart(
    streams: ActivityStreams,
    workout_type: Optional[str] = None,
    max_points: int = MAX_CHART_POINTS,
) -> PreparedChart:
    """
    Prepare streams for plotting.

    Domains are computed from every sample before downsampling, so spikes
    dropped by LTTB still fit on the axis. Rows are downsampled on heart rate.
    """
    rows = build_chart_rows(streams, workout_type)
    if not rows:
        return PreparedChart()

    domains = {}
    available = []
    for key in METRIC_KEYS:
        values = [getattr(row, key) for row in rows]
        if any(v is not None for v in values):
            available.append(key)
        domains[key] = axis_domain(values)

    return PreparedChart(
        rows=downsample_lttb(rows, max_points, lambda row: row.heart_rate),
        domains=domains,
        available=available,
        x_axis="distance_km" if _is_cycling(workout_type) else "time_seconds",
        total_points=len(rows),
    )
