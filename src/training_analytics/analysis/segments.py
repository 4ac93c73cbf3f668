"""
Split analysis for GPS tracks.

Cuts a track into fixed-distance (e.g. per-km) or fixed-time segments and
reports pace, speed, heart rate and elevation for each one.
"""

import logging
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence

from ..exceptions import InvalidParameterError
from ..models.workouts import GpsPoint, TimeSeries, seconds_between
from ..utils.dates import align_to
from ..utils.geo import haversine_distance_m
from ..utils.numbers import round_half_up
from .elevation import calculate_gain_loss

logger = logging.getLogger(__name__)

SEGMENT_DURATION_SECONDS = 300.0
PARTIAL_SEGMENT_FRACTION = 0.1
SEGMENT_NOISE_FLOOR_M = 50.0

CYCLING_SEGMENT_DISTANCE_M = 5000.0
DEFAULT_SEGMENT_DISTANCE_M = 1000.0


class SegmentMode(str, Enum):
    """How a track is split."""
    DISTANCE = "distance"
    TIME = "time"


@dataclass
class Segment:
    """One split of a track."""

    index: int  # 1-based
    start_index: int
    end_index: int
    distance_m: float
    duration_seconds: float
    avg_speed_mps: float
    avg_heart_rate: Optional[int]
    elevation_gain_m: int
    elevation_loss_m: int
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    pace_sec_per_km: float  # 0 when speed is 0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "index": self.index,
            "start_index": self.start_index,
            "end_index": self.end_index,
            "distance_m": self.distance_m,
            "duration_seconds": self.duration_seconds,
            "avg_speed_mps": self.avg_speed_mps,
            "avg_heart_rate": self.avg_heart_rate,
            "elevation_gain_m": self.elevation_gain_m,
            "elevation_loss_m": self.elevation_loss_m,
            "start_time": self.start_time.isoformat() if self.start_time else None,
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "pace_sec_per_km": self.pace_sec_per_km,
        }


def default_segment_distance(workout_type: Optional[str]) -> float:
    """Default split length: 5 km for rides, 1 km for everything else."""
    if workout_type and workout_type.lower() == "cycling":
        return CYCLING_SEGMENT_DISTANCE_M
    return DEFAULT_SEGMENT_DISTANCE_M


def average_heart_rate(
    heart_rate: Optional[TimeSeries],
    start: Optional[datetime],
    end: Optional[datetime],
) -> Optional[int]:
    """
    Mean of the non-null HR samples timestamped within ``[start, end]``.

    Bounds are converted to the series' naive or aware convention first
    (naive meaning host-local time). Returns None without a series, without
    both bounds, or when no reading falls inside the interval.
    """
    if heart_rate is None or not len(heart_rate) or start is None or end is None:
        return None

    reference = heart_rate.timestamps[0]
    if isinstance(reference, datetime):
        start = align_to(start, reference)
        end = align_to(end, reference)

    lo = bisect_left(heart_rate.timestamps, start)
    hi = bisect_right(heart_rate.timestamps, end)
    readings = [v for v in heart_rate.values[lo:hi] if v is not None]
    if not readings:
        return None
    return round_half_up(sum(readings) / len(readings))


def _build_segment(
    points: Sequence[GpsPoint],
    heart_rate: Optional[TimeSeries],
    number: int,
    start_index: int,
    end_index: int,
    distance_m: float,
    duration_seconds: float,
) -> Segment:
    gain, loss = calculate_gain_loss([p.altitude for p in points[start_index:end_index + 1]])

    avg_speed = distance_m / duration_seconds if duration_seconds > 0 else 0.0
    pace = 1000 / avg_speed if avg_speed > 0 else 0.0

    start_time = points[start_index].timestamp
    end_time = points[end_index].timestamp

    return Segment(
        index=number,
        start_index=start_index,
        end_index=end_index,
        distance_m=distance_m,
        duration_seconds=duration_seconds,
        avg_speed_mps=avg_speed,
        avg_heart_rate=average_heart_rate(heart_rate, start_time, end_time),
        elevation_gain_m=round_half_up(gain),
        elevation_loss_m=round_half_up(loss),
        start_time=start_time,
        end_time=end_time,
        pace_sec_per_km=pace,
    )


def split_track(
    points: Sequence[GpsPoint],
    heart_rate: Optional[TimeSeries] = None,
    mode: SegmentMode = SegmentMode.DISTANCE,
    target_distance_m: float = DEFAULT_SEGMENT_DISTANCE_M,
    segment_duration_seconds: float = SEGMENT_DURATION_SECONDS,
    partial_fraction: float = PARTIAL_SEGMENT_FRACTION,
    noise_floor_m: float = SEGMENT_NOISE_FLOOR_M,
) -> List[Segment]:
    """
    Split a GPS track into segments.

    Distance accrues between consecutive points that both have coordinates;
    duration accrues whenever both points have timestamps. A segment closes
    at the first point where the accumulated distance (distance mode) or
    duration (time mode) reaches the target.

    The leftover after the last split becomes a final segment when it covers
    more than ``partial_fraction`` of the target (or nothing was split at
    all) and its distance exceeds ``noise_floor_m``.

    Args:
        points: GPS track in chronological order
        heart_rate: Optional HR series for per-segment averages
        mode: Split by distance or by time
        target_distance_m: Segment length in distance mode
        segment_duration_seconds: Segment length in time mode
        partial_fraction: Minimum share of the target for the trailing segment
        noise_floor_m: Minimum distance for the trailing segment

    Returns:
        Segments in track order, numbered from 1

    Raises:
        InvalidParameterError: if the active target is not positive
    """
    mode = SegmentMode(mode)
    if mode == SegmentMode.DISTANCE and target_distance_m <= 0:
        raise InvalidParameterError(
            "Segment distance must be positive", parameter="target_distance_m"
        )
    if mode == SegmentMode.TIME and segment_duration_seconds <= 0:
        raise InvalidParameterError(
            "Segment duration must be positive", parameter="segment_duration_seconds"
        )

    if len(points) < 2:
        return []

    result: List[Segment] = []
    start_index = 0
    distance = 0.0
    duration = 0.0

    for i in range(1, len(points)):
        prev = points[i - 1]
        curr = points[i]

        if prev.has_position and curr.has_position:
            distance += haversine_distance_m(prev.lat, prev.lon, curr.lat, curr.lon)
        if prev.timestamp is not None and curr.timestamp is not None:
            duration += seconds_between(prev.timestamp, curr.timestamp)

        if mode == SegmentMode.DISTANCE:
            should_split = distance >= target_distance_m
        else:
            should_split = duration >= segment_duration_seconds

        if should_split:
            result.append(
                _build_segment(points, heart_rate, len(result) + 1, start_index, i, distance, duration)
            )
            start_index = i
            distance = 0.0
            duration = 0.0

    if mode == SegmentMode.DISTANCE:
        significant = distance > target_distance_m * partial_fraction
    else:
        significant = duration > segment_duration_seconds * partial_fraction

    if (significant or not result) and distance > noise_floor_m:
        result.append(
            _build_segment(
                points, heart_rate, len(result) + 1,
                start_index, len(points) - 1, distance, duration,
            )
        )

    logger.debug(f"Split {len(points)} points into {len(result)} {mode.value} segments")
    return result


def find_fastest_segment(segments: Sequence[Segment]) -> Optional[Segment]:
    """Segment with the lowest pace, ignoring zero-pace segments."""
    candidates = [s for s in segments if s.pace_sec_per_km > 0]
    if not candidates:
        return None
    return min(candidates, key=lambda s: s.pace_sec_per_km)


def find_slowest_segment(segments: Sequence[Segment]) -> Optional[Segment]:
    """Segment with the highest pace."""
    if not segments:
        return None
    return max(segments, key=lambda s: s.pace_sec_per_km)
