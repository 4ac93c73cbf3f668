"""
Elevation profile analysis.

Turns a GPS track into a distance/altitude/grade series plus summary
statistics. Grades are smoothed with a centered moving average, and the
reported max grade is measured over a distance window so that two fixes
a few meters apart cannot produce a spurious spike.

Cumulative distance accrues between every pair of consecutive points with
coordinates, including points that have no altitude and are therefore not
on the profile. Skipping those steps would undercount the ground between
retained points and inflate their grade, so this deliberately differs from
counting only altitude-bearing steps.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..models.workouts import GpsPoint
from ..utils.geo import haversine_distance_m
from ..utils.numbers import round_half_up, round_to_tenth

logger = logging.getLogger(__name__)

GRADE_SMOOTHING_RADIUS = 5
MIN_GRADE_WINDOW_M = 30.0
TARGET_GRADE_WINDOW_M = 100.0


@dataclass
class ElevationPoint:
    """One retained track point on the elevation profile."""

    distance_m: float  # cumulative
    altitude: float
    grade: float  # percent
    index: int  # position in the input track

    def to_dict(self) -> dict:
        return {
            "distance_m": self.distance_m,
            "altitude": self.altitude,
            "grade": self.grade,
            "index": self.index,
        }


@dataclass
class ElevationStats:
    """Summary statistics of an elevation profile."""

    min_altitude: int = 0
    max_altitude: int = 0
    total_gain: int = 0
    total_loss: int = 0
    avg_grade: float = 0.0
    max_grade: float = 0.0

    @property
    def altitude_range(self) -> int:
        return self.max_altitude - self.min_altitude

    def to_dict(self) -> dict:
        return {
            "min_altitude": self.min_altitude,
            "max_altitude": self.max_altitude,
            "total_gain": self.total_gain,
            "total_loss": self.total_loss,
            "avg_grade": self.avg_grade,
            "max_grade": self.max_grade,
        }


@dataclass
class AxisBounds:
    """Padded, step-aligned altitude axis range."""

    min: int
    max: int

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


@dataclass
class ElevationProfile:
    """Elevation series with statistics; empty when the track has no altitude."""

    points: List[ElevationPoint] = field(default_factory=list)
    stats: ElevationStats = field(default_factory=ElevationStats)
    bounds: Optional[AxisBounds] = None

    @property
    def is_empty(self) -> bool:
        return len(self.points) < 2

    def to_dict(self) -> dict:
        return {
            "points": [p.to_dict() for p in self.points],
            "stats": self.stats.to_dict(),
            "bounds": self.bounds.to_dict() if self.bounds else None,
        }


def build_elevation_points(points: Sequence[GpsPoint]) -> List[ElevationPoint]:
    """
    Build the raw (unsmoothed) elevation series.

    Distance accrues between consecutive points that both have coordinates.
    Only points with an altitude are retained; the grade of a retained point
    is measured against the previously retained one, and is 0 when no
    distance separates them.
    """
    result: List[ElevationPoint] = []
    cumulative = 0.0

    for i, point in enumerate(points):
        if i > 0:
            prev = points[i - 1]
            if prev.has_position and point.has_position:
                cumulative += haversine_distance_m(prev.lat, prev.lon, point.lat, point.lon)

        if point.altitude is None:
            continue

        grade = 0.0
        if result:
            last = result[-1]
            distance_diff = cumulative - last.distance_m
            if distance_diff > 0:
                grade = (point.altitude - last.altitude) / distance_diff * 100

        result.append(
            ElevationPoint(
                distance_m=cumulative,
                altitude=point.altitude,
                grade=round_to_tenth(grade),
                index=i,
            )
        )

    return result


def smooth_grades(grades: Sequence[float], radius: int = GRADE_SMOOTHING_RADIUS) -> List[float]:
    """Centered moving average of up to ``2 * radius + 1`` grades, clamped at the ends."""
    n = len(grades)
    smoothed = []
    for i in range(n):
        window = grades[max(0, i - radius):min(n, i + radius + 1)]
        smoothed.append(round_to_tenth(sum(window) / len(window)))
    return smoothed


def calculate_gain_loss(altitudes: Sequence[Optional[float]]) -> Tuple[float, float]:
    """
    Sum positive and negative consecutive altitude deltas.

    Pairs where either altitude is missing are ignored.

    Returns:
        (gain, loss) in meters, both non-negative and unrounded
    """
    gain = 0.0
    loss = 0.0
    for prev, curr in zip(altitudes, altitudes[1:]):
        if prev is None or curr is None:
            continue
        diff = curr - prev
        if diff > 0:
            gain += diff
        else:
            loss += abs(diff)
    return gain, loss


def max_sustained_grade(
    points: Sequence[ElevationPoint],
    min_window_m: float = MIN_GRADE_WINDOW_M,
    target_window_m: float = TARGET_GRADE_WINDOW_M,
) -> float:
    """
    Steepest absolute grade measured over a distance window.

    From every start point, the window ends at the first point at least
    ``target_window_m`` away, or at the first point at least
    ``min_window_m`` away if the track runs out first. Start points with no
    point ``min_window_m`` ahead end the scan.

    Both window ends only move forward as the start advances, so this is a
    single linear pass.
    """
    n = len(points)
    peak = 0.0
    j = 0
    k = 0

    for i in range(n - 1):
        origin = points[i].distance_m

        j = max(j, i + 1)
        while j < n and points[j].distance_m - origin < min_window_m:
            j += 1
        if j >= n:
            break

        k = max(k, j)
        while k < n and points[k].distance_m - origin < target_window_m:
            k += 1

        end = k if k < n else j
        distance_diff = points[end].distance_m - origin
        if distance_diff > 0:
            grade = abs((points[end].altitude - points[i].altitude) / distance_diff * 100)
            if grade > peak:
                peak = grade

    return peak


def elevation_axis_bounds(min_altitude: float, max_altitude: float) -> AxisBounds:
    """
    Padded altitude axis for display.

    Padding is 15% of the range (at least 20 m); the padded bounds are then
    rounded outward to 50 m steps for ranges over 300 m, 25 m over 120 m,
    10 m otherwise.
    """
    altitude_range = max_altitude - min_altitude
    padding = max(20, round_half_up(altitude_range * 0.15))

    if altitude_range > 300:
        step = 50
    elif altitude_range > 120:
        step = 25
    else:
        step = 10

    return AxisBounds(
        min=int(math.floor((min_altitude - padding) / step) * step),
        max=int(math.ceil((max_altitude + padding) / step) * step),
    )


def analyze_elevation(
    points: Sequence[GpsPoint],
    smoothing_radius: int = GRADE_SMOOTHING_RADIUS,
    min_window_m: float = MIN_GRADE_WINDOW_M,
    target_window_m: float = TARGET_GRADE_WINDOW_M,
) -> ElevationProfile:
    """
    Analyze the elevation of a GPS track.

    Args:
        points: GPS track in chronological order
        smoothing_radius: Grade moving-average radius (samples each side)
        min_window_m: Shortest distance window for max grade
        target_window_m: Preferred distance window for max grade

    Returns:
        ElevationProfile; empty when fewer than two points have altitude
    """
    series = build_elevation_points(points)
    if len(series) < 2:
        logger.debug(f"No elevation profile: {len(series)} of {len(points)} points have altitude")
        return ElevationProfile()

    smoothed = smooth_grades([p.grade for p in series], smoothing_radius)
    for point, grade in zip(series, smoothed):
        point.grade = grade

    altitudes = [p.altitude for p in series]
    gain, loss = calculate_gain_loss(altitudes)

    stats = ElevationStats(
        min_altitude=round_half_up(min(altitudes)),
        max_altitude=round_half_up(max(altitudes)),
        total_gain=round_half_up(gain),
        total_loss=round_half_up(loss),
        avg_grade=round_to_tenth(sum(smoothed) / len(smoothed)),
        max_grade=round_to_tenth(max_sustained_grade(series, min_window_m, target_window_m)),
    )

    return ElevationProfile(
        points=series,
        stats=stats,
        bounds=elevation_axis_bounds(stats.min_altitude, stats.max_altitude),
    )
