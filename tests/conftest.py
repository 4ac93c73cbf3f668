"""Pytest configuration and fixtures."""

import math
from datetime import datetime, timedelta
from typing import Callable, List, Optional

import pytest

from training_analytics.config import AnalyticsSettings
from training_analytics.models import GpsPoint, UserProfile, WorkoutSummary

# Meters per degree of latitude on the haversine sphere
METERS_PER_DEGREE = 6371000.0 * math.pi / 180

TRACK_START = datetime(2024, 3, 15, 8, 0, 0)


@pytest.fixture
def profile() -> UserProfile:
    """Athlete with max HR 190 and resting HR 60."""
    return UserProfile(max_heart_rate=190, resting_heart_rate=60)


@pytest.fixture
def settings() -> AnalyticsSettings:
    """Settings with defaults only, independent of the environment."""
    return AnalyticsSettings(_env_file=None)


@pytest.fixture
def make_track() -> Callable[..., List[GpsPoint]]:
    """
    Build a straight north-bound track.

    Points are ``spacing_m`` apart and ``interval_s`` seconds apart;
    ``altitude_fn`` maps the point index to its altitude (or None).
    """

    def _make(
        count: int,
        spacing_m: float = 26.0,
        interval_s: float = 10.0,
        altitude_fn: Optional[Callable[[int], Optional[float]]] = None,
        start: datetime = TRACK_START,
    ) -> List[GpsPoint]:
        step = spacing_m / METERS_PER_DEGREE
        return [
            GpsPoint(
                timestamp=start + timedelta(seconds=i * interval_s),
                lat=45.0 + i * step,
                lon=7.0,
                altitude=altitude_fn(i) if altitude_fn else None,
            )
            for i in range(count)
        ]

    return _make


@pytest.fixture
def make_workout() -> Callable[..., WorkoutSummary]:
    """Build a workout starting ``days_ago`` days before 2024-03-15 08:00."""

    def _make(
        days_ago: int = 0,
        duration_seconds: Optional[float] = 3600,
        avg_heart_rate: Optional[float] = 150,
        hour: int = 8,
    ) -> WorkoutSummary:
        start = datetime(2024, 3, 15, hour, 0, 0) - timedelta(days=days_ago)
        return WorkoutSummary(
            start_time=start,
            duration_seconds=duration_seconds,
            avg_heart_rate=avg_heart_rate,
            workout_type="running",
        )

    return _make
