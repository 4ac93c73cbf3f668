"""Input and configuration models for the analytics engine."""

from .athlete import DEFAULT_HR_ZONES, HRZone, UserProfile
from .workouts import (
    ActivityStreams,
    GpsPoint,
    Timestamp,
    TimeSeries,
    WorkoutSummary,
    seconds_between,
)

__all__ = [
    "DEFAULT_HR_ZONES",
    "HRZone",
    "UserProfile",
    "ActivityStreams",
    "GpsPoint",
    "Timestamp",
    "TimeSeries",
    "WorkoutSummary",
    "seconds_between",
]
