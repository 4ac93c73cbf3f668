"""Training load, readiness and workout track analytics."""

from training_analytics.config import AnalyticsSettings, get_settings
from training_analytics.exceptions import (
    ConfigurationError,
    InvalidParameterError,
    TrainingAnalyticsError,
    ZoneConfigurationError,
)
from training_analytics.models import (
    DEFAULT_HR_ZONES,
    ActivityStreams,
    GpsPoint,
    HRZone,
    TimeSeries,
    UserProfile,
    WorkoutSummary,
)
from training_analytics.services import TrainingAnalyticsService

__version__ = "0.1.0"

__all__ = [
    "AnalyticsSettings",
    "get_settings",
    "ConfigurationError",
    "InvalidParameterError",
    "TrainingAnalyticsError",
    "ZoneConfigurationError",
    "DEFAULT_HR_ZONES",
    "ActivityStreams",
    "GpsPoint",
    "HRZone",
    "TimeSeries",
    "UserProfile",
    "WorkoutSummary",
    "TrainingAnalyticsService",
]
