"""Configuration settings for the training analytics engine."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalyticsSettings(BaseSettings):
    """Analytics defaults loaded from environment variables.

    Every heuristic constant used by the analyzers lives here so that it can
    be tuned per deployment (``TRAINING_ANALYTICS_<NAME>``) instead of being
    buried in the algorithms.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRAINING_ANALYTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Athlete fallbacks
    default_max_hr: int = Field(190, gt=0)
    default_resting_hr: int = Field(60, ge=0)

    # HR zones: pairs further apart than this are sensor dropouts
    hr_gap_threshold_seconds: float = Field(60.0, gt=0)

    # Elevation
    grade_smoothing_radius: int = Field(5, ge=0)
    min_grade_window_meters: float = Field(30.0, gt=0)
    target_grade_window_meters: float = Field(100.0, gt=0)

    # Segments
    segment_duration_seconds: float = Field(300.0, gt=0)
    partial_segment_fraction: float = Field(0.1, ge=0)
    segment_noise_floor_meters: float = Field(50.0, ge=0)

    # Training load windows (calendar days)
    atl_days: int = Field(7, gt=0)
    ctl_days: int = Field(42, gt=0)
    recent_workout_hours: float = Field(12.0, ge=0)

    # Charts
    max_chart_points: int = Field(500, ge=2)

    # IANA timezone used for calendar-day bucketing; None = host local time
    timezone: Optional[str] = None


@lru_cache
def get_settings() -> AnalyticsSettings:
    """Get cached settings instance."""
    return AnalyticsSettings()
