"""
Training analytics service.

Facade used by the presentation layer: it holds the athlete profile, the
zone table and the settings, and forwards every request to the pure
analytics functions with those values. Nothing is cached between calls, so
profile or settings changes take effect on the next call.
"""

from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence
import logging

from ..analysis.charts import PreparedChart, prepare_chart
from ..analysis.elevation import ElevationProfile, analyze_elevation
from ..analysis.segments import Segment, SegmentMode, default_segment_distance, split_track
from ..config import AnalyticsSettings
from ..metrics.fitness import (
    RecoveryAssessment,
    TrainingLoadSummary,
    assess_recovery,
    calculate_training_load,
)
from ..metrics.zones import (
    ZoneBoundary,
    ZoneTime,
    calculate_time_in_zones,
    validate_zones,
    zone_boundaries,
)
from ..models.athlete import DEFAULT_HR_ZONES, HRZone, UserProfile
from ..models.workouts import ActivityStreams, GpsPoint, WorkoutSummary
from ..utils.dates import DayBoundary, day_boundary, resolve_timezone
from .base import BaseService


class TrainingAnalyticsService(BaseService):
    """Compute load, readiness and per-workout analysis for one athlete."""

    def __init__(
        self,
        profile: Optional[UserProfile] = None,
        zones: Optional[Sequence[HRZone]] = None,
        settings: Optional[AnalyticsSettings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(settings=settings, logger=logger)
        self._profile = profile or UserProfile()
        self._zones = list(zones) if zones is not None else list(DEFAULT_HR_ZONES)
        validate_zones(self._zones)

    @property
    def profile(self) -> UserProfile:
        return self._profile

    @property
    def zones(self) -> List[HRZone]:
        return list(self._zones)

    @property
    def max_hr(self) -> int:
        """Max HR from the profile, else the configured default."""
        if self._profile.max_heart_rate or self._profile.age:
            return self._profile.estimated_max_hr
        return self.settings.default_max_hr

    def _effective_profile(self) -> UserProfile:
        return UserProfile(
            max_heart_rate=self.max_hr,
            resting_heart_rate=(
                self._profile.resting_heart_rate
                if self._profile.resting_heart_rate is not None
                else self.settings.default_resting_hr
            ),
            age=self._profile.age,
        )

    def _day_of(self) -> DayBoundary:
        return day_boundary(resolve_timezone(self.settings.timezone))

    # ------------------------------------------------------------------
    # Training load
    # ------------------------------------------------------------------

    def training_load(
        self,
        workouts: Iterable[WorkoutSummary],
        today: date,
    ) -> TrainingLoadSummary:
        """Training load snapshot with windows ending on ``today``."""
        workouts = list(workouts)
        summary = calculate_training_load(
            workouts,
            self._effective_profile(),
            today,
            day_of=self._day_of(),
            atl_days=self.settings.atl_days,
            ctl_days=self.settings.ctl_days,
        )
        self.logger.debug(
            f"Training load from {len(workouts)} workouts: "
            f"ATL={summary.atl} CTL={summary.ctl} TSB={summary.tsb}"
        )
        return summary

    def recovery(
        self,
        workouts: Iterable[WorkoutSummary],
        now: datetime,
    ) -> RecoveryAssessment:
        """Readiness assessment at ``now``."""
        assessment = assess_recovery(
            list(workouts),
            self._effective_profile(),
            now,
            day_of=self._day_of(),
            atl_days=self.settings.atl_days,
            ctl_days=self.settings.ctl_days,
            recent_workout_hours=self.settings.recent_workout_hours,
        )
        self.logger.debug(
            f"Recovery: status={assessment.status.status.value} "
            f"readiness={assessment.readiness_score}"
        )
        return assessment

    # ------------------------------------------------------------------
    # HR zones
    # ------------------------------------------------------------------

    def zone_boundaries(self) -> List[ZoneBoundary]:
        return zone_boundaries(self._zones, self.max_hr)

    def zone_distribution(self, streams: ActivityStreams) -> List[ZoneTime]:
        """Time in each HR zone for one workout."""
        if not streams.has_heart_rate:
            self.logger.debug("No heart rate stream; zone distribution is empty")
        return calculate_time_in_zones(
            streams.heart_rate_series(),
            self._zones,
            self.max_hr,
            gap_threshold_seconds=self.settings.hr_gap_threshold_seconds,
        )

    # ------------------------------------------------------------------
    # Track analysis
    # ------------------------------------------------------------------

    def elevation(self, points: Sequence[GpsPoint]) -> ElevationProfile:
        return analyze_elevation(
            points,
            smoothing_radius=self.settings.grade_smoothing_radius,
            min_window_m=self.settings.min_grade_window_meters,
            target_window_m=self.settings.target_grade_window_meters,
        )

    def segments(
        self,
        points: Sequence[GpsPoint],
        streams: Optional[ActivityStreams] = None,
        mode: SegmentMode = SegmentMode.DISTANCE,
        workout_type: Optional[str] = None,
        target_distance_m: Optional[float] = None,
    ) -> List[Segment]:
        """Split a track; the distance defaults to the sport's usual split length."""
        if target_distance_m is None:
            target_distance_m = default_segment_distance(workout_type)
        heart_rate = streams.heart_rate_series() if streams is not None else None
        return split_track(
            points,
            heart_rate,
            mode=mode,
            target_distance_m=target_distance_m,
            segment_duration_seconds=self.settings.segment_duration_seconds,
            partial_fraction=self.settings.partial_segment_fraction,
            noise_floor_m=self.settings.segment_noise_floor_meters,
        )

    def chart(
        self,
        streams: ActivityStreams,
        workout_type: Optional[str] = None,
    ) -> PreparedChart:
        return prepare_chart(streams, workout_type, max_points=self.settings.max_chart_points)
