"""Training metrics calculations."""

from .load import calculate_trimp, calculate_tss, hr_reserve_fraction
from .zones import (
    ZoneBoundary,
    ZoneTime,
    calculate_time_in_zones,
    get_zone_for_hr,
    validate_zones,
    zone_boundaries,
)
from .fitness import (
    DailyLoad,
    RecoveryAssessment,
    RecoveryStatus,
    RecoveryStatusInfo,
    TrainingLoadSummary,
    aggregate_daily_loads,
    assess_recovery,
    calculate_atl,
    calculate_ctl,
    calculate_readiness_score,
    calculate_training_load,
    calculate_tsb,
    calculate_weekly_change,
    daily_window,
    get_recovery_status,
    last_workout_age_hours,
    suggest_intensity,
    workout_tss,
)

__all__ = [
    # Load calculations
    "calculate_tss",
    "calculate_trimp",
    "hr_reserve_fraction",
    # HR zones
    "ZoneBoundary",
    "ZoneTime",
    "calculate_time_in_zones",
    "get_zone_for_hr",
    "validate_zones",
    "zone_boundaries",
    # Training load model
    "DailyLoad",
    "RecoveryAssessment",
    "RecoveryStatus",
    "RecoveryStatusInfo",
    "TrainingLoadSummary",
    "aggregate_daily_loads",
    "assess_recovery",
    "calculate_atl",
    "calculate_ctl",
    "calculate_readiness_score",
    "calculate_training_load",
    "calculate_tsb",
    "calculate_weekly_change",
    "daily_window",
    "get_recovery_status",
    "last_workout_age_hours",
    "suggest_intensity",
    "workout_tss",
]
