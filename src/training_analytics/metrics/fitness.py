"""Training load model calculations (daily TSS, ATL, CTL, TSB, readiness).

ATL and CTL are trailing calendar-day averages of daily TSS:
- ATL (Acute Training Load): mean over the last 7 days, missing days
  counting as zero
- CTL (Chronic Training Load): sum over the last 42 days divided by the
  number of days inside that window that have any training
- TSB (Training Stress Balance): CTL - ATL

All windows end on an explicit ``today`` so results never depend on the
wall clock or the host timezone.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional

from ..models.athlete import UserProfile
from ..models.workouts import WorkoutSummary
from ..utils.dates import DayBoundary, as_aware, local_day
from ..utils.numbers import round_half_up
from .load import calculate_tss

logger = logging.getLogger(__name__)

ATL_DAYS = 7
CTL_DAYS = 42
RECENT_WORKOUT_HOURS = 12

READINESS_TSB_FLOOR = -30
READINESS_TSB_CEILING = 25


class RecoveryStatus(str, Enum):
    """Recovery category derived from TSB."""
    RECOVERED = "recovered"    # TSB > 25
    FRESH = "fresh"            # TSB > 5
    OPTIMAL = "optimal"        # TSB >= -10
    TIRED = "tired"            # TSB >= -25
    FATIGUED = "fatigued"      # below


@dataclass(frozen=True)
class RecoveryStatusInfo:
    """Display attributes attached to a recovery category."""

    status: RecoveryStatus
    label: str
    color: str
    description: str

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "label": self.label,
            "color": self.color,
            "description": self.description,
        }


RECOVERY_STATUSES: Dict[RecoveryStatus, RecoveryStatusInfo] = {
    RecoveryStatus.RECOVERED: RecoveryStatusInfo(
        RecoveryStatus.RECOVERED, "Well Recovered", "#22c55e", "Ready for intense training"
    ),
    RecoveryStatus.FRESH: RecoveryStatusInfo(
        RecoveryStatus.FRESH, "Fresh", "#3b82f6", "Good for quality workouts"
    ),
    RecoveryStatus.OPTIMAL: RecoveryStatusInfo(
        RecoveryStatus.OPTIMAL, "Optimal", "#8b5cf6", "Balanced training load"
    ),
    RecoveryStatus.TIRED: RecoveryStatusInfo(
        RecoveryStatus.TIRED, "Tired", "#f97316", "Consider easier training"
    ),
    RecoveryStatus.FATIGUED: RecoveryStatusInfo(
        RecoveryStatus.FATIGUED, "Fatigued", "#ef4444", "Rest recommended"
    ),
}

SUGGESTED_INTENSITY: Dict[RecoveryStatus, str] = {
    RecoveryStatus.RECOVERED: "High intensity OK",
    RecoveryStatus.FRESH: "High intensity OK",
    RecoveryStatus.OPTIMAL: "Moderate training",
    RecoveryStatus.TIRED: "Easy/recovery day",
    RecoveryStatus.FATIGUED: "Rest recommended",
}
RECENT_WORKOUT_INTENSITY = "Rest or easy activity"


@dataclass
class DailyLoad:
    """Training stress accumulated on one calendar day."""

    date: date
    tss: int = 0
    workout_count: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "date": self.date.isoformat(),
            "tss": self.tss,
            "workout_count": self.workout_count,
        }


@dataclass
class TrainingLoadSummary:
    """Current training load snapshot."""

    today: date
    atl: int
    ctl: int
    tsb: int
    weekly_tss: int
    weekly_change_pct: int
    daily: List[DailyLoad] = field(default_factory=list)  # last 7 days, oldest first

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "today": self.today.isoformat(),
            "atl": self.atl,
            "ctl": self.ctl,
            "tsb": self.tsb,
            "weekly_tss": self.weekly_tss,
            "weekly_change_pct": self.weekly_change_pct,
            "daily": [d.to_dict() for d in self.daily],
        }


@dataclass
class RecoveryAssessment:
    """Readiness to train derived from the training load balance."""

    tsb: int
    readiness_score: int  # 0-100
    status: RecoveryStatusInfo
    last_workout_age_hours: Optional[int]
    suggested_intensity: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "tsb": self.tsb,
            "readiness_score": self.readiness_score,
            "status": self.status.to_dict(),
            "last_workout_age_hours": self.last_workout_age_hours,
            "suggested_intensity": self.suggested_intensity,
        }


def workout_tss(workout: WorkoutSummary, max_hr: float, rest_hr: float) -> Optional[int]:
    """
    TSS for a single workout.

    Returns None when the workout lacks duration or average HR; such
    workouts do not take part in daily aggregation.
    """
    if not workout.duration_seconds or not workout.avg_heart_rate:
        return None
    return calculate_tss(
        duration_min=workout.duration_seconds / 60,
        avg_hr=workout.avg_heart_rate,
        max_hr=max_hr,
        rest_hr=rest_hr,
    )


def aggregate_daily_loads(
    workouts: Iterable[WorkoutSummary],
    max_hr: float,
    rest_hr: float,
    day_of: DayBoundary = local_day,
) -> Dict[date, DailyLoad]:
    """
    Group workout TSS by calendar day.

    Args:
        workouts: Workout summaries
        max_hr: Estimated max heart rate
        rest_hr: Resting heart rate
        day_of: Maps a workout start time to its calendar day

    Returns:
        Mapping of day to DailyLoad; days without workouts are absent
    """
    daily: Dict[date, DailyLoad] = {}
    excluded = 0

    if max_hr <= rest_hr:
        logger.warning(
            f"Max HR {max_hr} is not above resting HR {rest_hr}; every workout scores 0 TSS"
        )

    for workout in workouts:
        if workout.start_time is None:
            excluded += 1
            continue
        tss = workout_tss(workout, max_hr, rest_hr)
        if tss is None:
            excluded += 1
            continue

        day = day_of(workout.start_time)
        entry = daily.get(day)
        if entry is None:
            entry = daily[day] = DailyLoad(date=day)
        entry.tss += tss
        entry.workout_count += 1

    if excluded:
        logger.debug(f"Excluded {excluded} workouts without start time, duration or HR")
    return daily


def daily_window(
    daily_loads: Dict[date, DailyLoad],
    today: date,
    days: int,
    offset_days: int = 0,
) -> List[DailyLoad]:
    """
    Fixed-length window of daily loads ending ``offset_days`` before today.

    Missing days are filled with zero-load entries. Ordered oldest first.
    """
    window = []
    end = today - timedelta(days=offset_days)
    for i in range(days - 1, -1, -1):
        day = end - timedelta(days=i)
        entry = daily_loads.get(day)
        window.append(
            DailyLoad(date=day, tss=entry.tss, workout_count=entry.workout_count)
            if entry is not None
            else DailyLoad(date=day)
        )
    return window


def calculate_atl(
    daily_loads: Dict[date, DailyLoad],
    today: date,
    days: int = ATL_DAYS,
) -> int:
    """Acute Training Load: mean daily TSS over the trailing ``days``."""
    total = sum(d.tss for d in daily_window(daily_loads, today, days))
    return round_half_up(total / days)


def calculate_ctl(
    daily_loads: Dict[date, DailyLoad],
    today: date,
    days: int = CTL_DAYS,
) -> int:
    """
    Chronic Training Load over the trailing ``days``.

    The window sum is divided by the number of days in the window that
    have any training (at most ``days``), so a new athlete's CTL is not
    diluted by weeks before their first recorded workout.
    """
    window = [d for d in daily_window(daily_loads, today, days) if d.workout_count > 0]
    if not window:
        return 0
    total = sum(d.tss for d in window)
    return round_half_up(total / min(days, len(window)))


def calculate_tsb(ctl: float, atl: float) -> float:
    """Training Stress Balance = CTL - ATL. Positive = fresh, negative = fatigued."""
    return ctl - atl


def calculate_readiness_score(tsb: float) -> int:
    """
    Map TSB to a 0-100 readiness score.

    TSB is clamped to [-30, 25] and scaled linearly, so -30 or lower scores
    0 and +25 or higher scores 100.
    """
    clamped = max(READINESS_TSB_FLOOR, min(READINESS_TSB_CEILING, tsb))
    span = READINESS_TSB_CEILING - READINESS_TSB_FLOOR
    return round_half_up((clamped - READINESS_TSB_FLOOR) / span * 100)


def get_recovery_status(tsb: float) -> RecoveryStatusInfo:
    """
    Categorize TSB. Thresholds are checked top-down:
    - > 25: recovered
    - > 5: fresh
    - >= -10: optimal
    - >= -25: tired
    - otherwise: fatigued
    """
    if tsb > 25:
        status = RecoveryStatus.RECOVERED
    elif tsb > 5:
        status = RecoveryStatus.FRESH
    elif tsb >= -10:
        status = RecoveryStatus.OPTIMAL
    elif tsb >= -25:
        status = RecoveryStatus.TIRED
    else:
        status = RecoveryStatus.FATIGUED
    return RECOVERY_STATUSES[status]


def calculate_weekly_change(
    daily_loads: Dict[date, DailyLoad],
    today: date,
    days: int = ATL_DAYS,
) -> int:
    """
    Percent change of this week's TSS against the previous week's.

    A previous week without load reports +100% when this week has load,
    0% otherwise.
    """
    this_week = sum(d.tss for d in daily_window(daily_loads, today, days))
    last_week = sum(d.tss for d in daily_window(daily_loads, today, days, offset_days=days))

    if last_week == 0:
        return 100 if this_week > 0 else 0
    return round_half_up((this_week - last_week) / last_week * 100)


def last_workout_age_hours(
    workouts: Iterable[WorkoutSummary],
    now: datetime,
) -> Optional[int]:
    """
    Hours since the most recent workout ended, or None without dated workouts.

    Naive datetimes are taken as host-local time, so naive and aware inputs
    may be mixed.
    """
    dated = [w for w in workouts if w.start_time is not None]
    if not dated:
        return None
    latest = max(dated, key=lambda w: as_aware(w.start_time))
    elapsed = (as_aware(now) - as_aware(latest.end_time)).total_seconds() / 3600
    return round_half_up(elapsed)


def suggest_intensity(
    status: RecoveryStatusInfo,
    last_workout_age: Optional[int],
    recent_workout_hours: float = RECENT_WORKOUT_HOURS,
) -> str:
    """Suggested session intensity, eased right after a workout unless fully recovered."""
    suggestion = SUGGESTED_INTENSITY[status.status]
    if (
        last_workout_age is not None
        and last_workout_age < recent_workout_hours
        and status.status != RecoveryStatus.RECOVERED
    ):
        return RECENT_WORKOUT_INTENSITY
    return suggestion


def calculate_training_load(
    workouts: Iterable[WorkoutSummary],
    profile: UserProfile,
    today: date,
    day_of: DayBoundary = local_day,
    atl_days: int = ATL_DAYS,
    ctl_days: int = CTL_DAYS,
) -> TrainingLoadSummary:
    """
    Compute the training load snapshot for ``today``.

    Args:
        workouts: Workout summaries from storage
        profile: Athlete profile (max HR is re-derived on every call)
        today: Last calendar day of every window
        day_of: Maps workout start times to calendar days
        atl_days: ATL window length
        ctl_days: CTL window length

    Returns:
        TrainingLoadSummary with ATL, CTL, TSB and the weekly trend
    """
    daily = aggregate_daily_loads(
        workouts,
        max_hr=profile.estimated_max_hr,
        rest_hr=profile.effective_resting_hr,
        day_of=day_of,
    )

    atl = calculate_atl(daily, today, atl_days)
    ctl = calculate_ctl(daily, today, ctl_days)
    week = daily_window(daily, today, atl_days)

    return TrainingLoadSummary(
        today=today,
        atl=atl,
        ctl=ctl,
        tsb=calculate_tsb(ctl, atl),
        weekly_tss=sum(d.tss for d in week),
        weekly_change_pct=calculate_weekly_change(daily, today, atl_days),
        daily=week,
    )


def assess_recovery(
    workouts: Iterable[WorkoutSummary],
    profile: UserProfile,
    now: datetime,
    day_of: DayBoundary = local_day,
    atl_days: int = ATL_DAYS,
    ctl_days: int = CTL_DAYS,
    recent_workout_hours: float = RECENT_WORKOUT_HOURS,
) -> RecoveryAssessment:
    """
    Assess readiness to train at ``now``.

    Args:
        workouts: Workout summaries from storage
        profile: Athlete profile
        now: Current instant; its calendar day closes the load windows
        day_of: Maps datetimes to calendar days
        atl_days: ATL window length
        ctl_days: CTL window length
        recent_workout_hours: A workout ending within this many hours
            softens the suggestion

    Returns:
        RecoveryAssessment with TSB, readiness score and suggestion
    """
    workouts = list(workouts)
    load = calculate_training_load(
        workouts, profile, day_of(now), day_of=day_of,
        atl_days=atl_days, ctl_days=ctl_days,
    )
    status = get_recovery_status(load.tsb)
    age = last_workout_age_hours(workouts, now)

    return RecoveryAssessment(
        tsb=load.tsb,
        readiness_score=calculate_readiness_score(load.tsb),
        status=status,
        last_workout_age_hours=age,
        suggested_intensity=suggest_intensity(status, age, recent_workout_hours),
    )
