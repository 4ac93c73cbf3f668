"""Heart rate zone calculations."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..exceptions import ZoneConfigurationError
from ..models.athlete import HRZone
from ..models.workouts import TimeSeries, seconds_between
from ..utils.numbers import round_half_up

logger = logging.getLogger(__name__)

# Consecutive samples further apart than this are a sensor dropout
DEFAULT_GAP_THRESHOLD_SECONDS = 60.0


@dataclass
class ZoneBoundary:
    """A zone resolved to absolute heart rates."""

    zone: HRZone
    min_bpm: int
    max_bpm: int

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.zone.name,
            "min_bpm": self.min_bpm,
            "max_bpm": self.max_bpm,
            "color": self.zone.color,
        }


@dataclass
class ZoneTime:
    """Time attributed to one zone."""

    zone_name: str
    zone_index: int  # 1-based
    time_seconds: float
    percentage: float  # of total attributed time
    color: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "zone_name": self.zone_name,
            "zone_index": self.zone_index,
            "time_seconds": self.time_seconds,
            "percentage": self.percentage,
            "color": self.color,
        }


def validate_zones(zones: Sequence[HRZone]) -> None:
    """
    Check that a zone table is usable.

    Zones must be non-empty, each with min < max, and sorted ascending by
    min percent. Gaps between zones are allowed; readings inside a gap are
    simply not attributed.

    Raises:
        ZoneConfigurationError: if the table violates any of the above
    """
    if not zones:
        raise ZoneConfigurationError("HR zone table is empty")

    for index, zone in enumerate(zones):
        if zone.min_percent >= zone.max_percent:
            raise ZoneConfigurationError(
                f"Zone '{zone.name}' has min {zone.min_percent} >= max {zone.max_percent}",
                details={"zone_index": index},
            )
        if index > 0 and zone.min_percent < zones[index - 1].min_percent:
            raise ZoneConfigurationError(
                "HR zones must be sorted ascending by min percent",
                details={"zone_index": index},
            )


def zone_index_for_percentage(percentage: float, zones: Sequence[HRZone]) -> Optional[int]:
    """
    Return the 0-based index of the zone holding ``percentage`` of max HR.

    The first zone with ``min <= pct < max`` wins; anything at or above the
    top zone's max belongs to the top zone. Returns None below the lowest
    zone or inside a gap.
    """
    for index, zone in enumerate(zones):
        if zone.contains(percentage):
            return index
    if percentage >= zones[-1].max_percent:
        return len(zones) - 1
    return None


def get_zone_for_hr(
    hr: float,
    max_hr: float,
    zones: Sequence[HRZone],
) -> Optional[HRZone]:
    """
    Return the zone a given heart rate falls into.

    Args:
        hr: Heart rate to classify
        max_hr: Estimated max heart rate
        zones: Zone table

    Returns:
        The matching HRZone, or None if below the first zone
    """
    validate_zones(zones)
    index = zone_index_for_percentage(hr / max_hr * 100, zones)
    return zones[index] if index is not None else None


def zone_boundaries(zones: Sequence[HRZone], max_hr: float) -> List[ZoneBoundary]:
    """Resolve percentage zones to bpm ranges for the given max HR."""
    return [
        ZoneBoundary(
            zone=zone,
            min_bpm=round_half_up(zone.min_percent / 100 * max_hr),
            max_bpm=round_half_up(zone.max_percent / 100 * max_hr),
        )
        for zone in zones
    ]


def calculate_time_in_zones(
    series: TimeSeries,
    zones: Sequence[HRZone],
    max_hr: float,
    gap_threshold_seconds: float = DEFAULT_GAP_THRESHOLD_SECONDS,
) -> List[ZoneTime]:
    """
    Calculate time spent in each zone from a heart rate time series.

    Each consecutive pair of samples contributes its time delta to the zone
    of the later sample. A pair is skipped when either reading is missing,
    when the delta is negative (out of order) or when it exceeds
    ``gap_threshold_seconds`` (sensor dropout).

    Args:
        series: Heart rate samples in bpm
        zones: Zone table, sorted ascending
        max_hr: Estimated max heart rate
        gap_threshold_seconds: Longest delta still counted

    Returns:
        One ZoneTime per zone; all zeros when no pair was attributed

    Raises:
        ZoneConfigurationError: if the zone table is unusable
    """
    validate_zones(zones)

    zone_seconds = [0.0] * len(zones)
    total_attributed = 0.0
    skipped: Dict[str, int] = {"missing": 0, "gap": 0, "unzoned": 0}

    timestamps = series.timestamps
    heart_rates = series.values

    for i in range(1, len(timestamps)):
        hr = heart_rates[i]
        prev_hr = heart_rates[i - 1]
        if hr is None or prev_hr is None:
            skipped["missing"] += 1
            continue

        delta_seconds = seconds_between(timestamps[i - 1], timestamps[i])
        if delta_seconds > gap_threshold_seconds or delta_seconds < 0:
            skipped["gap"] += 1
            continue

        index = zone_index_for_percentage(hr / max_hr * 100, zones)
        if index is None:
            skipped["unzoned"] += 1
            continue

        zone_seconds[index] += delta_seconds
        total_attributed += delta_seconds

    if any(skipped.values()):
        logger.debug(f"Time in zones skipped pairs: {skipped}")

    return [
        ZoneTime(
            zone_name=zone.name,
            zone_index=index + 1,
            time_seconds=zone_seconds[index],
            percentage=(zone_seconds[index] / total_attributed * 100) if total_attributed > 0 else 0.0,
            color=zone.color,
        )
        for index, zone in enumerate(zones)
    ]
