"""Workout data models supplied by the storage collaborator."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..exceptions import InvalidParameterError
from .athlete import to_camel

# Either a datetime or seconds on an arbitrary monotonic clock
Timestamp = Union[datetime, float]


def seconds_between(start: Timestamp, end: Timestamp) -> float:
    """Elapsed seconds from ``start`` to ``end`` (negative if out of order)."""
    if isinstance(start, datetime) and isinstance(end, datetime):
        return (end - start).total_seconds()
    if isinstance(start, datetime) or isinstance(end, datetime):
        raise InvalidParameterError(
            "Cannot mix datetime and numeric timestamps",
            parameter="timestamp",
        )
    return float(end) - float(start)


@dataclass(frozen=True)
class TimeSeries:
    """Parallel timestamp/value arrays.

    Values may be None where the sensor had no reading; such samples are
    never coerced to zero.
    """

    timestamps: List[Timestamp] = field(default_factory=list)
    values: List[Optional[float]] = field(default_factory=list)

    def __post_init__(self):
        if len(self.timestamps) != len(self.values):
            raise InvalidParameterError(
                f"TimeSeries length mismatch: {len(self.timestamps)} timestamps, "
                f"{len(self.values)} values",
                parameter="values",
            )

    def __len__(self) -> int:
        return len(self.timestamps)


class WorkoutSummary(BaseModel):
    """Per-workout summary row used for training load."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: Optional[int] = None
    name: Optional[str] = None
    workout_type: Optional[str] = None
    start_time: Optional[datetime] = None
    duration_seconds: Optional[float] = Field(None, ge=0)
    distance_meters: Optional[float] = Field(None, ge=0)
    avg_heart_rate: Optional[float] = Field(None, ge=0)

    @property
    def end_time(self) -> Optional[datetime]:
        """Start time plus duration, or the start time if duration is unknown."""
        if self.start_time is None:
            return None
        if not self.duration_seconds:
            return self.start_time
        return self.start_time + timedelta(seconds=self.duration_seconds)


class GpsPoint(BaseModel):
    """A single GPS fix. Any field may be absent."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    timestamp: Optional[datetime] = None
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lon: Optional[float] = Field(None, ge=-180, le=180)
    altitude: Optional[float] = None

    @property
    def has_position(self) -> bool:
        return self.lat is not None and self.lon is not None


class ActivityStreams(BaseModel):
    """Per-workout sensor streams sharing one timestamp axis.

    Streams a device did not record may be left empty; recorded streams must
    have one entry per timestamp.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    timestamps: List[datetime] = Field(default_factory=list)
    heart_rate: List[Optional[float]] = Field(default_factory=list)
    speed: List[Optional[float]] = Field(default_factory=list)
    power: List[Optional[float]] = Field(default_factory=list)
    cadence: List[Optional[float]] = Field(default_factory=list)
    altitude: List[Optional[float]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_lengths(self) -> "ActivityStreams":
        expected = len(self.timestamps)
        for name in ("heart_rate", "speed", "power", "cadence", "altitude"):
            stream = getattr(self, name)
            if stream and len(stream) != expected:
                raise ValueError(
                    f"{name} has {len(stream)} samples, expected {expected}"
                )
        return self

    def stream(self, name: str) -> List[Optional[float]]:
        """Named stream padded with None when it was not recorded."""
        values = getattr(self, name)
        if not values:
            return [None] * len(self.timestamps)
        return list(values)

    def heart_rate_series(self) -> TimeSeries:
        return TimeSeries(
            timestamps=list(self.timestamps),
            values=self.stream("heart_rate"),
        )

    @property
    def has_heart_rate(self) -> bool:
        return any(v is not None for v in self.heart_rate)
