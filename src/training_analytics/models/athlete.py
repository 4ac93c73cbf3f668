"""Athlete configuration models: user profile and HR zone table."""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


DEFAULT_MAX_HR = 190
DEFAULT_RESTING_HR = 60


class UserProfile(BaseModel):
    """Athlete physiology as configured in the settings screen."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    max_heart_rate: Optional[int] = Field(None, gt=0, description="Measured maximum heart rate")
    resting_heart_rate: Optional[int] = Field(None, ge=0, description="Resting heart rate")
    age: Optional[int] = Field(None, gt=0, lt=130, description="Age in years")

    @property
    def estimated_max_hr(self) -> int:
        """Max HR to use for zones and load.

        Recomputed on every read: the measured value if set, else the
        ``220 - age`` estimate, else a population default.
        """
        if self.max_heart_rate:
            return self.max_heart_rate
        if self.age:
            return 220 - self.age
        return DEFAULT_MAX_HR

    @property
    def effective_resting_hr(self) -> int:
        """Resting HR, falling back to a typical adult value."""
        if self.resting_heart_rate is None:
            return DEFAULT_RESTING_HR
        return self.resting_heart_rate


class HRZone(BaseModel):
    """A heart rate zone expressed as a percentage band of max HR."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    name: str
    min_percent: float = Field(
        ..., ge=0,
        validation_alias=AliasChoices("min_percent", "minPercent", "min"),
    )
    max_percent: float = Field(
        ..., ge=0,
        validation_alias=AliasChoices("max_percent", "maxPercent", "max"),
    )
    color: str = "#6b7280"

    def contains(self, percentage: float) -> bool:
        """Whether ``percentage`` of max HR falls in ``[min, max)``."""
        return self.min_percent <= percentage < self.max_percent


DEFAULT_HR_ZONES: List[HRZone] = [
    HRZone(name="Zone 1 (Recovery)", min_percent=50, max_percent=60, color="#6b7280"),
    HRZone(name="Zone 2 (Aerobic)", min_percent=60, max_percent=70, color="#3b82f6"),
    HRZone(name="Zone 3 (Tempo)", min_percent=70, max_percent=80, color="#22c55e"),
    HRZone(name="Zone 4 (Threshold)", min_percent=80, max_percent=90, color="#f97316"),
    HRZone(name="Zone 5 (Max)", min_percent=90, max_percent=100, color="#ef4444"),
]
