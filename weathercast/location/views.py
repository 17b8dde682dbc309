from pydantic import BaseModel, ConfigDict, Field

from weathercast.config.models import LocationPriority, LocationSettings


class Coordinate(BaseModel):
    """A single location fix."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class LocationRequest(BaseModel):
    """Hints handed to a location provider; providers may deliver slower."""

    model_config = ConfigDict(frozen=True)

    priority: LocationPriority = LocationPriority.HIGH_ACCURACY
    interval_ms: int = 10_000
    min_update_interval_ms: int = 5_000
    max_update_delay_ms: int = 10_000
    wait_for_accurate_location: bool = True

    @classmethod
    def from_settings(cls, settings: LocationSettings) -> "LocationRequest":
        return cls(**settings.model_dump())
