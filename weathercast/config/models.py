from enum import StrEnum

from pydantic import BaseModel, Field, field_validator, model_validator


class UnitSystem(StrEnum):
    """Unit systems understood by the OpenWeather API."""

    METRIC = "metric"
    IMPERIAL = "imperial"
    STANDARD = "standard"


class LocationPriority(StrEnum):
    HIGH_ACCURACY = "high_accuracy"
    BALANCED = "balanced"
    LOW_POWER = "low_power"


class WeatherSettings(BaseModel):
    base_url: str = "https://api.openweathermap.org/data/"
    units: UnitSystem = UnitSystem.METRIC
    timeout_seconds: float = Field(default=30.0, gt=0.0)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {value!r}")
        return value


class LocationSettings(BaseModel):
    priority: LocationPriority = LocationPriority.HIGH_ACCURACY
    interval_ms: int = Field(default=10_000, gt=0)
    min_update_interval_ms: int = Field(default=5_000, gt=0)
    max_update_delay_ms: int = Field(default=10_000, ge=0)
    wait_for_accurate_location: bool = True

    @model_validator(mode="after")
    def validate_intervals(self) -> "LocationSettings":
        if self.min_update_interval_ms > self.interval_ms:
            raise ValueError(
                "min_update_interval_ms must not exceed interval_ms "
                f"({self.min_update_interval_ms} > {self.interval_ms})"
            )
        return self


class OrchestratorSettings(BaseModel):
    discard_stale_responses: bool = False
    clear_snapshot_on_error: bool = False
    network_poll_interval_seconds: float = Field(default=5.0, gt=0.0)
