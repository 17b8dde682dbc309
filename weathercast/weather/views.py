from typing import Any

from pydantic import BaseModel, ConfigDict

# =============================================================================
# API Response Models (OpenWeather current weather mappings)
# =============================================================================


class OpenWeatherMain(BaseModel):
    temp: float
    humidity: int
    pressure: int


class OpenWeatherCondition(BaseModel):
    description: str


class OpenWeatherWind(BaseModel):
    speed: float


class OpenWeatherResponse(BaseModel):
    """Fields of a /2.5/weather success body that the client reads."""

    name: str
    main: OpenWeatherMain
    weather: list[OpenWeatherCondition] = []
    wind: OpenWeatherWind
    visibility: int


class OpenWeatherErrorBody(BaseModel):
    """Error body, e.g. {"cod": 401, "message": "Invalid API key..."}.

    The API sends cod as a number or as a numeric string depending on the
    endpoint; both validate to int.
    """

    cod: int
    message: str | None = None


# =============================================================================
# Domain Models
# =============================================================================


class WeatherSnapshot(BaseModel):
    """Displayable weather state parsed from one successful response.

    temperature_c is kept unrounded, in the unit system that was requested
    (Celsius for metric).
    """

    model_config = ConfigDict(frozen=True)

    location_name: str
    temperature_c: float
    humidity_percent: int
    wind_speed: float
    pressure: int
    visibility_meters: int
    condition_description: str

    @classmethod
    def from_api_response(cls, response: OpenWeatherResponse) -> "WeatherSnapshot":
        description = response.weather[0].description if response.weather else ""
        return cls(
            location_name=response.name,
            temperature_c=response.main.temp,
            humidity_percent=response.main.humidity,
            wind_speed=response.wind.speed,
            pressure=response.main.pressure,
            visibility_meters=response.visibility,
            condition_description=description,
        )

    @classmethod
    def from_api_payload(cls, payload: dict[str, Any]) -> "WeatherSnapshot":
        return cls.from_api_response(OpenWeatherResponse.model_validate(payload))

    def to_api_payload(self) -> dict[str, Any]:
        """Source fields in the shape the API returns them."""
        weather = (
            [{"description": self.condition_description}]
            if self.condition_description
            else []
        )
        return {
            "name": self.location_name,
            "main": {
                "temp": self.temperature_c,
                "humidity": self.humidity_percent,
                "pressure": self.pressure,
            },
            "weather": weather,
            "wind": {"speed": self.wind_speed},
            "visibility": self.visibility_meters,
        }
