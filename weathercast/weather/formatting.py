import math
from textwrap import dedent

from weathercast.config.models import UnitSystem
from weathercast.location.views import Coordinate
from weathercast.state.app_state import DisplayValue, ErrorDisplay, Loading, WeatherDisplay
from weathercast.weather.views import WeatherSnapshot

# =============================================================================
# Constants
# =============================================================================

_TEMPERATURE_SYMBOLS = {
    UnitSystem.METRIC: "°C",
    UnitSystem.IMPERIAL: "°F",
    UnitSystem.STANDARD: "K",
}

_WIND_SPEED_UNITS = {
    UnitSystem.METRIC: "m/s",
    UnitSystem.IMPERIAL: "mph",
    UnitSystem.STANDARD: "m/s",
}

LOADING_TEXT = "Loading weather data..."
FALLBACK_ERROR_TEXT = "An error occurred"


def format_temperature(snapshot: WeatherSnapshot, units: UnitSystem) -> str:
    """Temperature rounded to the nearest whole degree, halves upwards."""
    degrees = math.floor(snapshot.temperature_c + 0.5)
    return f"{degrees}{_TEMPERATURE_SYMBOLS[units]}"


def format_wind_speed(snapshot: WeatherSnapshot, units: UnitSystem) -> str:
    return f"{snapshot.wind_speed} {_WIND_SPEED_UNITS[units]}"


def format_visibility(snapshot: WeatherSnapshot) -> str:
    return f"{snapshot.visibility_meters // 1000} km"


def format_coordinate(coordinate: Coordinate) -> str:
    return f"Lat: {coordinate.latitude:.2f}, Lon: {coordinate.longitude:.2f}"


def format_description(snapshot: WeatherSnapshot) -> str:
    description = snapshot.condition_description
    return description[:1].upper() + description[1:]


def format_weather_report(
    snapshot: WeatherSnapshot,
    location: Coordinate | None,
    units: UnitSystem = UnitSystem.METRIC,
) -> str:
    """Format a snapshot into the readable report shown by the CLI."""
    header = snapshot.location_name
    if location is not None:
        header += f"\n{format_coordinate(location)}"

    body = dedent(
        f"""
        {format_temperature(snapshot, units)}
        {format_description(snapshot)}

        Humidity: {snapshot.humidity_percent}%
        Wind Speed: {format_wind_speed(snapshot, units)}

        Detailed Forecast
        Pressure: {snapshot.pressure} hPa
        Visibility: {format_visibility(snapshot)}
    """
    ).strip()

    return f"{header}\n\n{body}"


def format_display(display: DisplayValue, units: UnitSystem = UnitSystem.METRIC) -> str:
    match display:
        case ErrorDisplay(message=message):
            return message or FALLBACK_ERROR_TEXT
        case WeatherDisplay(snapshot=snapshot, location=location):
            return format_weather_report(snapshot, location, units)
        case Loading():
            return LOADING_TEXT
    raise TypeError(f"Unknown display value: {display!r}")
