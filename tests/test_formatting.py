import pytest

from weathercast.config import UnitSystem
from weathercast.location import Coordinate
from weathercast.state import ErrorDisplay, Loading, WeatherDisplay
from weathercast.weather.formatting import (
    FALLBACK_ERROR_TEXT,
    LOADING_TEXT,
    format_coordinate,
    format_description,
    format_display,
    format_temperature,
    format_visibility,
    format_weather_report,
)


def test_temperature_is_rounded_only_for_display(make_snapshot):
    snapshot = make_snapshot(temperature_c=21.7)

    assert format_temperature(snapshot, UnitSystem.METRIC) == "22°C"
    assert format_temperature(snapshot, UnitSystem.IMPERIAL) == "22°F"
    assert snapshot.temperature_c == 21.7


@pytest.mark.parametrize(
    ("temperature", "expected"),
    [(0.5, "1°C"), (2.5, "3°C"), (22.5, "23°C"), (-2.5, "-2°C"), (-0.4, "0°C")],
)
def test_half_degrees_round_upwards(make_snapshot, temperature, expected):
    snapshot = make_snapshot(temperature_c=temperature)

    assert format_temperature(snapshot, UnitSystem.METRIC) == expected


def test_visibility_in_whole_kilometres(make_snapshot):
    assert format_visibility(make_snapshot(visibility_meters=9_999)) == "9 km"


def test_coordinate_has_two_decimals():
    assert format_coordinate(Coordinate(latitude=52.5200066, longitude=13.404954)) == (
        "Lat: 52.52, Lon: 13.40"
    )


def test_description_is_capitalised(make_snapshot):
    assert format_description(make_snapshot(condition_description="light rain")) == "Light rain"
    assert format_description(make_snapshot(condition_description="")) == ""


def test_report_lists_details(make_snapshot):
    report = format_weather_report(
        make_snapshot(), Coordinate(latitude=52.52, longitude=13.41), UnitSystem.METRIC
    )

    assert report.splitlines()[:2] == ["Berlin", "Lat: 52.52, Lon: 13.41"]
    assert "Humidity: 56%" in report
    assert "Wind Speed: 4.12 m/s" in report
    assert "Pressure: 1013 hPa" in report
    assert "Visibility: 10 km" in report


def test_format_display_variants(make_snapshot):
    assert format_display(Loading()) == LOADING_TEXT
    assert format_display(ErrorDisplay("invalid API key")) == "invalid API key"
    assert format_display(ErrorDisplay("")) == FALLBACK_ERROR_TEXT
    assert format_display(WeatherDisplay(make_snapshot())).startswith("Berlin\n\n22°C")
