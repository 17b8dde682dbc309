import asyncio
import json
from collections.abc import Callable

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from weathercast.config import WeatherSettings
from weathercast.location import Coordinate
from weathercast.weather import WeatherSnapshot

BERLIN_BODY = {
    "coord": {"lon": 13.41, "lat": 52.52},
    "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds"}],
    "main": {"temp": 21.7, "feels_like": 21.2, "pressure": 1013, "humidity": 56},
    "visibility": 10000,
    "wind": {"speed": 4.12, "deg": 250},
    "name": "Berlin",
    "cod": 200,
}


class FakeOpenWeather:
    """Serves canned /2.5/weather responses and records the queries it got."""

    def __init__(self):
        self.status = 200
        self.body = json.dumps(BERLIN_BODY)
        self.queries: list[dict[str, str]] = []

    def respond(self, status: int, body) -> None:
        self.status = status
        self.body = body if isinstance(body, str) else json.dumps(body)

    async def handle(self, request: web.Request) -> web.Response:
        self.queries.append(dict(request.query))
        return web.Response(
            status=self.status, text=self.body, content_type="application/json"
        )


class GatedWeatherClient:
    """Weather client whose responses are released by the test, one per coordinate."""

    def __init__(self, settings: WeatherSettings | None = None):
        self.settings = settings or WeatherSettings()
        self.calls: list[tuple[Coordinate, str, str]] = []
        self._gates: dict[Coordinate, tuple[asyncio.Event, object]] = {}

    def prepare(self, coordinate: Coordinate, result) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[coordinate] = (gate, result)
        return gate

    async def fetch(self, coordinate, api_key, units=None):
        self.calls.append((coordinate, api_key, str(units)))
        gate, result = self._gates[coordinate]
        await gate.wait()
        return result


@pytest.fixture
def fake_api() -> FakeOpenWeather:
    return FakeOpenWeather()


@pytest_asyncio.fixture
async def api_server(fake_api):
    app = web.Application()
    app.router.add_get("/data/2.5/weather", fake_api.handle)
    server = TestServer(app)
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def weather_settings(api_server) -> WeatherSettings:
    return WeatherSettings(base_url=str(api_server.make_url("/data/")))


@pytest.fixture
def berlin() -> Coordinate:
    return Coordinate(latitude=52.52, longitude=13.41)


@pytest.fixture
def make_snapshot() -> Callable[..., WeatherSnapshot]:
    def _make(**overrides) -> WeatherSnapshot:
        fields = {
            "location_name": "Berlin",
            "temperature_c": 21.7,
            "humidity_percent": 56,
            "wind_speed": 4.12,
            "pressure": 1013,
            "visibility_meters": 10000,
            "condition_description": "broken clouds",
        }
        fields.update(overrides)
        return WeatherSnapshot(**fields)

    return _make


async def wait_until(predicate: Callable[[], bool], timeout: float = 1.0) -> None:
    async with asyncio.timeout(timeout):
        while not predicate():
            await asyncio.sleep(0)
