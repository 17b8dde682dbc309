import asyncio

import aiohttp
from pydantic import ValidationError

from weathercast.config.models import UnitSystem, WeatherSettings
from weathercast.location.views import Coordinate
from weathercast.shared.logging_mixin import LoggingMixin
from weathercast.weather.errors import WeatherError
from weathercast.weather.views import (
    OpenWeatherErrorBody,
    OpenWeatherResponse,
    WeatherSnapshot,
)

FetchResult = WeatherSnapshot | WeatherError


class WeatherClient(LoggingMixin):
    """
    Fetches current conditions from the OpenWeather /2.5/weather endpoint.

    Every call is a fresh HTTP exchange. Failures come back as WeatherError
    values; nothing is cached and nothing is retried.
    """

    ENDPOINT = "2.5/weather"
    UNAUTHORIZED_CODE = 401

    def __init__(
        self,
        settings: WeatherSettings | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        self.settings = settings or WeatherSettings()
        self.timeout = aiohttp.ClientTimeout(total=self.settings.timeout_seconds)
        self._session = session

    @property
    def url(self) -> str:
        return f"{self.settings.base_url.rstrip('/')}/{self.ENDPOINT}"

    async def fetch(
        self,
        coordinate: Coordinate,
        api_key: str,
        units: UnitSystem | str | None = None,
    ) -> FetchResult:
        params = {
            "lat": str(coordinate.latitude),
            "lon": str(coordinate.longitude),
            "appid": api_key,
            "units": str(units or self.settings.units),
        }
        self.logger.debug(
            "API URL: %s?lat=%s&lon=%s&appid=***&units=%s",
            self.url,
            params["lat"],
            params["lon"],
            params["units"],
        )

        try:
            if self._session is not None:
                status, body = await self._get(self._session, params)
            else:
                async with aiohttp.ClientSession(timeout=self.timeout) as session:
                    status, body = await self._get(session, params)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error("Error in API call: %r", e)
            return WeatherError.transport()

        if 200 <= status < 300:
            return self._parse_success(status, body)

        self.logger.error("Error: %s", body.decode("utf-8", errors="replace"))
        return self._parse_error(status, body)

    async def _get(
        self, session: aiohttp.ClientSession, params: dict[str, str]
    ) -> tuple[int, bytes]:
        async with session.get(self.url, params=params, timeout=self.timeout) as response:
            return response.status, await response.read()

    def _parse_success(self, status: int, body: bytes) -> FetchResult:
        try:
            response = OpenWeatherResponse.model_validate_json(body)
        except ValidationError as e:
            self.logger.error("Unexpected weather payload: %s", e)
            return WeatherError.unparsable(status)

        return WeatherSnapshot.from_api_response(response)

    def _parse_error(self, status: int, body: bytes) -> WeatherError:
        try:
            error_body = OpenWeatherErrorBody.model_validate_json(body)
        except ValidationError:
            return WeatherError.unparsable(status)

        if error_body.cod == self.UNAUTHORIZED_CODE:
            return WeatherError.invalid_api_key(status)
        if error_body.message is None:
            return WeatherError.unparsable(status)
        return WeatherError.remote(error_body.message, status)
