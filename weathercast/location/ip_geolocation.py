import asyncio

import aiohttp
from pydantic import BaseModel, ValidationError

from weathercast.location.provider import LocationCallback, PollingLocationProvider
from weathercast.location.views import Coordinate, LocationRequest


class IpApiResponse(BaseModel):
    """Subset of the ipapi.co JSON payload."""

    city: str | None = None
    region: str | None = None
    country: str | None = None
    latitude: float
    longitude: float


class IpGeolocationProvider(PollingLocationProvider):
    """
    Determines the current location via IP geolocation, polled on the
    requested interval. A failed lookup is skipped; the next poll tries again.
    """

    DEFAULT_URL = "https://ipapi.co/json/"

    def __init__(
        self,
        url: str = DEFAULT_URL,
        *,
        timeout_seconds: float = 10.0,
        session: aiohttp.ClientSession | None = None,
    ):
        super().__init__()
        self.url = url
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session

    async def locate(self) -> Coordinate:
        """
        Look up the current position once.

        Raises:
            ValueError: if the lookup fails or returns an unusable payload
        """
        try:
            if self._session is not None:
                return await self._locate_with(self._session)
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                return await self._locate_with(session)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValidationError) as e:
            raise ValueError(f"Location could not be determined: {e}") from e

    async def _locate_with(self, session: aiohttp.ClientSession) -> Coordinate:
        async with session.get(self.url, timeout=self.timeout) as response:
            if response.status != 200:
                raise ValueError(f"API request failed with status {response.status}")
            payload = IpApiResponse.model_validate_json(await response.read())

        return Coordinate(latitude=payload.latitude, longitude=payload.longitude)

    async def _run(self, request: LocationRequest, callback: LocationCallback) -> None:
        if self.last_fix is not None:
            await self._deliver(callback, self.last_fix)
            await asyncio.sleep(request.min_update_interval_ms / 1000)

        interval = max(request.interval_ms, request.min_update_interval_ms) / 1000
        while True:
            try:
                fix = await self.locate()
            except ValueError as e:
                self.logger.warning("%s", e)
            else:
                await self._deliver(callback, fix)
            await asyncio.sleep(interval)
