"""
Turns location fixes into weather updates.

Each fix starts its own fetch task. Fetches are neither cancelled nor ordered,
so when fixes arrive faster than responses the state shows whichever response
lands last, which can belong to an older fix. Setting discard_stale_responses
tags fetches with a sequence number and drops outcomes older than the newest
one already applied.
"""

from __future__ import annotations

import asyncio
from enum import StrEnum

from weathercast.config.models import (
    LocationSettings,
    OrchestratorSettings,
    UnitSystem,
    WeatherSettings,
)
from weathercast.events import EventBus, WeatherEvent
from weathercast.location.provider import LocationPermissionError, LocationProvider
from weathercast.location.views import Coordinate, LocationRequest
from weathercast.network.availability import NetworkAvailability, watch_network
from weathercast.shared.logging_mixin import LoggingMixin
from weathercast.state.app_state import AppState
from weathercast.weather.client import FetchResult, WeatherClient
from weathercast.weather.errors import (
    PERMISSION_REQUIRED_MESSAGE,
    ErrorKind,
    WeatherError,
)


class FetchState(StrEnum):
    IDLE = "idle"
    FETCHING = "fetching"
    DISPLAYED = "displayed"
    FAILED = "failed"


class WeatherOrchestrator(LoggingMixin):
    def __init__(
        self,
        location_provider: LocationProvider,
        weather_client: WeatherClient,
        network: NetworkAvailability,
        app_state: AppState,
        event_bus: EventBus,
        api_key: str,
        units: UnitSystem | None = None,
        location_settings: LocationSettings | None = None,
        settings: OrchestratorSettings | None = None,
    ):
        self.location_provider = location_provider
        self.weather_client = weather_client
        self.network = network
        self.app_state = app_state
        self.event_bus = event_bus
        self.api_key = api_key
        self.units = units or weather_client.settings.units
        self.location_request = LocationRequest.from_settings(
            location_settings or LocationSettings()
        )
        self.settings = settings or OrchestratorSettings()

        self._state = FetchState.IDLE
        self._next_sequence = 0
        self._applied_sequence = -1
        self._fetch_tasks: set[asyncio.Task] = set()
        self._network_task: asyncio.Task | None = None
        self._subscribed = False

    @classmethod
    def from_settings(
        cls,
        weather_settings: WeatherSettings,
        location_settings: LocationSettings,
        settings: OrchestratorSettings,
        **services,
    ) -> WeatherOrchestrator:
        return cls(
            units=weather_settings.units,
            location_settings=location_settings,
            settings=settings,
            **services,
        )

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def in_flight(self) -> int:
        return len(self._fetch_tasks)

    async def start(self) -> bool:
        """Start location updates and the network watcher.

        Returns False when location permission is missing; that case is
        published as PERMISSION_DENIED and never written to the error slot.
        """
        if self._network_task is None:
            self._network_task = asyncio.create_task(
                self._watch_network(), name="network_watcher"
            )
        return await self._start_location_updates()

    async def stop(self) -> None:
        if self._subscribed:
            await self.location_provider.unsubscribe(self.on_location)
            self._subscribed = False

        tasks = list(self._fetch_tasks)
        if self._network_task is not None:
            tasks.append(self._network_task)
            self._network_task = None

        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._fetch_tasks.clear()
        self.logger.info("Orchestrator stopped")

    async def on_location(self, coordinate: Coordinate) -> None:
        """Handle one fix: record it and start a fetch for it."""
        self.logger.debug(
            "New location received: %s, %s", coordinate.latitude, coordinate.longitude
        )
        self.app_state.update_location(coordinate)
        await self.event_bus.publish_async(WeatherEvent.LOCATION_RECEIVED, coordinate)

        if not self.network.is_available():
            await self._apply(self._take_sequence(), WeatherError.no_connection())
            return

        task = asyncio.create_task(
            self._fetch(coordinate, self._take_sequence()), name="weather_fetch"
        )
        self._fetch_tasks.add(task)
        task.add_done_callback(self._fetch_tasks.discard)

    async def fetch_now(self, coordinate: Coordinate) -> FetchResult:
        """Run a single fix through the full path and wait for its outcome."""
        self.app_state.update_location(coordinate)
        await self.event_bus.publish_async(WeatherEvent.LOCATION_RECEIVED, coordinate)
        sequence = self._take_sequence()
        if not self.network.is_available():
            result: FetchResult = WeatherError.no_connection()
            await self._apply(sequence, result)
            return result
        return await self._fetch(coordinate, sequence)

    async def _start_location_updates(self) -> bool:
        try:
            await self.location_provider.subscribe(
                self.location_request, self.on_location
            )
        except LocationPermissionError as e:
            self.logger.warning("Location permission missing: %s", e)
            await self.event_bus.publish_async(
                WeatherEvent.PERMISSION_DENIED,
                WeatherError(ErrorKind.PERMISSION, PERMISSION_REQUIRED_MESSAGE),
            )
            return False

        self._subscribed = True
        self.logger.info("Location updates requested")
        return True

    async def _fetch(self, coordinate: Coordinate, sequence: int) -> FetchResult:
        self._transition_to(FetchState.FETCHING)
        await self.event_bus.publish_async(WeatherEvent.FETCH_STARTED, coordinate)

        result = await self.weather_client.fetch(coordinate, self.api_key, self.units)
        await self._apply(sequence, result)
        return result

    async def _apply(self, sequence: int, result: FetchResult) -> None:
        if self.settings.discard_stale_responses:
            if sequence < self._applied_sequence:
                self.logger.debug("Dropping stale response #%d", sequence)
                return
            self._applied_sequence = sequence

        if isinstance(result, WeatherError):
            self.app_state.set_error(result.message)
            self._transition_to(FetchState.FAILED)
            await self.event_bus.publish_async(WeatherEvent.FETCH_FAILED, result)
        else:
            self.app_state.update_weather(result)
            self._transition_to(FetchState.DISPLAYED)
            await self.event_bus.publish_async(WeatherEvent.WEATHER_UPDATED, result)

    async def _watch_network(self) -> None:
        previous: bool | None = None
        async for available in watch_network(
            self.network, self.settings.network_poll_interval_seconds
        ):
            if available and previous is False:
                self.logger.info("Network available again, restarting location updates")
                await self.event_bus.publish_async(WeatherEvent.NETWORK_RESTORED)
                await self._start_location_updates()
            previous = available

    def _take_sequence(self) -> int:
        sequence = self._next_sequence
        self._next_sequence += 1
        return sequence

    def _transition_to(self, new_state: FetchState) -> None:
        if new_state != self._state:
            self.logger.info("Transitioning from %s to %s", self._state, new_state)
        self._state = new_state
