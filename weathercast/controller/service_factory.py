from dataclasses import dataclass

from weathercast.config.loader import AppConfig
from weathercast.controller.orchestrator import WeatherOrchestrator
from weathercast.events import EventBus
from weathercast.location.ip_geolocation import IpGeolocationProvider
from weathercast.location.provider import LocationProvider
from weathercast.network.availability import (
    NetworkAvailability,
    RouteNetworkAvailability,
)
from weathercast.state.app_state import AppState
from weathercast.weather.client import WeatherClient


@dataclass
class ServiceBundle:
    event_bus: EventBus
    app_state: AppState
    network: NetworkAvailability
    location_provider: LocationProvider
    weather_client: WeatherClient
    orchestrator: WeatherOrchestrator


class ServiceFactory:
    """Composition root: builds every service once and wires them together."""

    def __init__(
        self,
        config: AppConfig,
        api_key: str,
        location_provider: LocationProvider | None = None,
        network: NetworkAvailability | None = None,
    ):
        self.config = config
        self.api_key = api_key
        self.location_provider = location_provider
        self.network = network

        self.event_bus = EventBus()

    def create_services(self) -> ServiceBundle:
        app_state = self._create_app_state()
        network = self.network or RouteNetworkAvailability()
        location_provider = self.location_provider or IpGeolocationProvider()
        weather_client = self._create_weather_client()

        orchestrator = WeatherOrchestrator.from_settings(
            self.config.weather,
            self.config.location,
            self.config.orchestrator,
            location_provider=location_provider,
            weather_client=weather_client,
            network=network,
            app_state=app_state,
            event_bus=self.event_bus,
            api_key=self.api_key,
        )

        return ServiceBundle(
            event_bus=self.event_bus,
            app_state=app_state,
            network=network,
            location_provider=location_provider,
            weather_client=weather_client,
            orchestrator=orchestrator,
        )

    def _create_app_state(self) -> AppState:
        return AppState(
            clear_snapshot_on_error=self.config.orchestrator.clear_snapshot_on_error
        )

    def _create_weather_client(self) -> WeatherClient:
        return WeatherClient(self.config.weather)
