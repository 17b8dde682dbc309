"""Location-triggered current weather client."""

from weathercast.config import AppConfig, UnitSystem, WeatherSettings, load_config
from weathercast.controller import (
    FetchState,
    ServiceBundle,
    ServiceFactory,
    WeatherOrchestrator,
)
from weathercast.events import EventBus, WeatherEvent
from weathercast.location import (
    Coordinate,
    IpGeolocationProvider,
    LocationPermissionError,
    LocationProvider,
    StaticLocationProvider,
)
from weathercast.network import RouteNetworkAvailability, StaticNetworkAvailability
from weathercast.state import AppState, ObservableSlot
from weathercast.weather import ErrorKind, WeatherClient, WeatherError, WeatherSnapshot

__all__ = [
    "AppConfig",
    "AppState",
    "Coordinate",
    "ErrorKind",
    "EventBus",
    "FetchState",
    "IpGeolocationProvider",
    "LocationPermissionError",
    "LocationProvider",
    "ObservableSlot",
    "RouteNetworkAvailability",
    "ServiceBundle",
    "ServiceFactory",
    "StaticLocationProvider",
    "StaticNetworkAvailability",
    "UnitSystem",
    "WeatherClient",
    "WeatherError",
    "WeatherEvent",
    "WeatherOrchestrator",
    "WeatherSettings",
    "load_config",
]
