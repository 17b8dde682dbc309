from .ip_geolocation import IpGeolocationProvider
from .provider import (
    LocationCallback,
    LocationPermissionError,
    LocationProvider,
    PollingLocationProvider,
    StaticLocationProvider,
)
from .views import Coordinate, LocationRequest

__all__ = [
    "Coordinate",
    "IpGeolocationProvider",
    "LocationCallback",
    "LocationPermissionError",
    "LocationProvider",
    "LocationRequest",
    "PollingLocationProvider",
    "StaticLocationProvider",
]
