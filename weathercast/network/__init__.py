from .availability import (
    NetworkAvailability,
    RouteNetworkAvailability,
    StaticNetworkAvailability,
    watch_network,
)

__all__ = [
    "NetworkAvailability",
    "RouteNetworkAvailability",
    "StaticNetworkAvailability",
    "watch_network",
]
