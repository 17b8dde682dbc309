from enum import Enum


class WeatherEvent(Enum):
    """Events published while turning location fixes into weather updates"""

    LOCATION_RECEIVED = "location_received"
    FETCH_STARTED = "fetch_started"
    WEATHER_UPDATED = "weather_updated"
    FETCH_FAILED = "fetch_failed"

    PERMISSION_DENIED = "permission_denied"
    NETWORK_RESTORED = "network_restored"

    def __str__(self) -> str:
        return self.value
