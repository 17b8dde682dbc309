from dataclasses import dataclass
from enum import StrEnum


class ErrorKind(StrEnum):
    CONNECTIVITY = "connectivity"
    AUTH = "auth"
    REMOTE = "remote"
    PARSE = "parse"
    TRANSPORT = "transport"
    PERMISSION = "permission"


NO_CONNECTION_MESSAGE = "no internet connection available"
INVALID_API_KEY_MESSAGE = "invalid API key"
GENERIC_FAILURE_MESSAGE = "failed to fetch weather data, try again later."
NETWORK_ERROR_MESSAGE = "network error — check your internet connection."
PERMISSION_REQUIRED_MESSAGE = (
    "This app requires location access to provide weather information. "
    "Please grant permission in the settings."
)


@dataclass(frozen=True)
class WeatherError:
    """A failed fetch, carried as a value rather than raised."""

    kind: ErrorKind
    message: str
    status: int | None = None

    @classmethod
    def no_connection(cls) -> "WeatherError":
        return cls(ErrorKind.CONNECTIVITY, NO_CONNECTION_MESSAGE)

    @classmethod
    def invalid_api_key(cls, status: int | None = None) -> "WeatherError":
        return cls(ErrorKind.AUTH, INVALID_API_KEY_MESSAGE, status)

    @classmethod
    def remote(cls, message: str, status: int | None = None) -> "WeatherError":
        return cls(ErrorKind.REMOTE, message, status)

    @classmethod
    def unparsable(cls, status: int | None = None) -> "WeatherError":
        return cls(ErrorKind.PARSE, GENERIC_FAILURE_MESSAGE, status)

    @classmethod
    def transport(cls) -> "WeatherError":
        return cls(ErrorKind.TRANSPORT, NETWORK_ERROR_MESSAGE)
