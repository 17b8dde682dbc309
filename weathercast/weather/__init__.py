"""Weather module for fetching and parsing current conditions."""

from .client import FetchResult, WeatherClient
from .errors import ErrorKind, WeatherError
from .views import WeatherSnapshot

__all__ = [
    "ErrorKind",
    "FetchResult",
    "WeatherClient",
    "WeatherError",
    "WeatherSnapshot",
]
