from .env import WeatherEnv
from .loader import AppConfig, load_config
from .models import (
    LocationPriority,
    LocationSettings,
    OrchestratorSettings,
    UnitSystem,
    WeatherSettings,
)

__all__ = [
    "AppConfig",
    "LocationPriority",
    "LocationSettings",
    "OrchestratorSettings",
    "UnitSystem",
    "WeatherEnv",
    "WeatherSettings",
    "load_config",
]
