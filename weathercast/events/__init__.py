from .bus import EventBus
from .models import WeatherEvent

__all__ = ["EventBus", "WeatherEvent"]
