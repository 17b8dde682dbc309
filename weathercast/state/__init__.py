from .app_state import AppState, DisplayValue, ErrorDisplay, Loading, WeatherDisplay
from .slot import ObservableSlot

__all__ = [
    "AppState",
    "DisplayValue",
    "ErrorDisplay",
    "Loading",
    "ObservableSlot",
    "WeatherDisplay",
]
