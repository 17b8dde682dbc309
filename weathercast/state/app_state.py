from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from weathercast.state.slot import ObservableSlot

if TYPE_CHECKING:
    from weathercast.location.views import Coordinate
    from weathercast.weather.views import WeatherSnapshot


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class ErrorDisplay:
    message: str


@dataclass(frozen=True)
class WeatherDisplay:
    snapshot: WeatherSnapshot
    location: Coordinate | None = None


DisplayValue = Loading | ErrorDisplay | WeatherDisplay


class AppState:
    """
    Observable store for the latest weather snapshot, error message and location.

    A successful update clears the error. An error leaves the last snapshot in
    place unless clear_snapshot_on_error is set; display() shows the error first
    either way.
    """

    def __init__(self, clear_snapshot_on_error: bool = False):
        self.clear_snapshot_on_error = clear_snapshot_on_error
        self.weather: ObservableSlot[WeatherSnapshot] = ObservableSlot("weather")
        self.error: ObservableSlot[str] = ObservableSlot("error")
        self.location: ObservableSlot[Coordinate] = ObservableSlot("location")

    def update_weather(self, snapshot: WeatherSnapshot) -> None:
        self.weather.set(snapshot)
        self.error.clear()

    def set_error(self, message: str) -> None:
        if self.clear_snapshot_on_error:
            self.weather.clear()
        self.error.set(message)

    def update_location(self, location: Coordinate) -> None:
        self.location.set(location)

    def display(self) -> DisplayValue:
        error = self.error.current()
        if error is not None:
            return ErrorDisplay(error)

        snapshot = self.weather.current()
        if snapshot is not None:
            return WeatherDisplay(snapshot, self.location.current())

        return Loading()
