import inspect
from collections.abc import Callable
from typing import Any

from weathercast.events.models import WeatherEvent
from weathercast.shared.logging_mixin import LoggingMixin


class EventBus(LoggingMixin):
    """
    In-loop publish/subscribe for orchestrator events.

    Callbacks may take nothing, the data (the event itself when data is None),
    or (event, data). Coroutine callbacks are awaited in subscription order;
    plain callbacks run inline on the loop.
    """

    def __init__(self):
        self._subscribers: dict[WeatherEvent, list[Callable]] = {
            event_type: [] for event_type in WeatherEvent
        }

    def subscribe(self, event_type: WeatherEvent, callback: Callable) -> None:
        self._subscribers[event_type].append(callback)

    def unsubscribe(self, event_type: WeatherEvent, callback: Callable) -> None:
        self._subscribers[event_type] = [
            cb for cb in self._subscribers[event_type] if cb != callback
        ]

    async def publish_async(self, event_type: WeatherEvent, data: Any = None) -> None:
        self.logger.debug("Publishing %s", event_type)
        for callback in list(self._subscribers[event_type]):
            try:
                result = self._call_with_appropriate_args(callback, event_type, data)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                self.logger.exception("Subscriber %s failed on %s", callback, event_type)

    def _call_with_appropriate_args(
        self, callback: Callable, event: WeatherEvent, data: Any
    ) -> Any:
        params = list(inspect.signature(callback).parameters.values())

        if params and params[0].name == "self":
            params = params[1:]

        match len(params):
            case 0:
                return callback()
            case 1:
                return callback(data) if data is not None else callback(event)
            case _:
                return callback(event, data)
