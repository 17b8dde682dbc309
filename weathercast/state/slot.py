import asyncio
from collections.abc import AsyncIterator, Callable
from typing import Generic, TypeVar

from weathercast.shared.logging_mixin import LoggingMixin

T = TypeVar("T")

SlotCallback = Callable[[T | None], None]


class ObservableSlot(LoggingMixin, Generic[T]):
    """
    Holds one value and notifies subscribers on every write.

    Subscribers get the current value as soon as they subscribe and every
    value written after that. Writes are last-write-wins.
    """

    def __init__(self, name: str, initial: T | None = None):
        self.name = name
        self._value = initial
        self._subscribers: list[SlotCallback] = []

    def current(self) -> T | None:
        return self._value

    def set(self, value: T | None) -> None:
        self._value = value
        for callback in list(self._subscribers):
            self._notify(callback, value)

    def clear(self) -> None:
        self.set(None)

    def subscribe(self, callback: SlotCallback) -> Callable[[], None]:
        """Register a callback; returns a handle that unsubscribes it."""
        self._subscribers.append(callback)
        self._notify(callback, self._value)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: SlotCallback) -> None:
        self._subscribers = [cb for cb in self._subscribers if cb != callback]

    async def stream(self) -> AsyncIterator[T | None]:
        """Iterate over the current value and every later one."""
        queue: asyncio.Queue[T | None] = asyncio.Queue()
        unsubscribe = self.subscribe(queue.put_nowait)
        try:
            while True:
                yield await queue.get()
        finally:
            unsubscribe()

    def _notify(self, callback: SlotCallback, value: T | None) -> None:
        try:
            callback(value)
        except Exception:
            self.logger.exception("Subscriber of slot %r failed", self.name)
