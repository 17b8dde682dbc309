import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import Protocol

from weathercast.location.views import Coordinate, LocationRequest
from weathercast.shared.logging_mixin import LoggingMixin

LocationCallback = Callable[[Coordinate], Awaitable[None]]


class LocationPermissionError(Exception):
    """Raised when location access has not been granted."""


class LocationProvider(Protocol):
    """Push-based source of location fixes."""

    def is_enabled(self) -> bool: ...

    def has_permission(self) -> bool: ...

    async def subscribe(
        self, request: LocationRequest, callback: LocationCallback
    ) -> None: ...

    async def unsubscribe(self, callback: LocationCallback) -> None: ...


class PollingLocationProvider(LoggingMixin):
    """Base for providers that run one delivery task per subscriber."""

    def __init__(self):
        self._tasks: dict[LocationCallback, asyncio.Task] = {}
        self.last_fix: Coordinate | None = None

    def is_enabled(self) -> bool:
        return True

    def has_permission(self) -> bool:
        return True

    async def subscribe(
        self, request: LocationRequest, callback: LocationCallback
    ) -> None:
        if not self.has_permission() or not self.is_enabled():
            raise LocationPermissionError("Location access is not available")

        await self.unsubscribe(callback)
        self._tasks[callback] = asyncio.create_task(
            self._run(request, callback), name=f"{type(self).__name__}.updates"
        )
        self.logger.debug("Location updates requested")

    async def unsubscribe(self, callback: LocationCallback) -> None:
        task = self._tasks.pop(callback, None)
        if task is None or task.done():
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:  # NOSONAR
            self.logger.debug("Location updates cancelled")

    async def close(self) -> None:
        for callback in list(self._tasks):
            await self.unsubscribe(callback)

    async def _run(self, request: LocationRequest, callback: LocationCallback) -> None:
        raise NotImplementedError

    async def _deliver(self, callback: LocationCallback, fix: Coordinate) -> None:
        self.last_fix = fix
        self.logger.debug(
            "New location received: %s, %s", fix.latitude, fix.longitude
        )
        try:
            await callback(fix)
        except Exception:
            self.logger.exception("Location callback failed")


class StaticLocationProvider(PollingLocationProvider):
    """Replays a fixed sequence of fixes; further fixes can be pushed with emit()."""

    def __init__(
        self,
        coordinates: Iterable[Coordinate] = (),
        *,
        permission_granted: bool = True,
        enabled: bool = True,
        delay_seconds: float = 0.0,
    ):
        super().__init__()
        self.coordinates = list(coordinates)
        self.permission_granted = permission_granted
        self.enabled = enabled
        self.delay_seconds = delay_seconds
        self.subscribe_count = 0

    def is_enabled(self) -> bool:
        return self.enabled

    def has_permission(self) -> bool:
        return self.permission_granted

    async def subscribe(
        self, request: LocationRequest, callback: LocationCallback
    ) -> None:
        await super().subscribe(request, callback)
        self.subscribe_count += 1

    @property
    def subscribers(self) -> list[LocationCallback]:
        return [cb for cb, task in self._tasks.items() if not task.cancelled()]

    async def emit(self, fix: Coordinate) -> None:
        for callback in self.subscribers:
            await self._deliver(callback, fix)

    async def _run(self, request: LocationRequest, callback: LocationCallback) -> None:
        for fix in self.coordinates:
            if self.delay_seconds:
                await asyncio.sleep(self.delay_seconds)
            await self._deliver(callback, fix)
