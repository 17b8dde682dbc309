"""
Host connectivity checks.

An interface counts as usable when the kernel can pick a route for it towards
the public internet. Wi-Fi, cellular and wired links all qualify; a host with
only a loopback device does not.
"""

import asyncio
import socket
from collections.abc import AsyncIterator
from typing import Protocol

from weathercast.shared.logging_mixin import LoggingMixin


class NetworkAvailability(Protocol):
    def is_available(self) -> bool: ...


class RouteNetworkAvailability(LoggingMixin):
    """Reports whether a default route exists over IPv4 or IPv6.

    Connecting a UDP socket only asks the kernel for a route; no packet is sent.
    """

    socket_factory = socket.socket

    ROUTE_TARGETS = (
        (socket.AF_INET, ("192.0.2.1", 53)),
        (socket.AF_INET6, ("2001:db8::1", 53)),
    )

    def is_available(self) -> bool:
        for family, address in self.ROUTE_TARGETS:
            if self._has_route(family, address):
                return True
        self.logger.debug("No active network transport found")
        return False

    def _has_route(self, family: socket.AddressFamily, address: tuple) -> bool:
        try:
            with self.socket_factory(family, socket.SOCK_DGRAM) as sock:
                sock.connect(address)
                local_address = sock.getsockname()[0]
        except OSError:
            return False
        return not self._is_loopback(local_address)

    @staticmethod
    def _is_loopback(address: str) -> bool:
        return address.startswith("127.") or address == "::1"


class StaticNetworkAvailability:
    """Fixed answer, for tests and for hosts where connectivity is known upfront."""

    def __init__(self, available: bool = True):
        self.available = available

    def is_available(self) -> bool:
        return self.available


async def watch_network(
    availability: NetworkAvailability, poll_interval: float
) -> AsyncIterator[bool]:
    """Yield the current availability, then every change of it."""
    last = availability.is_available()
    yield last
    while True:
        await asyncio.sleep(poll_interval)
        current = availability.is_available()
        if current != last:
            last = current
            yield current
