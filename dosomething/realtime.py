"""Narrow interface to the real-time socket relay.

The socket server itself lives outside this service; the core only needs
to push a payload into a room (one room per user id) without waiting for
an acknowledgement.
"""

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any

logger = logging.getLogger(__name__)


class RealtimeBus(ABC):
    @abstractmethod
    async def emit(self, room: str, event: str, payload: dict[str, Any]) -> None:
        """Fire-and-forget publish of ``event`` to everyone in ``room``."""
        raise NotImplementedError


class LoggingRealtimeBus(RealtimeBus):
    """Default bus used until a socket relay is wired in."""

    async def emit(self, room: str, event: str, payload: dict[str, Any]) -> None:
        logger.debug("realtime emit room=%s event=%s", room, event)


class InMemoryRealtimeBus(RealtimeBus):
    """Process-wide bus that keeps what it emitted for connected rooms.

    Rooms are added on connect and dropped on disconnect; emits to a room
    nobody joined are discarded.
    """

    def __init__(self) -> None:
        self._active_rooms: set[str] = set()
        self.messages: dict[str, list[tuple[str, dict[str, Any]]]] = defaultdict(list)

    def connect(self, room: str) -> None:
        self._active_rooms.add(room)

    def disconnect(self, room: str) -> None:
        self._active_rooms.discard(room)
        self.messages.pop(room, None)

    def is_connected(self, room: str) -> bool:
        return room in self._active_rooms

    async def emit(self, room: str, event: str, payload: dict[str, Any]) -> None:
        if room not in self._active_rooms:
            return
        self.messages[room].append((event, payload))


realtime_bus: RealtimeBus = LoggingRealtimeBus()


def get_realtime_bus() -> RealtimeBus:
    return realtime_bus
