"""Broadcast rooms for session-originated events.

Every bound connection joins the room keyed by its session id, so an
event a session emits reaches all of the devices currently attached to
it. Rooms hold plain references; a connection leaves every room it joined
when it closes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .websocket.connection import Connection

logger = logging.getLogger(__name__)


class BroadcastRooms:
    """Room name -> member connections, in join order."""

    def __init__(self) -> None:
        self._rooms: dict[str, dict[str, Connection]] = {}

    def join(self, room: str, connection: Connection) -> None:
        self._rooms.setdefault(room, {})[connection.id] = connection

    def leave(self, room: str, connection: Connection) -> None:
        members = self._rooms.get(room)
        if members is None:
            return
        members.pop(connection.id, None)
        if not members:
            del self._rooms[room]

    def leave_all(self, connection: Connection) -> None:
        for room in [name for name, members in self._rooms.items() if connection.id in members]:
            self.leave(room, connection)

    def members(self, room: str) -> list[Connection]:
        return list(self._rooms.get(room, {}).values())

    async def broadcast(self, room: str, event: str, payload: dict[str, Any]) -> int:
        """Emit an event to every member of a room; return how many received it."""
        members = self.members(room)
        delivered = 0
        for connection in members:
            if await connection.emit(event, payload):
                delivered += 1
        logger.debug("broadcast %s to room %s: %s/%s delivered", event, room, delivered, len(members))
        return delivered


__all__ = ["BroadcastRooms"]
