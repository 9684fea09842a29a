"""Runtime dependency container.

All long-lived runtime services are assembled at startup and passed explicitly
through request handlers. This avoids module-level singletons that tests would
have to reset between cases.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lounge.auth import Authenticator
    from lounge.store import UserStore
    from lounge.handlers.rooms import BroadcastRooms
    from lounge.handlers.connections import ConnectionPool
    from lounge.handlers.session import SessionRegistry
    from lounge.handlers.websocket import ConnectionBinder

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RuntimeDeps:
    """Process-wide runtime services initialized during startup."""

    connections: ConnectionPool
    registry: SessionRegistry
    rooms: BroadcastRooms
    binder: ConnectionBinder
    authenticator: Authenticator
    users: UserStore | None = None

    @property
    def open_access(self) -> bool:
        return self.authenticator.open_access

    def status(self) -> dict:
        return {
            "status": "ok",
            "mode": "public" if self.open_access else "private",
            "sessions": len(self.registry),
            "connections": self.connections.get_capacity_info(),
        }

    async def shutdown(self) -> None:
        sessions = self.registry.clear()
        for session in sessions:
            session.quit()
        logger.info("runtime shut down; %s session(s) closed", len(sessions))
