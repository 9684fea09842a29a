"""Session provisioning policies.

One ``SessionProvisioner`` is selected at startup from LOUNGE_PUBLIC:

OpenAccessProvisioner:
    Ignores credentials. Creates a fresh session per connection, adds it to
    the registry and arranges for its removal when the connection closes,
    whatever the outcome of the rest of the sign-in.

RestrictedAccessProvisioner:
    Requires credentials. Resolves the stored-session reference (if any)
    once, snapshots the registry, and scans it session by session through
    the strategy chain; the first match wins. Never creates sessions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from .credentials import Credentials
from .result import AuthResult, REASON_MISSING_CREDENTIALS, REASON_UNAUTHORIZED
from .strategies import AuthStrategy
from ..handlers.session.session import Session

if TYPE_CHECKING:
    from ..store.session_store import SessionStore
    from ..handlers.rooms import BroadcastRooms
    from ..handlers.session.registry import SessionRegistry
    from ..handlers.websocket.connection import Connection

logger = logging.getLogger(__name__)


class SessionProvisioner(Protocol):
    open_access: bool

    async def provision(self, connection: Connection, credentials: Credentials) -> AuthResult:
        ...


class OpenAccessProvisioner:
    """One throwaway session per connection."""

    open_access = True

    def __init__(self, registry: SessionRegistry, rooms: BroadcastRooms):
        self._registry = registry
        self._rooms = rooms

    async def provision(self, connection: Connection, credentials: Credentials) -> AuthResult:
        session = Session(rooms=self._rooms)
        self._registry.add(session)
        connection.on_close(lambda: self.release(session))
        return AuthResult.success(session, "open-access")

    def release(self, session: Session) -> None:
        if self._registry.remove(session):
            session.quit()


class RestrictedAccessProvisioner:
    """Match credentials against the preloaded sessions."""

    open_access = False

    def __init__(
        self,
        registry: SessionRegistry,
        session_store: SessionStore,
        strategies: tuple[AuthStrategy, ...],
    ):
        self._registry = registry
        self._session_store = session_store
        self._strategies = strategies

    async def provision(self, connection: Connection, credentials: Credentials) -> AuthResult:
        if credentials.is_empty():
            return AuthResult.failure(REASON_MISSING_CREDENTIALS)

        principal = None
        if credentials.session_ref:
            principal = await self._session_store.resolve(credentials.session_ref)

        for session in self._registry.snapshot():
            for strategy in self._strategies:
                if await strategy.matches(session, credentials, principal):
                    logger.info("sign-in matched session %s via %s", session.name, strategy.name)
                    return AuthResult.success(session, strategy.name)

        logger.info("sign-in failed: no session matched")
        return AuthResult.failure(REASON_UNAUTHORIZED)


__all__ = ["SessionProvisioner", "OpenAccessProvisioner", "RestrictedAccessProvisioner"]
