"""Connection binding: the unbound -> bound transition.

Binding swaps a connection's handler table for the session-scoped one,
attaches the connection to the session, joins it to the session's
broadcast room and sends the ``init`` snapshot. Every bound handler is a
closure over the bound session, so none of them re-checks
authentication.

Bound handler table:

    input, more, open, sort, names  -> forwarded to the session
    conn                            -> session.connect with server-side origin
    change-password                 -> restricted-access mode only
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

from ...messages.connect import handle_conn
from ...messages.forward import FORWARDED_EVENTS, forward_to_session
from ...messages.change_password import CHANGE_PASSWORD_EVENT, handle_change_password
from .connection import Connection, EventHandler

if TYPE_CHECKING:
    from ..rooms import BroadcastRooms
    from ..session.session import Session
    from ...auth.passwords import PasswordHasher

logger = logging.getLogger(__name__)

INIT_EVENT = "init"


class ConnectionBinder:
    """Bind connections to sessions and undo it when they close."""

    def __init__(self, rooms: BroadcastRooms, hasher: PasswordHasher, *, open_access: bool):
        self._rooms = rooms
        self._hasher = hasher
        self._open_access = open_access

    def handlers_for(self, session: Session) -> dict[str, EventHandler]:
        handlers: dict[str, EventHandler] = {
            event: partial(forward_to_session, session=session, operation=operation)
            for event, operation in FORWARDED_EVENTS.items()
        }
        handlers["conn"] = partial(handle_conn, session=session)
        if not self._open_access:
            handlers[CHANGE_PASSWORD_EVENT] = partial(
                handle_change_password,
                session=session,
                hasher=self._hasher,
            )
        return handlers

    async def bind(self, connection: Connection, session: Session) -> bool:
        """Bind a connection to a session.

        Returns:
            False if the connection closed before it could be bound or
            while the ``init`` snapshot was being sent; in the latter case
            the binding is undone.
        """
        if not connection.bind(session, self.handlers_for(session)):
            logger.info("bind to %s dropped: connection already closed", session.name)
            return False
        session.attach(connection)
        self._rooms.join(session.id, connection)
        logger.info(
            "connection %s bound to session %s (%s attached)",
            connection.id,
            session.name,
            len(session.connections),
        )
        if not await connection.emit(INIT_EVENT, session.snapshot()):
            self.unbind(connection)
            logger.info("connection %s closed during init for %s; unbound", connection.id, session.name)
            return False
        return True

    def unbind(self, connection: Connection) -> None:
        self._rooms.leave_all(connection)
        if connection.session is not None:
            connection.session.detach(connection)


__all__ = ["ConnectionBinder", "INIT_EVENT"]
