"""Connection: one real-time link to a client device.

A connection is a two-state machine::

    unbound --bind(session, handlers)--> bound

While unbound it only carries the handlers needed to authenticate (in
restricted-access mode, ``auth``). Binding is the single transition: it
swaps in the session's handler table and is never re-entered. Inbound
events are dispatched through the table of the current state, so no
bound handler needs to re-check authentication.
"""

from __future__ import annotations

import uuid
import enum
import inspect
import logging
import contextlib
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from fastapi import WebSocket

from ...errors import ConnectionStateError
from .helpers import safe_send_event

if TYPE_CHECKING:
    from ..session.session import Session

logger = logging.getLogger(__name__)

EventHandler = Callable[["Connection", dict[str, Any]], Awaitable[None]]
CloseCallback = Callable[[], Any]


class ConnectionState(str, enum.Enum):
    UNBOUND = "unbound"
    BOUND = "bound"


class Connection:
    """Transport endpoint plus binding state.

    Attributes:
        id: Process-unique connection id (log context, room membership).
        address: Client network address as seen by the server.
        session_ref: Stored-session reference presented on connect (cookie).
        state: ConnectionState.UNBOUND or ConnectionState.BOUND.
        session: The bound session, None while unbound.
        closed: True once the transport is gone; later sends are dropped.
    """

    def __init__(
        self,
        websocket: WebSocket,
        *,
        address: str,
        session_ref: str | None = None,
    ):
        self.id = uuid.uuid4().hex[:12]
        self.address = address
        self.session_ref = session_ref or None
        self.state = ConnectionState.UNBOUND
        self.session: Session | None = None
        self.closed = False
        self._ws = websocket
        self._hostname: str | None = None
        self._handlers: dict[str, EventHandler] = {}
        self._close_callbacks: list[CloseCallback] = []

    @property
    def hostname(self) -> str | None:
        return self._hostname

    def set_hostname(self, hostname: str | None) -> None:
        if self._hostname is None and hostname:
            self._hostname = hostname

    @property
    def bound(self) -> bool:
        return self.state is ConnectionState.BOUND

    @property
    def events(self) -> frozenset[str]:
        """Event names the connection accepts in its current state."""
        return frozenset(self._handlers)

    def expect(self, handlers: dict[str, EventHandler]) -> None:
        """Install the unbound-state handlers (authentication only)."""
        if self.bound:
            raise ConnectionStateError("cannot install unbound handlers on a bound connection")
        self._handlers = dict(handlers)

    def bind(self, session: Session, handlers: dict[str, EventHandler]) -> bool:
        """Transition unbound -> bound.

        Returns:
            False if the transport already closed (the bind is dropped).

        Raises:
            ConnectionStateError: If the connection is already bound.
        """
        if self.bound:
            raise ConnectionStateError(f"connection {self.id} is already bound")
        if self.closed:
            return False
        self.state = ConnectionState.BOUND
        self.session = session
        self._handlers = dict(handlers)
        return True

    async def dispatch(self, event: str, payload: dict[str, Any]) -> bool:
        """Run the handler registered for an event; False if there is none."""
        handler = self._handlers.get(event)
        if handler is None:
            return False
        await handler(self, payload)
        return True

    async def emit(self, event: str, payload: dict[str, Any]) -> bool:
        if self.closed:
            return False
        sent = await safe_send_event(self._ws, event, payload)
        if not sent:
            self.closed = True
        return sent

    def on_close(self, callback: CloseCallback) -> None:
        self._close_callbacks.append(callback)

    async def close(self, *, code: int, reason: str = "") -> None:
        if self.closed:
            return
        self.closed = True
        with contextlib.suppress(Exception):
            await self._ws.close(code=code, reason=reason)

    async def finalize(self) -> None:
        """Mark the transport gone and run close callbacks exactly once."""
        self.closed = True
        callbacks, self._close_callbacks = self._close_callbacks, []
        for callback in callbacks:
            try:
                result = callback()
                if inspect.isawaitable(result):
                    await result
            except Exception:  # noqa: BLE001
                logger.exception("connection %s close callback failed", self.id)


__all__ = ["Connection", "ConnectionState", "EventHandler"]
