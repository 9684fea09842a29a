"""Authenticator: decide which session a connection binds to.

Flow for one attempt::

    credentials -> provisioner.provision() -> [enrich] -> binder.bind()

Connect-time behaviour depends on the access mode:

- open-access: an attempt runs immediately, without credentials.
- restricted-access: the connection accepts only ``auth`` events. If it
  presented a stored-session reference (cookie) a silent attempt runs
  first; if the connection is still unbound afterwards the sign-in
  prompt ``auth {success: true}`` is sent.

A failed attempt emits ``auth {success: false}`` and leaves the
connection unbound and free to retry. The matched session can vanish or
the connection can close while enrichment is suspended; both end the
attempt cleanly without binding.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .credentials import Credentials
from ..telemetry import get_metrics
from ..config.access import NETWORK_ENRICHMENT_REQUIRED
from .result import AuthResult, REASON_CONNECTION_CLOSED, REASON_SESSION_GONE

if TYPE_CHECKING:
    from .provisioners import SessionProvisioner
    from ..identity.enricher import NetworkIdentityEnricher
    from ..handlers.session.registry import SessionRegistry
    from ..handlers.websocket.binder import ConnectionBinder
    from ..handlers.websocket.connection import Connection

logger = logging.getLogger(__name__)

AUTH_EVENT = "auth"


class Authenticator:
    """Run sign-in attempts and hand successful ones to the binder."""

    def __init__(
        self,
        provisioner: SessionProvisioner,
        registry: SessionRegistry,
        binder: ConnectionBinder,
        enricher: NetworkIdentityEnricher,
        *,
        enrichment_required: bool = NETWORK_ENRICHMENT_REQUIRED,
    ):
        self._provisioner = provisioner
        self._registry = registry
        self._binder = binder
        self._enricher = enricher
        self._enrichment_required = enrichment_required

    @property
    def open_access(self) -> bool:
        return self._provisioner.open_access

    async def start(self, connection: Connection) -> None:
        """Connect-time entry point for a freshly accepted connection."""
        if self.open_access:
            await self.authenticate(connection)
            return

        connection.expect({AUTH_EVENT: self._handle_auth_event})
        if connection.session_ref:
            result = await self.authenticate(connection, notify=False)
            if result.ok:
                return
        await connection.emit(AUTH_EVENT, {"success": True})

    async def _handle_auth_event(self, connection: Connection, payload: dict[str, Any]) -> None:
        await self.authenticate(connection, payload)

    async def authenticate(
        self,
        connection: Connection,
        payload: dict[str, Any] | None = None,
        *,
        notify: bool = True,
    ) -> AuthResult:
        """Run one authentication attempt for a connection.

        Args:
            connection: The unbound connection signing in.
            payload: The ``auth`` event payload (ignored in open-access mode).
            notify: Emit ``auth {success: false}`` when the attempt fails.

        Returns:
            The AuthResult; ``reason`` is set only on failure.
        """
        credentials = Credentials.from_payload(payload, session_ref=connection.session_ref)
        result = await self._provisioner.provision(connection, credentials)
        if result.ok:
            result = await self._bind(connection, result)

        get_metrics().auth_attempts_total.add(
            1,
            {"outcome": "success" if result.ok else result.reason, "strategy": result.strategy or "none"},
        )
        if not result.ok and notify:
            await connection.emit(AUTH_EVENT, {"success": False})
        return result

    async def _bind(self, connection: Connection, result: AuthResult) -> AuthResult:
        session = result.session
        if self._enrichment_required:
            await self._enricher.enrich(connection, session)

        if connection.closed:
            logger.info("connection closed during sign-in; dropping bind to %s", session.name)
            return AuthResult.failure(REASON_CONNECTION_CLOSED)
        if not self._registry.contains(session):
            logger.warning("session %s vanished during sign-in", session.name)
            return AuthResult.failure(REASON_SESSION_GONE)
        if not await self._binder.bind(connection, session):
            return AuthResult.failure(REASON_CONNECTION_CLOSED)
        return result


__all__ = ["Authenticator", "AUTH_EVENT"]
