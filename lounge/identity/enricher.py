"""Network identity enrichment.

Before a connection is bound to a session that requires it, the session's
origin address is reverse-resolved to a hostname. The result is attached
to the session exactly once: later enrichments never overwrite it.

Lookups are best effort. A resolver error, timeout or empty answer falls
back to the raw address as the hostname, so enrichment always completes
and the caller always proceeds to binding.

Concurrent enrichments of the same session (two devices signing in at
once) share a single in-flight lookup instead of racing two.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..errors import ResolutionError
from ..telemetry import get_metrics
from ..config.access import REVERSE_DNS_TIMEOUT_S
from .resolver import ReverseResolver, reverse_lookup

if TYPE_CHECKING:
    from ..handlers.session.session import Session
    from ..handlers.websocket.connection import Connection

logger = logging.getLogger(__name__)


class NetworkIdentityEnricher:
    """Attach a derived hostname to sessions and connections."""

    def __init__(
        self,
        resolver: ReverseResolver = reverse_lookup,
        *,
        timeout_s: float = REVERSE_DNS_TIMEOUT_S,
    ):
        self._resolver = resolver
        self._timeout_s = timeout_s
        self._inflight: dict[str, asyncio.Future[tuple[str, str]]] = {}

    async def resolve_hostname(self, address: str) -> str:
        """Resolve an address, falling back to the address itself."""
        try:
            names = await asyncio.wait_for(self._resolver(address), timeout=self._timeout_s)
        except (ResolutionError, OSError, ValueError, asyncio.TimeoutError) as exc:
            get_metrics().reverse_dns_fallbacks_total.add(1)
            logger.debug("reverse lookup for %s failed (%s); using address", address, exc)
            return address

        if not names or not names[0]:
            get_metrics().reverse_dns_fallbacks_total.add(1)
            logger.debug("reverse lookup for %s returned no names; using address", address)
            return address
        return names[0]

    async def _lookup(self, address: str) -> tuple[str, str]:
        return address, await self.resolve_hostname(address)

    def _pending_lookup(self, session: Session, address: str) -> asyncio.Future[tuple[str, str]]:
        pending = self._inflight.get(session.id)
        if pending is None:
            pending = asyncio.ensure_future(self._lookup(address))
            self._inflight[session.id] = pending
            pending.add_done_callback(lambda _: self._inflight.pop(session.id, None))
        return pending

    async def enrich(self, connection: Connection, session: Session) -> str:
        """Ensure the session has an origin hostname and return it.

        Args:
            connection: The connection whose address seeds the lookup when
                the session has no configured address of its own.
            session: The session being enriched.

        Returns:
            The session's hostname after enrichment (unchanged if it was
            already set).
        """
        if session.hostname is None:
            seed = session.address or connection.address
            address, hostname = await asyncio.shield(self._pending_lookup(session, seed))
            if session.set_network_identity(address, hostname):
                logger.info("session %s origin resolved to %s", session.name, hostname)
        connection.set_hostname(session.hostname)
        return session.hostname


__all__ = ["NetworkIdentityEnricher"]
