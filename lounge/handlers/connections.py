"""Connection pool enforcing MAX_CONCURRENT_CONNECTIONS.

Admission is two-stage:

1. Semaphore acquisition (with timeout) reserves a slot
2. Lock-protected set addition tracks the socket

A socket that was never admitted is never released, so a rejected
handshake cannot hand back a slot it did not take.

Example:
    pool = ConnectionPool(max_connections=100)

    if not await pool.admit(ws):
        ...  # reject with 1013
    try:
        ...
    finally:
        await pool.release(ws)
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import WebSocket

from ..config.websocket import MAX_CONCURRENT_CONNECTIONS, WS_HANDSHAKE_ACQUIRE_TIMEOUT_S

logger = logging.getLogger(__name__)


class ConnectionPool:
    """Bounded set of live WebSocket connections.

    Attributes:
        max_connections: Maximum allowed concurrent connections.
        acquire_timeout: Max seconds to wait for a slot.
        active_connections: Sockets currently holding a slot.
    """

    def __init__(
        self,
        max_connections: int = MAX_CONCURRENT_CONNECTIONS,
        acquire_timeout: float = WS_HANDSHAKE_ACQUIRE_TIMEOUT_S,
    ):
        if max_connections < 1:
            raise ValueError("max_connections must be at least 1")
        self.max_connections = max_connections
        self.acquire_timeout = acquire_timeout
        self.active_connections: set[WebSocket] = set()
        self._lock = asyncio.Lock()
        self._semaphore = asyncio.Semaphore(max_connections)

    async def admit(self, websocket: WebSocket) -> bool:
        """Reserve a slot for a socket; False if the pool stayed full."""
        try:
            await asyncio.wait_for(self._semaphore.acquire(), timeout=self.acquire_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Connection rejected: at capacity (%s/%s)",
                len(self.active_connections),
                self.max_connections,
            )
            return False

        try:
            async with self._lock:
                self.active_connections.add(websocket)
                return True
        except BaseException:
            self._semaphore.release()
            raise

    async def release(self, websocket: WebSocket) -> None:
        should_release = False
        async with self._lock:
            if websocket in self.active_connections:
                self.active_connections.remove(websocket)
                should_release = True
        if should_release:
            self._semaphore.release()

    def get_connection_count(self) -> int:
        return len(self.active_connections)

    def get_capacity_info(self) -> dict:
        active = len(self.active_connections)
        return {
            "active": active,
            "max": self.max_connections,
            "available": self.max_connections - active,
            "at_capacity": active >= self.max_connections,
        }


__all__ = ["ConnectionPool"]
