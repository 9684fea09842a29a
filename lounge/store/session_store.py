"""Session store adapter for cookie sign-in.

A web front end issues an opaque ``session`` cookie and records
``<prefix><reference>`` in Redis as a JSON object holding at least
``{"username": ...}``. This adapter resolves such a reference to the
principal's username.

Every lookup is a scoped acquisition: a Redis client is created for the
single GET and closed again before ``resolve`` returns, whatever the
outcome. The lookup is bounded by a timeout, and any transport error,
timeout, missing key or malformed record is reported as ``None`` so that
authentication moves on to the next strategy instead of failing.
"""

from __future__ import annotations

import json
import asyncio
import logging
import contextlib
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..errors import StoreUnavailableError
from ..telemetry import get_metrics
from ..config.store import REDIS_URL, SESSION_KEY_PREFIX, SESSION_STORE_TIMEOUT_S

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], Any]


def parse_principal(raw: Any) -> str | None:
    """Extract the username from a stored session record, or None if unreadable."""
    if raw is None:
        return None
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return None
    try:
        record = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(record, dict):
        return None
    username = record.get("username")
    if isinstance(username, str) and username:
        return username
    return None


class SessionStore:
    """Resolve stored-session references to principal identities.

    Attributes:
        key_prefix: Prefix prepended to every reference to form the Redis key.
        timeout_s: Upper bound for a single lookup.
    """

    def __init__(
        self,
        url: str = REDIS_URL,
        *,
        key_prefix: str = SESSION_KEY_PREFIX,
        timeout_s: float = SESSION_STORE_TIMEOUT_S,
        client_factory: ClientFactory | None = None,
    ):
        """Initialize the adapter.

        Args:
            url: Redis connection URL.
            key_prefix: Prefix for session keys.
            timeout_s: Per-lookup timeout in seconds.
            client_factory: Override for building the per-lookup client
                (tests inject an in-memory fake).
        """
        self.key_prefix = key_prefix
        self.timeout_s = timeout_s
        self._client_factory = client_factory or (
            lambda: redis.Redis.from_url(
                url,
                decode_responses=True,
                socket_timeout=timeout_s,
                socket_connect_timeout=timeout_s,
            )
        )

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[Any]:
        client = self._client_factory()
        try:
            yield client
        finally:
            with contextlib.suppress(RedisError, OSError):
                await client.aclose()

    async def _fetch(self, reference: str) -> Any:
        try:
            async with self._connection() as client:
                return await asyncio.wait_for(
                    client.get(f"{self.key_prefix}{reference}"),
                    timeout=self.timeout_s,
                )
        except (RedisError, OSError, asyncio.TimeoutError) as exc:
            raise StoreUnavailableError(str(exc) or type(exc).__name__) from exc

    async def resolve(self, reference: str | None) -> str | None:
        """Return the username a session reference belongs to, or None.

        Args:
            reference: The opaque session reference (cookie value).

        Returns:
            The principal's username, or None when the reference is unknown,
            expired, malformed or the store is unavailable.
        """
        if not reference:
            return None
        try:
            raw = await self._fetch(reference)
        except StoreUnavailableError as exc:
            get_metrics().session_store_failures_total.add(1)
            logger.warning("session store lookup failed; treating as absent: %s", exc)
            return None

        principal = parse_principal(raw)
        if raw is not None and principal is None:
            logger.warning("session store record unreadable; treating as absent")
        return principal


__all__ = ["SessionStore", "parse_principal"]
