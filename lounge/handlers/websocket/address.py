"""Client address and stored-session reference extraction."""

from __future__ import annotations

from fastapi import WebSocket

from ...config.store import SESSION_COOKIE_NAME
from ...config.access import REVERSE_PROXY_TRUSTED


def client_address(ws: WebSocket, *, trust_proxy: bool = REVERSE_PROXY_TRUSTED) -> str:
    """Return the client's address.

    Behind a trusted reverse proxy the first ``X-Forwarded-For`` entry is
    the real client; otherwise only the socket peer is trusted.
    """
    peer = ws.client.host if ws.client else ""
    if not trust_proxy:
        return peer
    forwarded = ws.headers.get("x-forwarded-for") or ""
    first = forwarded.split(",")[0].strip()
    return first or peer


def session_reference(ws: WebSocket, *, cookie_name: str = SESSION_COOKIE_NAME) -> str | None:
    """Return the stored-session reference the client presented, if any."""
    value = ws.cookies.get(cookie_name)
    if not value:
        return None
    return value.strip() or None


__all__ = ["client_address", "session_reference"]
