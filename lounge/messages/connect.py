"""Handler for ``conn``: open a new upstream network for the session.

The origin fields a session forwards upstream (``ip``, ``hostname``) are
always the session's own enriched values. Whatever the client put in
those fields is overwritten before the session sees the payload.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..handlers.session.session import Session
    from ..handlers.websocket.connection import Connection

logger = logging.getLogger(__name__)


def with_session_origin(payload: dict[str, Any], session: Session) -> dict[str, Any]:
    data = dict(payload)
    data["ip"] = session.address
    data["hostname"] = session.hostname
    return data


async def handle_conn(
    connection: Connection,
    payload: dict[str, Any],
    *,
    session: Session,
) -> None:
    logger.info("WS recv: conn session=%s host=%s", session.name, payload.get("host"))
    await session.connect(with_session_origin(payload, session))


__all__ = ["handle_conn", "with_session_origin"]
