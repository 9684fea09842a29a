"""Direct forwards from bound-connection events to session operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..handlers.session.session import Session
    from ..handlers.websocket.connection import Connection

logger = logging.getLogger(__name__)

# event name -> Session method
FORWARDED_EVENTS: dict[str, str] = {
    "input": "input",
    "more": "more",
    "open": "open",
    "sort": "sort",
    "names": "names",
}


async def forward_to_session(
    connection: Connection,
    payload: dict[str, Any],
    *,
    session: Session,
    operation: str,
) -> None:
    logger.info("WS recv: %s session=%s", operation, session.name)
    await getattr(session, operation)(payload)


__all__ = ["FORWARDED_EVENTS", "forward_to_session"]
