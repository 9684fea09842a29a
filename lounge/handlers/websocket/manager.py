"""Primary WebSocket connection handler orchestration.

1. Connection Setup:
   - Pool admission (rejects with 1013 when at capacity)
   - Client address and stored-session reference extraction
   - Connect-time authentication (open or restricted access)

2. Message Routing:
   - Control messages: ping/pong/end
   - Everything else goes through the connection's current handler
     table: ``auth`` while unbound, the session operations once bound

3. Cleanup:
   - Leave broadcast rooms and detach from the session
   - Run connection close callbacks (open-access session removal)
   - Release the pool slot
"""

from __future__ import annotations

import time
import logging
import contextlib
from typing import TYPE_CHECKING

from fastapi import WebSocket, WebSocketDisconnect

from ...errors import classify_error
from ...logging import reset_log_context, set_log_context
from ...telemetry import capture_error, get_metrics
from ...config.websocket import (
    WS_CLOSE_BUSY_CODE,
    WS_CLOSE_CLIENT_REQUEST_CODE,
    WS_ERROR_AT_CAPACITY,
    WS_ERROR_INTERNAL,
    WS_ERROR_INVALID_MESSAGE,
    WS_ERROR_UNKNOWN_TYPE,
)
from .connection import Connection
from .parser import parse_client_message
from .errors import reject_connection, send_error
from .disconnects import is_expected_disconnect
from .address import client_address, session_reference

if TYPE_CHECKING:
    from ...runtime.dependencies import RuntimeDeps
    from ..connections import ConnectionPool

logger = logging.getLogger(__name__)

_CONTROL_EVENTS = frozenset({"ping", "pong", "end"})


async def _receive_text(ws: WebSocket) -> str | None:
    """Wait for the next frame; None for a binary frame."""
    message = await ws.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
    return message.get("text")


async def _prepare_connection(ws: WebSocket, pool: ConnectionPool) -> bool:
    """Admit and accept a WebSocket connection; reject it when the pool is full."""
    if not await pool.admit(ws):
        capacity_info = pool.get_capacity_info()
        get_metrics().connections_rejected_total.add(1, {"reason": WS_ERROR_AT_CAPACITY})
        await reject_connection(
            ws,
            error_code=WS_ERROR_AT_CAPACITY,
            message=(
                "Server is at capacity. "
                f"Active connections: {capacity_info['active']}/{capacity_info['max']}. "
                "Please try again later."
            ),
            close_code=WS_CLOSE_BUSY_CODE,
            extra={"capacity": capacity_info},
        )
        return False

    await ws.accept()
    return True


async def _handle_control_message(connection: Connection, event: str) -> bool:
    """Process ping/pong/end messages; return True if connection should close."""
    if event == "ping":
        await connection.emit("pong", {})
        return False
    if event == "end":
        logger.info("WS recv: end")
        await connection.emit("connection_closed", {"reason": "client_request"})
        await connection.close(code=WS_CLOSE_CLIENT_REQUEST_CODE)
        return True
    return False


def _tag_session(connection: Connection, tokens: list, tagged: bool) -> bool:
    if tagged or connection.session is None:
        return tagged
    tokens.extend(set_log_context(session=connection.session.name))
    return True


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    """Handle one WebSocket connection from handshake to teardown.

    Args:
        ws: The incoming WebSocket connection from FastAPI.
        runtime_deps: Process-wide services built at startup.
    """
    pool = runtime_deps.connections
    if not await _prepare_connection(ws, pool):
        return

    connection = Connection(ws, address=client_address(ws), session_ref=session_reference(ws))
    metrics = get_metrics()
    metrics.active_connections.add(1)
    started = time.perf_counter()
    tokens = set_log_context(connection=connection.id)
    tagged = False

    logger.info(
        "WebSocket connection accepted from %s. Active: %s",
        connection.address,
        pool.get_connection_count(),
    )

    try:
        await runtime_deps.authenticator.start(connection)
        tagged = _tag_session(connection, tokens, tagged)

        while not connection.closed:
            raw_msg = await _receive_text(ws)
            if raw_msg is None:
                await send_error(
                    ws,
                    error_code=WS_ERROR_INVALID_MESSAGE,
                    message="Binary frames are not supported.",
                )
                continue
            try:
                event, payload = parse_client_message(raw_msg)
            except ValueError as exc:
                await send_error(ws, error_code=WS_ERROR_INVALID_MESSAGE, message=str(exc))
                continue

            if event in _CONTROL_EVENTS:
                if await _handle_control_message(connection, event):
                    break
                continue

            if not await connection.dispatch(event, payload):
                await send_error(
                    ws,
                    error_code=WS_ERROR_UNKNOWN_TYPE,
                    message=f"Message type '{event}' is not supported.",
                )
                continue
            tagged = _tag_session(connection, tokens, tagged)
    except Exception as exc:  # noqa: BLE001
        if not is_expected_disconnect(exc):
            logger.exception("WebSocket error")
            metrics.errors_total.add(1, {"category": classify_error(exc)})
            capture_error(exc)
            with contextlib.suppress(Exception):
                await send_error(ws, error_code=WS_ERROR_INTERNAL, message="Internal server error.")
    finally:
        runtime_deps.binder.unbind(connection)
        await connection.finalize()
        await pool.release(ws)
        metrics.active_connections.add(-1)
        metrics.connection_duration.record(time.perf_counter() - started)
        logger.info("WebSocket connection closed. Active: %s", pool.get_connection_count())
        reset_log_context(tokens)


__all__ = ["handle_websocket_connection"]
