"""WebSocket-specific runtime configuration values.

Limits:
    MAX_CONCURRENT_CONNECTIONS: Size of the process-wide connection pool.

    WS_HANDSHAKE_ACQUIRE_TIMEOUT_S: Max time to wait for a pool slot.
        If the server is at capacity, connections wait this long before
        being rejected.

Close Codes (RFC 6455):
    1000: Normal closure (client requested)
    1013: Try again later (server at capacity)
    4000+: Application-defined (signed out after a password change)

Error Codes:
    Machine-readable values used in outbound ``error`` frames.
"""

from __future__ import annotations

import os

# ============================================================================
# Limits
# ============================================================================

MAX_CONCURRENT_CONNECTIONS = int(os.getenv("MAX_CONCURRENT_CONNECTIONS", "200"))
WS_HANDSHAKE_ACQUIRE_TIMEOUT_S = float(os.getenv("WS_HANDSHAKE_ACQUIRE_TIMEOUT_S", "0.5"))

# ============================================================================
# WebSocket Close Codes
# ============================================================================

WS_CLOSE_BUSY_CODE = int(os.getenv("WS_CLOSE_BUSY_CODE", "1013"))  # Try again later
WS_CLOSE_CLIENT_REQUEST_CODE = int(os.getenv("WS_CLOSE_CLIENT_REQUEST_CODE", "1000"))  # Normal
WS_CLOSE_SIGNED_OUT_CODE = int(os.getenv("WS_CLOSE_SIGNED_OUT_CODE", "4001"))
WS_CLOSE_SIGNED_OUT_REASON = os.getenv("WS_CLOSE_SIGNED_OUT_REASON", "signed_out")

# ============================================================================
# Error Codes
# ============================================================================

WS_ERROR_INVALID_MESSAGE = "invalid_message"
WS_ERROR_UNKNOWN_TYPE = "unknown_message_type"
WS_ERROR_AT_CAPACITY = "server_at_capacity"
WS_ERROR_INTERNAL = "internal_error"

__all__ = [
    "MAX_CONCURRENT_CONNECTIONS",
    "WS_HANDSHAKE_ACQUIRE_TIMEOUT_S",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_CLIENT_REQUEST_CODE",
    "WS_CLOSE_SIGNED_OUT_CODE",
    "WS_CLOSE_SIGNED_OUT_REASON",
    "WS_ERROR_INVALID_MESSAGE",
    "WS_ERROR_UNKNOWN_TYPE",
    "WS_ERROR_AT_CAPACITY",
    "WS_ERROR_INTERNAL",
]
