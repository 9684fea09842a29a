"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- access: access mode, enrichment, user store location, hashing
- store: session store (cookie sign-in) settings
- websocket: connection limits, close codes, error codes
- chat: session domain defaults
- logging: log level and format
- telemetry: Sentry and OpenTelemetry settings
"""

from .access import (
    PUBLIC_MODE,
    NETWORK_ENRICHMENT_REQUIRED,
    REVERSE_PROXY_TRUSTED,
    USERS_DIR,
    PASSWORD_HASH_ROUNDS,
    TOKEN_BYTES,
    REVERSE_DNS_TIMEOUT_S,
)
from .store import (
    REDIS_URL,
    SESSION_COOKIE_NAME,
    SESSION_KEY_PREFIX,
    SESSION_STORE_TIMEOUT_S,
)
from .websocket import (
    MAX_CONCURRENT_CONNECTIONS,
    WS_HANDSHAKE_ACQUIRE_TIMEOUT_S,
)
from .chat import (
    DEFAULT_NICK,
    MORE_PAGE_SIZE,
    CHANNEL_HISTORY_LIMIT,
)

__all__ = [
    # access
    "PUBLIC_MODE",
    "NETWORK_ENRICHMENT_REQUIRED",
    "REVERSE_PROXY_TRUSTED",
    "USERS_DIR",
    "PASSWORD_HASH_ROUNDS",
    "TOKEN_BYTES",
    "REVERSE_DNS_TIMEOUT_S",
    # store
    "REDIS_URL",
    "SESSION_COOKIE_NAME",
    "SESSION_KEY_PREFIX",
    "SESSION_STORE_TIMEOUT_S",
    # websocket
    "MAX_CONCURRENT_CONNECTIONS",
    "WS_HANDSHAKE_ACQUIRE_TIMEOUT_S",
    # chat
    "DEFAULT_NICK",
    "MORE_PAGE_SIZE",
    "CHANNEL_HISTORY_LIMIT",
]
