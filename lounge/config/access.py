"""Access-mode and identity configuration.

LOUNGE_PUBLIC selects the session provisioning policy for the whole
process:

    open-access (true):
        Every connection gets a fresh, connection-scoped session without
        credentials. The session is removed when the connection closes.

    restricted-access (false):
        Sessions are loaded once from the user store at startup and a
        connection must authenticate against one of them.

LOUNGE_WEBIRC requires a session's origin hostname to be resolved (reverse
DNS) before a connection is bound to it. LOUNGE_REVERSE_PROXY makes the
server trust the X-Forwarded-For header for the client address.
"""

from __future__ import annotations

import os

from ..helpers.env import env_flag, env_path

PUBLIC_MODE = env_flag("LOUNGE_PUBLIC", False)
NETWORK_ENRICHMENT_REQUIRED = env_flag("LOUNGE_WEBIRC", False)
REVERSE_PROXY_TRUSTED = env_flag("LOUNGE_REVERSE_PROXY", False)

USERS_DIR = env_path("LOUNGE_USERS_DIR", "~/.lounge/users")

# bcrypt cost factor for newly computed password hashes
PASSWORD_HASH_ROUNDS = int(os.getenv("PASSWORD_HASH_ROUNDS", "8"))
# Bytes of randomness in a rotated session token (hex encoded on the wire)
TOKEN_BYTES = int(os.getenv("TOKEN_BYTES", "48"))

# Reverse lookups never hold a connection longer than this
REVERSE_DNS_TIMEOUT_S = float(os.getenv("REVERSE_DNS_TIMEOUT_S", "5"))

__all__ = [
    "PUBLIC_MODE",
    "NETWORK_ENRICHMENT_REQUIRED",
    "REVERSE_PROXY_TRUSTED",
    "USERS_DIR",
    "PASSWORD_HASH_ROUNDS",
    "TOKEN_BYTES",
    "REVERSE_DNS_TIMEOUT_S",
]
