"""Session domain defaults (networks, channels, history paging)."""

import os


DEFAULT_NICK = os.getenv("LOUNGE_DEFAULT_NICK", "lounge-user")
DEFAULT_PORT = 6667
DEFAULT_TLS_PORT = 6697

# How many older messages a single "more" request returns
MORE_PAGE_SIZE = int(os.getenv("MORE_PAGE_SIZE", "100"))
# Messages kept in memory per channel
CHANNEL_HISTORY_LIMIT = int(os.getenv("CHANNEL_HISTORY_LIMIT", "1000"))


__all__ = [
    "DEFAULT_NICK",
    "DEFAULT_PORT",
    "DEFAULT_TLS_PORT",
    "MORE_PAGE_SIZE",
    "CHANNEL_HISTORY_LIMIT",
]
