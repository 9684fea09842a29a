"""Reverse address resolution.

The system resolver is blocking, so lookups run in a worker thread.
"""

from __future__ import annotations

import socket
import asyncio
from collections.abc import Awaitable, Callable

from ..errors import ResolutionError

ReverseResolver = Callable[[str], Awaitable[list[str]]]


async def reverse_lookup(address: str) -> list[str]:
    """Return the hostnames registered for an address (primary name first).

    Raises:
        ResolutionError: If the address has no reverse record or is invalid.
    """
    try:
        hostname, aliases, _ = await asyncio.to_thread(socket.gethostbyaddr, address)
    except (OSError, UnicodeError, ValueError) as exc:
        raise ResolutionError(address, str(exc)) from exc
    return [name for name in (hostname, *aliases) if name]


__all__ = ["ReverseResolver", "reverse_lookup"]
