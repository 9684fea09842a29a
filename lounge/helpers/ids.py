"""Process-unique integer ids for networks, channels and messages."""

from __future__ import annotations

import itertools

_ids = itertools.count(1)


def next_id() -> int:
    return next(_ids)


__all__ = ["next_id"]
