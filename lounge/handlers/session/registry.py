"""Session registry: the set of live sessions.

The registry is the only owner of sessions; connections only hold a
reference to the session they are bound to. Iteration order is insertion
order and is stable, which makes it the tie-break when two sessions match
the same credential.

Mutation happens only on the event loop, but authentication attempts may
suspend mid-scan. Scans therefore run over ``snapshot()``, an immutable
copy taken at the start of the attempt, and callers re-check ``contains``
after resuming.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .session import Session

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Insertion-ordered collection of live sessions keyed by session id."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def add(self, session: Session) -> None:
        if session.id in self._sessions:
            return
        self._sessions[session.id] = session
        logger.info("session %s added (%s live)", session.name, len(self._sessions))

    def remove(self, session: Session) -> bool:
        """Remove a session; removing an absent session is a no-op."""
        removed = self._sessions.pop(session.id, None) is not None
        if removed:
            logger.info("session %s removed (%s live)", session.name, len(self._sessions))
        return removed

    def contains(self, session: Session) -> bool:
        return self._sessions.get(session.id) is session

    def all(self) -> tuple[Session, ...]:
        """Return the live sessions in insertion order."""
        return tuple(self._sessions.values())

    snapshot = all

    def clear(self) -> list[Session]:
        """Remove every session and return them (used at shutdown)."""
        sessions = list(self._sessions.values())
        self._sessions.clear()
        return sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[Session]:
        return iter(self.all())


__all__ = ["SessionRegistry"]
