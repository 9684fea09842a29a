"""Outcome of an authentication attempt."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..handlers.session.session import Session

# Failure reasons
REASON_UNAUTHORIZED = "unauthorized"
REASON_MISSING_CREDENTIALS = "missing_credentials"
REASON_SESSION_GONE = "session_gone"
REASON_CONNECTION_CLOSED = "connection_closed"


@dataclass(frozen=True)
class AuthResult:
    """Session chosen for a connection, or the reason none was.

    Attributes:
        session: The selected session; None on failure.
        reason: Failure reason; None on success.
        strategy: Name of the strategy that matched (or "open-access").
    """

    session: Session | None = None
    reason: str | None = None
    strategy: str | None = None

    @property
    def ok(self) -> bool:
        return self.session is not None

    @classmethod
    def success(cls, session: Session, strategy: str) -> "AuthResult":
        return cls(session=session, strategy=strategy)

    @classmethod
    def failure(cls, reason: str = REASON_UNAUTHORIZED) -> "AuthResult":
        return cls(reason=reason)


__all__ = [
    "AuthResult",
    "REASON_UNAUTHORIZED",
    "REASON_MISSING_CREDENTIALS",
    "REASON_SESSION_GONE",
    "REASON_CONNECTION_CLOSED",
]
