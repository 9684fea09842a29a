"""Credential payload for a single authentication attempt."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


@dataclass(frozen=True)
class Credentials:
    """What a connection presents when it tries to sign in.

    Never stored beyond the attempt and never logged.

    Attributes:
        user: Username for the password strategy.
        password: Secret for the password strategy.
        token: Bearer token issued on a previous sign-in.
        session_ref: Stored-session reference (cookie) from the connection.
    """

    user: str | None = None
    password: str | None = None
    token: str | None = None
    session_ref: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | None, *, session_ref: str | None = None) -> "Credentials":
        data = payload or {}
        return cls(
            user=_text(data.get("user")),
            password=_text(data.get("password")),
            token=_text(data.get("token")),
            session_ref=session_ref or None,
        )

    def is_empty(self) -> bool:
        return not (self.user or self.password or self.token or self.session_ref)

    def __repr__(self) -> str:
        # Secrets stay out of reprs and tracebacks
        return (
            f"Credentials(user={self.user!r}, password={'***' if self.password else None}, "
            f"token={'***' if self.token else None}, session_ref={'***' if self.session_ref else None})"
        )


__all__ = ["Credentials"]
