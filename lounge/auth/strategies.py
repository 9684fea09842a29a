"""Credential strategies for restricted-access sign-in.

Each strategy is a predicate over ``(session, credentials, principal)``.
The provisioner tries them in order against every live session, in
registry order, and the first match selects the session:

1. stored-session: the connection's cookie resolved (via the session
   store) to a principal whose username equals the session's.
2. token: the payload's bearer token equals the session's token.
3. password: the payload's username equals the session's and its secret
   verifies against the session's stored hash. Skipped when the payload
   carries a token.
"""

from __future__ import annotations

import asyncio
import secrets
from typing import TYPE_CHECKING, Protocol

from .credentials import Credentials

if TYPE_CHECKING:
    from .passwords import PasswordHasher
    from ..handlers.session.session import Session


class AuthStrategy(Protocol):
    name: str

    async def matches(self, session: Session, credentials: Credentials, principal: str | None) -> bool:
        ...


class StoredSessionStrategy:
    name = "stored-session"

    async def matches(self, session: Session, credentials: Credentials, principal: str | None) -> bool:
        return principal is not None and principal == session.config.user


class TokenStrategy:
    name = "token"

    async def matches(self, session: Session, credentials: Credentials, principal: str | None) -> bool:
        token = session.config.token
        if not credentials.token or not token:
            return False
        return secrets.compare_digest(credentials.token.encode(), token.encode())


class PasswordStrategy:
    name = "password"

    def __init__(self, hasher: PasswordHasher):
        self._hasher = hasher

    async def matches(self, session: Session, credentials: Credentials, principal: str | None) -> bool:
        if credentials.token or not credentials.user:
            return False
        if credentials.user != session.config.user:
            return False
        # bcrypt is CPU-bound; keep it off the event loop
        return await asyncio.to_thread(
            self._hasher.verify,
            credentials.password or "",
            session.config.password,
        )


def default_strategies(hasher: PasswordHasher) -> tuple[AuthStrategy, ...]:
    return (StoredSessionStrategy(), TokenStrategy(), PasswordStrategy(hasher))


__all__ = [
    "AuthStrategy",
    "StoredSessionStrategy",
    "TokenStrategy",
    "PasswordStrategy",
    "default_strategies",
]
