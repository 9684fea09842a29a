"""Password hashing and verification (bcrypt via passlib)."""

from __future__ import annotations

import logging

from passlib.context import CryptContext

from ..config.access import PASSWORD_HASH_ROUNDS

logger = logging.getLogger(__name__)


def _normalize_password(password: str) -> str:
    """Truncate to bcrypt's 72-byte limit without splitting a UTF-8 sequence."""
    return password.encode("utf-8")[:72].decode("utf-8", errors="ignore")


class PasswordHasher:
    """bcrypt verify/hash capability used by sign-in and change-password."""

    def __init__(self, rounds: int = PASSWORD_HASH_ROUNDS):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(_normalize_password(password))

    def verify(self, password: str, hashed: str | None) -> bool:
        """Check a secret against a stored hash; a missing or unreadable hash never verifies."""
        if not hashed:
            return False
        try:
            return self._context.verify(_normalize_password(password or ""), hashed)
        except (ValueError, TypeError):
            logger.warning("stored password hash is unreadable")
            return False


__all__ = ["PasswordHasher"]
