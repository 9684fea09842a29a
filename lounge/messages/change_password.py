"""Handler for ``change-password`` (restricted-access mode only).

Checks run in order and the first failure is reported:

1. the new password is non-empty
2. the new password equals its confirmation
3. the current password verifies against the stored hash

On success the new hash is persisted (with a rotated token) and the
client receives the new token; the session's other connections are
signed out. A persistence failure leaves the stored hash untouched and
is reported with a generic message.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from ..errors import ValidationError

if TYPE_CHECKING:
    from ..auth.passwords import PasswordHasher
    from ..handlers.session.session import Session
    from ..handlers.websocket.connection import Connection

logger = logging.getLogger(__name__)

CHANGE_PASSWORD_EVENT = "change-password"

MSG_EMPTY_PASSWORD = "Please enter a new password"
MSG_MISMATCH = "Both new password fields must match"
MSG_WRONG_CURRENT = "The current password field does not match your account password"
MSG_SUCCESS = "Successfully updated your password, all your other sessions were logged out"
MSG_FAILED = "Failed to update your password"


async def validate_password_change(
    payload: dict[str, Any],
    *,
    session: Session,
    hasher: PasswordHasher,
) -> str:
    """Return the new password if every check passes.

    Raises:
        ValidationError: On the first violated check.
    """
    old = payload.get("old_password")
    new = payload.get("new_password")
    confirm = payload.get("verify_password")

    if not isinstance(new, str) or new == "":
        raise ValidationError("empty_password", MSG_EMPTY_PASSWORD)
    if new != confirm:
        raise ValidationError("password_mismatch", MSG_MISMATCH)
    current = old if isinstance(old, str) else ""
    if not await asyncio.to_thread(hasher.verify, current, session.config.password):
        raise ValidationError("wrong_password", MSG_WRONG_CURRENT)
    return new


async def handle_change_password(
    connection: Connection,
    payload: dict[str, Any],
    *,
    session: Session,
    hasher: PasswordHasher,
) -> None:
    logger.info("WS recv: change-password session=%s", session.name)
    try:
        new_password = await validate_password_change(payload, session=session, hasher=hasher)
    except ValidationError as exc:
        logger.info("change-password rejected: %s", exc.error_code)
        await connection.emit(CHANGE_PASSWORD_EVENT, {"error": exc.message})
        return

    password_hash = await asyncio.to_thread(hasher.hash, new_password)
    if not await session.set_password(password_hash):
        await connection.emit(CHANGE_PASSWORD_EVENT, {"error": MSG_FAILED})
        return

    await connection.emit(
        CHANGE_PASSWORD_EVENT,
        {"success": MSG_SUCCESS, "token": session.config.token},
    )
    signed_out = await session.sign_out_others(connection)
    if signed_out:
        logger.info("signed out %s other connection(s) of %s", signed_out, session.name)


__all__ = [
    "CHANGE_PASSWORD_EVENT",
    "handle_change_password",
    "validate_password_change",
    "MSG_EMPTY_PASSWORD",
    "MSG_MISMATCH",
    "MSG_WRONG_CURRENT",
    "MSG_SUCCESS",
    "MSG_FAILED",
]
