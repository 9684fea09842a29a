"""Bound-connection event handlers.

forward.py:
    input, more, open, sort, names -> the session operation of that name.

connect.py:
    conn -> Session.connect, with origin fields forced to the session's own.

change_password.py:
    change-password -> validate, hash, persist, rotate token (restricted
    access only).
"""

from .connect import handle_conn, with_session_origin
from .forward import FORWARDED_EVENTS, forward_to_session
from .change_password import CHANGE_PASSWORD_EVENT, handle_change_password

__all__ = [
    "CHANGE_PASSWORD_EVENT",
    "FORWARDED_EVENTS",
    "forward_to_session",
    "handle_change_password",
    "handle_conn",
    "with_session_origin",
]
