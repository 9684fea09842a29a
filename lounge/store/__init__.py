"""Session store (cookie sign-in) and user store (restricted-access users)."""

from .users import UserStore
from .session_store import SessionStore, parse_principal

__all__ = ["SessionStore", "UserStore", "parse_principal"]
