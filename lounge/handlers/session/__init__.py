"""Session state and the registry of live sessions."""

from .session import Session, generate_token
from .registry import SessionRegistry

__all__ = ["Session", "SessionRegistry", "generate_token"]
