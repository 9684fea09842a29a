"""Authentication: credentials, strategies, provisioners, authenticator."""

from .passwords import PasswordHasher
from .credentials import Credentials
from .authenticator import Authenticator, AUTH_EVENT
from .strategies import (
    AuthStrategy,
    TokenStrategy,
    PasswordStrategy,
    StoredSessionStrategy,
    default_strategies,
)
from .provisioners import (
    SessionProvisioner,
    OpenAccessProvisioner,
    RestrictedAccessProvisioner,
)
from .result import (
    AuthResult,
    REASON_UNAUTHORIZED,
    REASON_SESSION_GONE,
    REASON_CONNECTION_CLOSED,
    REASON_MISSING_CREDENTIALS,
)

__all__ = [
    "AUTH_EVENT",
    "Authenticator",
    "AuthResult",
    "AuthStrategy",
    "Credentials",
    "OpenAccessProvisioner",
    "PasswordHasher",
    "PasswordStrategy",
    "REASON_CONNECTION_CLOSED",
    "REASON_MISSING_CREDENTIALS",
    "REASON_SESSION_GONE",
    "REASON_UNAUTHORIZED",
    "RestrictedAccessProvisioner",
    "SessionProvisioner",
    "StoredSessionStrategy",
    "TokenStrategy",
    "default_strategies",
]
