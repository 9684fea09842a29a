"""Session store (cookie sign-in) configuration."""

import os


REDIS_URL = os.getenv("LOUNGE_REDIS_URL", "redis://localhost:6379/0")
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "session")
SESSION_KEY_PREFIX = os.getenv("SESSION_KEY_PREFIX", "session:")
SESSION_STORE_TIMEOUT_S = float(os.getenv("SESSION_STORE_TIMEOUT_S", "2"))


__all__ = [
    "REDIS_URL",
    "SESSION_COOKIE_NAME",
    "SESSION_KEY_PREFIX",
    "SESSION_STORE_TIMEOUT_S",
]
