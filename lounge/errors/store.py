"""Session store failures.

The session store is consulted for cookie sign-in only. A failure there
never fails an authentication attempt: the adapter logs it and reports
the record as absent, so the strategy chain moves on.
"""


class StoreUnavailableError(Exception):
    """Raised when the session store cannot be reached or times out."""


__all__ = ["StoreUnavailableError"]
