"""Sentry error tracking with per-class rate-limiting."""

from __future__ import annotations

import time
import logging
from typing import Any

from ..logging import current_log_context
from ..config.telemetry import (
    SENTRY_DSN,
    SENTRY_RELEASE,
    SENTRY_ENVIRONMENT,
    SENTRY_SAMPLE_RATE,
    SENTRY_RATE_LIMIT_S,
    SENTRY_TAG_SESSION,
    SENTRY_TAG_CONNECTION,
)

logger = logging.getLogger(__name__)

_error_timestamps: dict[str, float] = {}
_initialized: bool = False


def init_sentry() -> None:
    """Initialize Sentry SDK. Idempotent."""
    global _initialized  # noqa: PLW0603
    if _initialized:
        return
    import sentry_sdk

    kwargs: dict[str, Any] = {
        "dsn": SENTRY_DSN,
        "environment": SENTRY_ENVIRONMENT,
        "traces_sample_rate": 0.0,
        "sample_rate": SENTRY_SAMPLE_RATE,
        "attach_stacktrace": True,
        # Auth payloads carry secrets
        "send_default_pii": False,
    }
    if SENTRY_RELEASE:
        kwargs["release"] = SENTRY_RELEASE

    sentry_sdk.init(**kwargs)
    _initialized = True
    logger.info("Sentry initialized: environment=%s", SENTRY_ENVIRONMENT)


def shutdown_sentry() -> None:
    """Flush Sentry events. Idempotent."""
    global _initialized  # noqa: PLW0603
    if not _initialized:
        return
    import sentry_sdk

    sentry_sdk.flush(timeout=2.0)
    _initialized = False


def capture_error(
    error: BaseException,
    *,
    extra: dict[str, Any] | None = None,
) -> None:
    """Report an error to Sentry with rate-limiting per error class."""
    if not _initialized:
        return

    key = type(error).__qualname__
    now = time.monotonic()
    last = _error_timestamps.get(key, 0.0)
    if (now - last) < SENTRY_RATE_LIMIT_S:
        return
    _error_timestamps[key] = now

    import sentry_sdk

    context = current_log_context()
    with sentry_sdk.new_scope() as scope:
        scope.set_tag(SENTRY_TAG_SESSION, context["session"])
        scope.set_tag(SENTRY_TAG_CONNECTION, context["connection"])
        if extra:
            for k, v in extra.items():
                scope.set_extra(k, v)
        sentry_sdk.capture_exception(error)


__all__ = ["init_sentry", "shutdown_sentry", "capture_error"]
