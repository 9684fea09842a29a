"""Telemetry configuration: env vars, metric specs, Sentry constants."""

import os

# ---------------------------------------------------------------------------
# Sentry
# ---------------------------------------------------------------------------
SENTRY_DSN: str = os.getenv("SENTRY_DSN", "")
SENTRY_ENVIRONMENT: str = os.getenv("SENTRY_ENVIRONMENT", "production")
SENTRY_RELEASE: str = os.getenv("SENTRY_RELEASE", "")
SENTRY_SAMPLE_RATE: float = float(os.getenv("SENTRY_SAMPLE_RATE", "1.0"))
SENTRY_RATE_LIMIT_S: float = 10.0
SENTRY_TAG_SESSION = "session"
SENTRY_TAG_CONNECTION = "connection"

# ---------------------------------------------------------------------------
# OTel
# ---------------------------------------------------------------------------
OTEL_SERVICE_NAME: str = os.getenv("OTEL_SERVICE_NAME", "lounge-relay")
OTEL_EXPORTER_ENDPOINT: str = os.getenv("OTEL_EXPORTER_ENDPOINT", "")
OTEL_EXPORTER_TOKEN: str = os.getenv("OTEL_EXPORTER_TOKEN", "")
OTEL_ENVIRONMENT: str = os.getenv("OTEL_ENVIRONMENT", "production")
OTEL_METRICS_EXPORT_INTERVAL_MS: int = int(os.getenv("OTEL_METRICS_EXPORT_INTERVAL_MS", "15000"))

# ---------------------------------------------------------------------------
# Metric spec tuples: (name, unit, description)
# ---------------------------------------------------------------------------

# Histograms
METRIC_CONNECTION_DURATION = ("lounge.connection_duration", "s", "WebSocket connection duration")

# Counters
METRIC_AUTH_ATTEMPTS_TOTAL = ("lounge.auth_attempts_total", "{attempt}", "Authentication attempts")
METRIC_CONNECTIONS_REJECTED_TOTAL = (
    "lounge.connections_rejected_total",
    "{connection}",
    "Rejected at capacity",
)
METRIC_REVERSE_DNS_FALLBACKS_TOTAL = (
    "lounge.reverse_dns_fallbacks_total",
    "{lookup}",
    "Reverse lookups that fell back to the raw address",
)
METRIC_SESSION_STORE_FAILURES_TOTAL = (
    "lounge.session_store_failures_total",
    "{lookup}",
    "Session store lookups treated as absent after an error",
)
METRIC_ERRORS_TOTAL = ("lounge.errors_total", "{error}", "Unhandled errors")

# UpDown counters
METRIC_ACTIVE_CONNECTIONS = ("lounge.active_connections", "{connection}", "Current WebSocket connections")


__all__ = [
    # Sentry
    "SENTRY_DSN",
    "SENTRY_ENVIRONMENT",
    "SENTRY_RELEASE",
    "SENTRY_SAMPLE_RATE",
    "SENTRY_RATE_LIMIT_S",
    "SENTRY_TAG_SESSION",
    "SENTRY_TAG_CONNECTION",
    # OTel
    "OTEL_SERVICE_NAME",
    "OTEL_EXPORTER_ENDPOINT",
    "OTEL_EXPORTER_TOKEN",
    "OTEL_ENVIRONMENT",
    "OTEL_METRICS_EXPORT_INTERVAL_MS",
    # Metric specs
    "METRIC_CONNECTION_DURATION",
    "METRIC_AUTH_ATTEMPTS_TOTAL",
    "METRIC_CONNECTIONS_REJECTED_TOTAL",
    "METRIC_REVERSE_DNS_FALLBACKS_TOTAL",
    "METRIC_SESSION_STORE_FAILURES_TOTAL",
    "METRIC_ERRORS_TOTAL",
    "METRIC_ACTIVE_CONNECTIONS",
]
