"""MetricInstruments registry: typed accessors for all OTel instruments."""

from __future__ import annotations

from opentelemetry import metrics

from ..config.telemetry import (
    OTEL_SERVICE_NAME,
    METRIC_ERRORS_TOTAL,
    METRIC_ACTIVE_CONNECTIONS,
    METRIC_AUTH_ATTEMPTS_TOTAL,
    METRIC_CONNECTION_DURATION,
    METRIC_CONNECTIONS_REJECTED_TOTAL,
    METRIC_REVERSE_DNS_FALLBACKS_TOTAL,
    METRIC_SESSION_STORE_FAILURES_TOTAL,
)


def _histogram(meter: metrics.Meter, spec: tuple[str, str, str]) -> metrics.Histogram:
    name, unit, desc = spec
    return meter.create_histogram(name, unit=unit, description=desc)


def _counter(meter: metrics.Meter, spec: tuple[str, str, str]) -> metrics.Counter:
    name, unit, desc = spec
    return meter.create_counter(name, unit=unit, description=desc)


def _updown(meter: metrics.Meter, spec: tuple[str, str, str]) -> metrics.UpDownCounter:
    name, unit, desc = spec
    return meter.create_up_down_counter(name, unit=unit, description=desc)


class MetricInstruments:
    """Holds all OTel metric instruments created from config specs."""

    __slots__ = (
        "connection_duration",
        "auth_attempts_total",
        "connections_rejected_total",
        "reverse_dns_fallbacks_total",
        "session_store_failures_total",
        "errors_total",
        "active_connections",
    )

    def __init__(self, meter: metrics.Meter) -> None:
        # Histograms
        self.connection_duration = _histogram(meter, METRIC_CONNECTION_DURATION)
        # Counters
        self.auth_attempts_total = _counter(meter, METRIC_AUTH_ATTEMPTS_TOTAL)
        self.connections_rejected_total = _counter(meter, METRIC_CONNECTIONS_REJECTED_TOTAL)
        self.reverse_dns_fallbacks_total = _counter(meter, METRIC_REVERSE_DNS_FALLBACKS_TOTAL)
        self.session_store_failures_total = _counter(meter, METRIC_SESSION_STORE_FAILURES_TOTAL)
        self.errors_total = _counter(meter, METRIC_ERRORS_TOTAL)
        # UpDown counters
        self.active_connections = _updown(meter, METRIC_ACTIVE_CONNECTIONS)


_metrics: MetricInstruments | None = None


def initialize_metrics() -> MetricInstruments:
    """(Re)create instruments against the currently registered meter provider."""
    global _metrics  # noqa: PLW0603
    _metrics = MetricInstruments(metrics.get_meter(OTEL_SERVICE_NAME))
    return _metrics


def get_metrics() -> MetricInstruments:
    """Return the global MetricInstruments (no-op meter if OTel not initialized)."""
    if _metrics is None:
        return initialize_metrics()
    return _metrics


__all__ = ["MetricInstruments", "get_metrics", "initialize_metrics"]
