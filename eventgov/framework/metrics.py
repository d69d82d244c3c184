"""Prometheus metrics export for the validated event layer."""

from typing import Optional

from prometheus_client import (
    Counter, Histogram, CollectorRegistry, generate_latest, CONTENT_TYPE_LATEST
)


VALIDATION_BUCKETS = [0.00001, 0.00005, 0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1]


class EventMetricsCollector:
    """Prometheus counters and histograms for event emission and delivery."""

    def __init__(self, namespace: str = "eventgov", registry: Optional[CollectorRegistry] = None):
        self.namespace = namespace
        self.registry = registry or CollectorRegistry()

        self.events_total = Counter(
            f"{namespace}_events_total",
            "Events seen by the validated emitter",
            ["event_type", "outcome"],
            registry=self.registry
        )

        # observes every attempt, including rejected ones
        self.validation_duration = Histogram(
            f"{namespace}_event_validation_duration_seconds",
            "Event validation duration in seconds",
            ["event_type"],
            buckets=VALIDATION_BUCKETS,
            registry=self.registry
        )

        self.unknown_events = Counter(
            f"{namespace}_unknown_events_total",
            "Emissions of event types missing from the catalog",
            ["event_type"],
            registry=self.registry
        )

        self.events_dropped = Counter(
            f"{namespace}_events_dropped_total",
            "Incoming events dropped by validated subscriptions",
            ["event_type"],
            registry=self.registry
        )

    def record_emission(self, event_type: str, success: bool, elapsed_ms: float) -> None:
        """Record one emission attempt."""
        outcome = "emitted" if success else "rejected"
        self.events_total.labels(event_type=event_type, outcome=outcome).inc()
        self.validation_duration.labels(event_type=event_type).observe(elapsed_ms / 1000.0)

    def record_unknown(self, event_type: str) -> None:
        self.unknown_events.labels(event_type=event_type).inc()

    def record_drop(self, event_type: str) -> None:
        self.events_dropped.labels(event_type=event_type).inc()

    def get_metrics(self) -> bytes:
        """Get all metrics in Prometheus format."""
        return generate_latest(self.registry)

    def get_content_type(self) -> str:
        """Get the content type for metrics."""
        return CONTENT_TYPE_LATEST
