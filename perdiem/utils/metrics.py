"""Prometheus metrics for timeline projection."""

from prometheus_client import Counter, Histogram

projection_latency_ms = Histogram(
    "projection_latency_ms",
    "Itinerary projection latency in milliseconds",
    ["outcome"],
    buckets=[0.5, 1, 2, 5, 10, 25, 50, 100, 250],
)

timeline_events_skipped_total = Counter(
    "timeline_events_skipped_total",
    "Total events omitted from projection",
    ["kind", "reason"],
)

timeline_events_dropped_total = Counter(
    "timeline_events_dropped_total",
    "Total events outside the render window",
    ["kind"],
)


class PrometheusTimelineMetrics:
    """Prometheus-based timeline metrics implementation."""

    def record_latency(self, outcome: str, latency_ms: float) -> None:
        """Record projection latency."""
        projection_latency_ms.labels(outcome=outcome).observe(latency_ms)

    def inc_skipped(self, kind: str, reason: str) -> None:
        """Increment skipped event counter."""
        timeline_events_skipped_total.labels(kind=kind, reason=reason).inc()

    def inc_dropped(self, kind: str) -> None:
        """Increment out-of-window counter."""
        timeline_events_dropped_total.labels(kind=kind).inc()
