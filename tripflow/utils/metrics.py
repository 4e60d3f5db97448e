"""Prometheus metrics for persistence and AI generation."""

from prometheus_client import Counter, Histogram

# Gateway metrics
gateway_latency_ms = Histogram(
    "gateway_latency_ms",
    "Persistence gateway call latency in milliseconds",
    ["operation", "backend", "outcome"],
    buckets=[1, 5, 10, 50, 100, 200, 500, 1000, 2000, 4000],
)

gateway_errors_total = Counter(
    "gateway_errors_total",
    "Total persistence gateway errors",
    ["operation", "backend", "reason"],
)

# AI generation metrics
itinerary_generations_total = Counter(
    "itinerary_generations_total",
    "Total AI itinerary generation requests",
    ["outcome"],
)


class PrometheusGatewayMetrics:
    """Prometheus-based gateway metrics implementation."""

    def record_latency(self, operation: str, backend: str, outcome: str, latency_ms: float) -> None:
        """Record gateway call latency."""
        gateway_latency_ms.labels(operation=operation, backend=backend, outcome=outcome).observe(
            latency_ms
        )

    def inc_error(self, operation: str, backend: str, reason: str) -> None:
        """Increment error counter."""
        gateway_errors_total.labels(operation=operation, backend=backend, reason=reason).inc()


def record_generation(outcome: str) -> None:
    """Count an AI generation request by outcome (success, unconfigured, error)."""
    itinerary_generations_total.labels(outcome=outcome).inc()
