"""Prometheus metrics for the transform stage."""

from __future__ import annotations

from dataclasses import dataclass

from prometheus_client import Counter, Histogram


messages_transformed = Counter(
    "stream_transform_messages_total", "Messages handled by the stage", ["outcome"]
)
callback_errors = Counter(
    "stream_transform_callback_errors_total", "Output callbacks that raised"
)
transform_latency = Histogram(
    "stream_transform_latency_seconds", "Time spent transforming one message"
)


@dataclass
class Metrics:
    """Convenience wrapper around Prometheus metrics."""

    def record_success(self, seconds: float) -> None:
        messages_transformed.labels(outcome="success").inc()
        transform_latency.observe(seconds)

    def record_failure(self) -> None:
        messages_transformed.labels(outcome="failure").inc()

    def record_callback_error(self) -> None:
        callback_errors.inc()
