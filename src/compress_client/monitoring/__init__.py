"""Monitoring and metrics instrumentation for the compress client.

Exports Prometheus metrics for operational monitoring and alerting.
"""

from compress_client.monitoring.metrics import (
    compress_attempt_latency_seconds,
    compress_requests_total,
    compress_retries_total,
    compress_retry_wait_seconds,
)

__all__ = [
    "compress_requests_total",
    "compress_retries_total",
    "compress_retry_wait_seconds",
    "compress_attempt_latency_seconds",
]
