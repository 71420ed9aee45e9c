"""Prometheus metrics for the compress client.

Applications that expose a /metrics endpoint get these for free.
Alert rules worth configuring:
- compress_requests_total{outcome="service_unavailable"} (service overloaded)
- compress_retries_total (high retry rate indicates an overloaded service)
- compress_requests_total{outcome="processing_timeout"} (content too large for sync path)
"""

from prometheus_client import Counter, Histogram

# === Request Metrics ===

compress_requests_total = Counter(
    "compress_requests_total",
    "Total logical compression requests by terminal outcome",
    ["outcome"],
)
"""
Terminal outcome counter.

Labels:
- outcome: success, acknowledged, content_too_large, timeout, service_unavailable,
  connection_error, processing_timeout, bad_request, server_error, transport_failure
"""

# === Retry Metrics ===

compress_retries_total = Counter(
    "compress_retries_total",
    "Total retry waits by retry kind",
    ["kind"],
)
"""
Retry waits counter.

Labels:
- kind: transient_error (backoff), still_processing (size-proportional poll)
"""

compress_retry_wait_seconds = Histogram(
    "compress_retry_wait_seconds",
    "Scheduled wait before a retry, in seconds",
    ["kind"],
    buckets=[1.0, 5.0, 10.0, 30.0, 60.0, 120.0, 300.0, 600.0, 900.0],
)
"""
Retry wait histogram.

Buckets span backoff (10s base, 600s cap + jitter) and poll delays
(one minute per 15,000 characters).
"""

# === Attempt Metrics ===

compress_attempt_latency_seconds = Histogram(
    "compress_attempt_latency_seconds",
    "Latency of one physical HTTP attempt, in seconds",
    ["status"],
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0],
)
"""
Per-attempt latency histogram.

Labels:
- status: HTTP status code as string, or timeout / connection_error / transport_error
"""
