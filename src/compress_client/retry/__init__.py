"""
Retry engine for the compression service.

This module implements the adaptive request/retry/backoff engine:

1. **Transient errors** (503, 429, connection failure): exponential backoff
   with jitter, up to ``max_retries`` attempts
2. **Still processing** ("being processed" in a success body): poll delay
   proportional to content size, up to ``max_retries`` attempts
3. **Terminal**: success, webhook acknowledgement, timeout, non-retryable
   errors, or an exhausted budget (raised as a CompressError subclass)

Main Components:
    - RetryEngine: Main orchestrator for retry logic
    - DelayPolicy: Protocol for the two delay policies
    - RetryState / RetryEvent / RetryMetadata: per-request tracking
    - classify_response: wire response -> tagged outcome

Usage:
    >>> from compress_client.retry import RetryEngine
    >>> engine = RetryEngine(transport)
    >>> outcome, metadata, warnings = await engine.submit(request, config)
"""

from compress_client.retry.classifier import (
    PROCESSING_MARKER,
    classify_response,
    failure_to_error,
    is_transient,
)
from compress_client.retry.engine import RetryEngine, RetryObserver
from compress_client.retry.metadata import RetryEvent, RetryMetadata, RetryState
from compress_client.retry.strategies import (
    BackoffPolicy,
    DelayPolicy,
    ProcessingPollPolicy,
)

__all__ = [
    "RetryEngine",
    "RetryObserver",
    "RetryEvent",
    "RetryMetadata",
    "RetryState",
    "DelayPolicy",
    "BackoffPolicy",
    "ProcessingPollPolicy",
    "PROCESSING_MARKER",
    "classify_response",
    "failure_to_error",
    "is_transient",
]
