"""
Delay policies for the two retry kinds.

Each policy answers a single question: how long to wait before the next
attempt. The retry engine picks the policy from the retry kind:

    1. BackoffPolicy: exponential backoff with jitter (transient errors)
    2. ProcessingPollPolicy: size-proportional delay (still processing)

Processing delays grow with content size, not with the attempt number,
because the server is doing real work whose duration follows input size.
"""

import random
from typing import Callable, Protocol

from compress_client.config import RetryConfig
from compress_client.estimator import (
    backoff_delay_ms,
    effective_length,
    processing_poll_delay_ms,
)
from compress_client.models.content import CompressRequest
from compress_client.models.enums import RetryKind


class DelayPolicy(Protocol):
    """
    Protocol for retry delay policies.

    Attributes:
        kind: Retry kind this policy handles
    """

    kind: RetryKind

    def delay_ms(self, attempt: int, request: CompressRequest) -> int:
        """
        Compute the wait before the next attempt.

        Args:
            attempt: Attempt number of the logical request (1-indexed)
            request: Envelope being retried

        Returns:
            Delay in milliseconds
        """
        ...


class BackoffPolicy:
    """
    Exponential backoff with jitter.

    Use case: overload (503), rate limit (429), connection failures.
    """

    kind = RetryKind.TRANSIENT_ERROR

    def __init__(self, config: RetryConfig, rand: Callable[[], float] = random.random):
        self.base_ms = config.initial_backoff_ms
        self.cap_ms = config.max_backoff_ms
        self.factor = config.backoff_factor
        self._rand = rand

    def delay_ms(self, attempt: int, request: CompressRequest) -> int:
        return backoff_delay_ms(
            attempt,
            base_ms=self.base_ms,
            cap_ms=self.cap_ms,
            factor=self.factor,
            rand=self._rand,
        )


class ProcessingPollPolicy:
    """
    Size-proportional poll delay.

    Use case: the service answered "being processed".
    """

    kind = RetryKind.STILL_PROCESSING

    def __init__(self, config: RetryConfig):
        self.unit_ms = config.processing_poll_unit_ms
        self.chunk_chars = config.processing_poll_chunk_chars

    def delay_ms(self, attempt: int, request: CompressRequest) -> int:
        return processing_poll_delay_ms(
            effective_length(request.content),
            unit_ms=self.unit_ms,
            chunk_chars=self.chunk_chars,
        )
