"""
Retry state and metadata tracking.

``RetryState`` is the private mutable counter of one logical request.
``RetryEvent`` is what the observer sees before every wait.
``RetryMetadata`` is the immutable summary handed back to the caller.
"""

from dataclasses import dataclass, field
from typing import Optional

from compress_client.models.enums import RetryKind


@dataclass
class RetryState:
    """
    Per-logical-request retry counter.

    Created at attempt 1 when a request is submitted and discarded at the
    terminal state. Never shared across logical requests. There is one
    attempt counter for the whole request: every retry increments it and
    re-classifies ``kind``, whichever policy produced the wait, so one
    request never sends more than ``max_retries`` times.

    Attributes:
        attempt: Number of the current attempt (1-indexed)
        kind: Classification of the most recent retryable condition
        total_attempts: Physical sends made so far
        waits_by_kind: Waits performed per retry kind (metadata only)
        total_wait_ms: Sum of scheduled waits
    """

    attempt: int = 1
    kind: Optional[RetryKind] = None
    total_attempts: int = 0
    waits_by_kind: dict[RetryKind, int] = field(default_factory=dict)
    total_wait_ms: int = 0

    def record(self, kind: RetryKind) -> int:
        """Classify the latest retryable condition and return the current attempt."""
        self.kind = kind
        return self.attempt

    def add_wait(self, delay_ms: int) -> None:
        """Account for a wait of the current kind and move to the next attempt."""
        if self.kind is None:
            raise RuntimeError("add_wait called before any retryable condition was recorded")
        self.waits_by_kind[self.kind] = self.waits_by_kind.get(self.kind, 0) + 1
        self.total_wait_ms += delay_ms
        self.attempt += 1

    def retries_by_kind(self) -> dict[str, int]:
        """Number of waits performed per kind."""
        return {kind.value: count for kind, count in self.waits_by_kind.items()}


@dataclass(frozen=True)
class RetryEvent:
    """
    Condition that triggered a retry, passed to the observer.

    Attributes:
        attempt: Attempt number of the logical request (1-indexed)
        kind: transient_error or still_processing
        reason: Human-readable condition description
        delay_ms: Wait scheduled before the next send
        status_code: HTTP status, when a response was received
    """

    attempt: int
    kind: RetryKind
    reason: str
    delay_ms: int
    status_code: Optional[int] = None

    def __str__(self) -> str:
        return self.reason


@dataclass(frozen=True)
class RetryMetadata:
    """
    Retry history of one logical request.

    Attributes:
        total_attempts: Physical HTTP attempts made
        retries_by_kind: Retry count per kind (e.g. {"transient_error": 2})
        total_wait_ms: Sum of all scheduled waits
        total_latency_ms: Wall time from submit to terminal state
        final_outcome: Outcome label of the terminal state
    """

    total_attempts: int
    retries_by_kind: dict[str, int]
    total_wait_ms: int
    total_latency_ms: int
    final_outcome: str

    def __post_init__(self) -> None:
        """Validate metadata invariants."""
        if self.total_attempts < 0:
            raise ValueError("total_attempts must be >= 0")

        if self.total_wait_ms < 0:
            raise ValueError("total_wait_ms must be >= 0")

        if self.total_latency_ms < 0:
            raise ValueError("total_latency_ms must be >= 0")

    @property
    def total_retries(self) -> int:
        return sum(self.retries_by_kind.values())
