"""
Retry engine for compression requests.

Drives one logical compression request to a terminal outcome. Two retry
policies apply, chosen by how the last attempt was classified:

    1. Transient error (503, 429, connection failure): exponential backoff
    2. Still processing (2xx "being processed"): size-proportional poll

Everything else is terminal: success, webhook acknowledgement, client-side
timeout, non-retryable 4xx/5xx, or an exhausted retry budget.

Usage:
    engine = RetryEngine(transport)
    outcome, metadata, warnings = await engine.submit(request, RetryConfig())
"""

import asyncio
import random
import time
from typing import Awaitable, Callable, Optional

import structlog

from compress_client.config import RetryConfig
from compress_client.estimator import effective_length, message_count, sync_timeout_ms
from compress_client.exceptions import (
    ASYNC_DELIVERY_HINT,
    BadRequestError,
    CompressConnectionError,
    CompressError,
    CompressTimeoutError,
    ContentTooLargeError,
    ProcessingTimeoutError,
    ServerError,
    ServiceUnavailableError,
    TransportFailure,
)
from compress_client.models.content import CompressRequest
from compress_client.models.enums import OutcomeKind, RetryKind
from compress_client.models.responses import CompressOutcome, ServiceFailure
from compress_client.monitoring.metrics import (
    compress_attempt_latency_seconds,
    compress_requests_total,
    compress_retries_total,
    compress_retry_wait_seconds,
)
from compress_client.retry.classifier import classify_response, failure_to_error, is_transient
from compress_client.retry.metadata import RetryEvent, RetryMetadata, RetryState
from compress_client.retry.strategies import BackoffPolicy, DelayPolicy, ProcessingPollPolicy
from compress_client.transport.base_transport import BaseTransport
from compress_client.transport.exceptions import (
    TransportConnectionError,
    TransportError,
    TransportTimeoutError,
)

logger = structlog.get_logger(__name__)

RetryObserver = Callable[[int, RetryEvent], None]

DEFAULT_ENDPOINT = "/api/v1/compress"


class RetryEngine:
    """
    Retry orchestrator for the compression service.

    Each ``submit`` call owns its RetryState; nothing mutable is shared
    between concurrent logical requests, so one engine can serve many
    in-flight requests on the same event loop.

    Attributes:
        transport: Transport used for every attempt
        endpoint: Compress endpoint path
        metrics_enabled: Record Prometheus metrics
    """

    def __init__(
        self,
        transport: BaseTransport,
        endpoint: str = DEFAULT_ENDPOINT,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rand: Callable[[], float] = random.random,
        metrics_enabled: bool = True,
    ):
        """
        Initialize retry engine.

        Args:
            transport: Transport collaborator
            endpoint: Compress endpoint path
            sleep: Coroutine used for waits (seconds), injectable for tests
            rand: Jitter source for backoff
            metrics_enabled: Record Prometheus metrics
        """
        self.transport = transport
        self.endpoint = endpoint
        self.metrics_enabled = metrics_enabled
        self._sleep = sleep
        self._rand = rand

    async def submit(
        self,
        request: CompressRequest,
        config: RetryConfig,
        on_retry: Optional[RetryObserver] = None,
    ) -> tuple[CompressOutcome, RetryMetadata, list[str]]:
        """
        Execute one logical compression request with the full retry policy.

        Args:
            request: Envelope to send (identity is resolved here if missing)
            config: Immutable retry configuration for this call
            on_retry: Observer called before every wait with (attempt, event)

        Returns:
            Tuple of (success or acknowledgement, retry metadata, warnings)

        Raises:
            ContentTooLargeError: Content exceeds the hard limit (no network call)
            CompressTimeoutError: Per-call deadline elapsed
            ServiceUnavailableError: Transient retries exhausted
            CompressConnectionError: Host unreachable, retries exhausted
            ProcessingTimeoutError: Still processing after the last poll
            BadRequestError: Non-retryable 4xx
            ServerError: Non-retryable 5xx
            TransportFailure: Anything unclassified
        """
        start_time = time.monotonic()
        request = request.with_resolved_identity()
        length = effective_length(request.content)
        count = message_count(request.content)
        state = RetryState()

        if length > config.max_content_length:
            raise self._terminal(
                ContentTooLargeError(
                    f"Content is too long ({length:,} characters). "
                    f"Maximum allowed is {config.max_content_length:,} characters.",
                    {"content_length": length, "max_content_length": config.max_content_length},
                ),
                state,
                start_time,
                "content_too_large",
            )

        warnings: list[str] = []
        if count > config.message_count_warning_threshold and not request.is_async:
            warning = (
                f"You have {count} messages. "
                f"Consider using webhook_url for better reliability."
            )
            warnings.append(warning)
            logger.warning("Large message count without webhook", message_count=count)

        policies: dict[RetryKind, DelayPolicy] = {
            RetryKind.TRANSIENT_ERROR: BackoffPolicy(config, rand=self._rand),
            RetryKind.STILL_PROCESSING: ProcessingPollPolicy(config),
        }
        body = request.to_wire()

        logger.info(
            "Submitting compression request",
            content_length=length,
            message_count=count,
            user_id=request.user_id,
            webhook=request.is_async,
            max_retries=config.max_retries,
        )

        while True:
            timeout_ms = sync_timeout_ms(request.content, ceiling_ms=config.request_timeout_ms)
            state.total_attempts += 1
            attempt_start = time.monotonic()

            try:
                response = await self.transport.send(self.endpoint, body, timeout_ms)

            except TransportTimeoutError as e:
                self._observe_attempt("timeout", attempt_start)
                raise self._terminal(
                    CompressTimeoutError(
                        f"Request timeout after {timeout_ms / 1000:g}s. {ASYNC_DELIVERY_HINT}",
                        {"timeout_ms": timeout_ms, **e.details},
                    ),
                    state,
                    start_time,
                    "timeout",
                ) from e

            except TransportConnectionError as e:
                self._observe_attempt("connection_error", attempt_start)
                retrying = await self._retry(
                    state,
                    policies[RetryKind.TRANSIENT_ERROR],
                    request,
                    config,
                    on_retry,
                    reason=f"Connection error: {e.message}",
                )
                if retrying:
                    continue
                raise self._terminal(
                    CompressConnectionError(
                        f"Could not reach the compression service after {state.total_attempts} attempts "
                        f"({e.message}). Please try again later or use webhook_url for async processing.",
                        {"attempts": state.total_attempts, **e.details},
                    ),
                    state,
                    start_time,
                    "connection_error",
                ) from e

            except TransportError as e:
                self._observe_attempt("transport_error", attempt_start)
                raise self._terminal(
                    TransportFailure(f"Request failed: {e.message}", e.details),
                    state,
                    start_time,
                    "transport_failure",
                ) from e

            self._observe_attempt(str(response.status_code), attempt_start)
            outcome = classify_response(response, request)

            if outcome.kind in (OutcomeKind.SUCCESS, OutcomeKind.ACKNOWLEDGED):
                metadata = self._metadata(state, start_time, outcome.kind.value)
                self._count_outcome(outcome.kind.value)
                logger.info(
                    "Compression request completed",
                    outcome=outcome.kind.value,
                    total_attempts=metadata.total_attempts,
                    total_wait_ms=metadata.total_wait_ms,
                    total_latency_ms=metadata.total_latency_ms,
                )
                return outcome, metadata, warnings

            if outcome.kind == OutcomeKind.STILL_PROCESSING:
                retrying = await self._retry(
                    state,
                    policies[RetryKind.STILL_PROCESSING],
                    request,
                    config,
                    on_retry,
                    reason=f"Content still processing ({length:,} characters)",
                    status_code=response.status_code,
                )
                if retrying:
                    continue
                raise self._terminal(
                    ProcessingTimeoutError(
                        f"Content is still being processed after {config.max_retries} attempts. "
                        f"Please use webhook_url for large content or try again later.",
                        {"attempts": state.total_attempts, "content_length": length},
                        status_code=response.status_code,
                        detail=outcome.status_message,
                    ),
                    state,
                    start_time,
                    "processing_timeout",
                )

            if not isinstance(outcome, ServiceFailure):
                raise self._terminal(
                    TransportFailure(
                        f"Unclassified response outcome: {outcome.kind.value}",
                        {"status_code": response.status_code},
                        status_code=response.status_code,
                    ),
                    state,
                    start_time,
                    "transport_failure",
                )

            if is_transient(outcome):
                retrying = await self._retry(
                    state,
                    policies[RetryKind.TRANSIENT_ERROR],
                    request,
                    config,
                    on_retry,
                    reason=f"HTTP {outcome.status_code}: {outcome.detail or 'service unavailable'}",
                    status_code=outcome.status_code,
                )
                if retrying:
                    continue
                raise self._terminal(
                    ServiceUnavailableError(
                        f"Service Unavailable: retries exhausted after {state.total_attempts} attempts "
                        f"(last status {outcome.status_code}). The compression service is temporarily "
                        f"unavailable. This usually happens with large content. Please try again later "
                        f"or use webhook_url for async processing.",
                        {"attempts": state.total_attempts, "status_code": outcome.status_code},
                        status_code=outcome.status_code,
                        detail=outcome.detail,
                    ),
                    state,
                    start_time,
                    "service_unavailable",
                )

            error = failure_to_error(outcome)
            raise self._terminal(error, state, start_time, _outcome_label(error))

    async def _retry(
        self,
        state: RetryState,
        policy: DelayPolicy,
        request: CompressRequest,
        config: RetryConfig,
        on_retry: Optional[RetryObserver],
        reason: str,
        status_code: Optional[int] = None,
    ) -> bool:
        """
        Record a retryable condition and wait if the budget allows.

        Returns:
            True if the caller should resend, False if the budget is exhausted
        """
        attempt = state.record(policy.kind)
        if attempt >= config.max_retries:
            logger.warning(
                "Retry budget exhausted",
                kind=policy.kind.value,
                attempt=attempt,
                max_retries=config.max_retries,
                reason=reason,
            )
            return False

        delay_ms = policy.delay_ms(attempt, request)
        event = RetryEvent(
            attempt=attempt,
            kind=policy.kind,
            reason=reason,
            delay_ms=delay_ms,
            status_code=status_code,
        )
        self._notify(on_retry, event)
        state.add_wait(delay_ms)

        if self.metrics_enabled:
            compress_retries_total.labels(kind=policy.kind.value).inc()
            compress_retry_wait_seconds.labels(kind=policy.kind.value).observe(delay_ms / 1000.0)

        logger.info(
            f"Retrying in {delay_ms / 1000:.0f}s (attempt {attempt}/{config.max_retries})",
            kind=policy.kind.value,
            attempt=attempt,
            max_retries=config.max_retries,
            delay_ms=delay_ms,
            reason=reason,
        )
        await self._sleep(delay_ms / 1000.0)
        return True

    @staticmethod
    def _notify(on_retry: Optional[RetryObserver], event: RetryEvent) -> None:
        """Call the observer; its failures never affect control flow."""
        if on_retry is None:
            return
        try:
            on_retry(event.attempt, event)
        except Exception:
            logger.exception("Retry observer raised, ignoring", attempt=event.attempt, kind=event.kind.value)

    def _terminal(
        self,
        error: CompressError,
        state: RetryState,
        start_time: float,
        outcome: str,
    ) -> CompressError:
        """Attach retry metadata to a terminal error, log it and count it."""
        error.retry_metadata = self._metadata(state, start_time, outcome)
        self._count_outcome(outcome)
        logger.error(
            "Compression request failed",
            outcome=outcome,
            error_type=type(error).__name__,
            status_code=error.status_code,
            total_attempts=state.total_attempts,
            error=error.message,
        )
        return error

    @staticmethod
    def _metadata(state: RetryState, start_time: float, outcome: str) -> RetryMetadata:
        return RetryMetadata(
            total_attempts=state.total_attempts,
            retries_by_kind=state.retries_by_kind(),
            total_wait_ms=state.total_wait_ms,
            total_latency_ms=int((time.monotonic() - start_time) * 1000),
            final_outcome=outcome,
        )

    def _count_outcome(self, outcome: str) -> None:
        if self.metrics_enabled:
            compress_requests_total.labels(outcome=outcome).inc()

    def _observe_attempt(self, status: str, attempt_start: float) -> None:
        if self.metrics_enabled:
            compress_attempt_latency_seconds.labels(status=status).observe(time.monotonic() - attempt_start)


def _outcome_label(error: CompressError) -> str:
    """Metric label for a failure mapped from a response status."""
    if isinstance(error, BadRequestError):
        return "bad_request"
    if isinstance(error, ServerError):
        return "server_error"
    if isinstance(error, ServiceUnavailableError):
        return "service_unavailable"
    return "transport_failure"
