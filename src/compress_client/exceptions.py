"""
Exceptions raised to callers of the compress client.

Each terminal failure of a logical compression request surfaces as a distinct
exception class so callers can branch on the failure kind. Messages carry
actionable guidance (e.g. use ``webhook_url`` for large content) and keep the
server's detail text when one was returned.
"""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from compress_client.retry.metadata import RetryMetadata

ASYNC_DELIVERY_HINT = "Consider using webhook_url for large content."


class CompressError(Exception):
    """
    Base exception for all compress client errors.

    Attributes:
        message: Human-readable message (includes guidance where relevant)
        details: Structured context for logging and inspection
        status_code: HTTP status when the failure came from a response
        detail: Server-supplied detail text, if any
        retry_metadata: Retry history when the failure ended a retry loop
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        *,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
        retry_metadata: "RetryMetadata | None" = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        self.detail = detail
        self.retry_metadata = retry_metadata


class CompressValidationError(CompressError):
    """Raised locally, before any network call, for requests that cannot be sent."""
    pass


class ContentTooLargeError(CompressValidationError):
    """Content exceeds the hard character ceiling. Never retried."""
    pass


class CompressTimeoutError(CompressError):
    """
    The client-side deadline elapsed before any response arrived.

    Not retried: a request that did not fit the synchronous budget will not
    fit it on the next attempt either.
    """
    pass


class ServiceUnavailableError(CompressError):
    """Transient errors (503, 429, connection failures) exhausted the retry budget."""
    pass


class CompressConnectionError(ServiceUnavailableError):
    """The host could not be reached and the retry budget is exhausted."""
    pass


class ProcessingTimeoutError(CompressError):
    """The service was still processing after the last allowed poll."""
    pass


class BadRequestError(CompressError):
    """Non-retryable 4xx response. ``detail`` holds the server message."""
    pass


class AuthenticationError(BadRequestError):
    """401: missing or invalid API key."""
    pass


class PaymentRequiredError(BadRequestError):
    """402: the account cannot be billed for this request."""
    pass


class CreditLimitExceededError(PaymentRequiredError):
    """Account credit limit reached (error_code CREDIT_LIMIT_EXCEEDED)."""
    pass


class OverageLimitExceededError(PaymentRequiredError):
    """Account overage limit reached (error_code OVERAGE_LIMIT_EXCEEDED)."""
    pass


class PermissionDeniedError(BadRequestError):
    """403: the credential is not allowed to use this endpoint."""
    pass


class NotFoundError(BadRequestError):
    """404: endpoint not found (check base URL)."""
    pass


class UnprocessableContentError(BadRequestError):
    """422: the service rejected the request body."""
    pass


class ServerError(CompressError):
    """5xx other than 503. Not retried."""
    pass


class TransportFailure(CompressError):
    """Any failure the engine could not classify more precisely."""
    pass
