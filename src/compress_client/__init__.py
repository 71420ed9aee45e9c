"""
Client for a remote text-compression service.

Shields callers from the service's asynchronous, sometimes-slow,
sometimes-overloaded behavior:
- Per-call timeouts estimated from payload size
- Exponential backoff with jitter on overload, rate limits and connection failures
- Size-proportional polling while content is "being processed"
- Typed, inspectable failures with actionable guidance

Architecture: CompressClient -> RetryEngine -> BaseTransport (httpx)
"""

__version__ = "0.1.0"

from compress_client.client import CompressClient, CompressResult
from compress_client.config import RetryConfig, Settings, get_settings
from compress_client.exceptions import (
    AuthenticationError,
    BadRequestError,
    CompressConnectionError,
    CompressError,
    CompressTimeoutError,
    CompressValidationError,
    ContentTooLargeError,
    CreditLimitExceededError,
    NotFoundError,
    OverageLimitExceededError,
    PaymentRequiredError,
    PermissionDeniedError,
    ProcessingTimeoutError,
    ServerError,
    ServiceUnavailableError,
    TransportFailure,
    UnprocessableContentError,
)
from compress_client.models import (
    Acknowledged,
    CompressRequest,
    CompressSuccess,
    Message,
)
from compress_client.retry import RetryEngine, RetryEvent, RetryMetadata

__all__ = [
    "__version__",
    # Client
    "CompressClient",
    "CompressResult",
    # Config
    "RetryConfig",
    "Settings",
    "get_settings",
    # Models
    "Acknowledged",
    "CompressRequest",
    "CompressSuccess",
    "Message",
    # Retry
    "RetryEngine",
    "RetryEvent",
    "RetryMetadata",
    # Errors
    "CompressError",
    "CompressValidationError",
    "ContentTooLargeError",
    "CompressTimeoutError",
    "ServiceUnavailableError",
    "CompressConnectionError",
    "ProcessingTimeoutError",
    "BadRequestError",
    "AuthenticationError",
    "PaymentRequiredError",
    "CreditLimitExceededError",
    "OverageLimitExceededError",
    "PermissionDeniedError",
    "NotFoundError",
    "UnprocessableContentError",
    "ServerError",
    "TransportFailure",
]
