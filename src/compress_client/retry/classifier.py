"""
Response classification for the compression service.

Turns one TransportResponse into a tagged outcome and maps failure outcomes
to caller-facing exceptions.

The service has no explicit "processing" flag: a 2xx body with
``status == "success"`` whose ``message`` contains PROCESSING_MARKER
(case-insensitive) means the result is not ready yet. A change in server
wording breaks detection, so the marker is pinned by a regression test.
"""

import json
from typing import Any, Optional

from compress_client.exceptions import (
    AuthenticationError,
    BadRequestError,
    CompressError,
    CreditLimitExceededError,
    NotFoundError,
    OverageLimitExceededError,
    PaymentRequiredError,
    PermissionDeniedError,
    ServerError,
    ServiceUnavailableError,
    TransportFailure,
    UnprocessableContentError,
)
from compress_client.models.content import CompressRequest
from compress_client.models.responses import (
    Acknowledged,
    CompressResponse,
    CompressSuccess,
    ServiceFailure,
    ServiceResponse,
    StillProcessing,
    TransportResponse,
)

# Wire contract v1: substring of CompressResponse.message while work is in progress
PROCESSING_MARKER = "being processed"
SUCCESS_STATUS = "success"

TRANSIENT_STATUS_CODES = frozenset({429, 503})

_STATUS_ERRORS: dict[int, type[BadRequestError]] = {
    401: AuthenticationError,
    402: PaymentRequiredError,
    403: PermissionDeniedError,
    404: NotFoundError,
    422: UnprocessableContentError,
}

_ERROR_CODE_ERRORS: dict[str, type[BadRequestError]] = {
    "CREDIT_LIMIT_EXCEEDED": CreditLimitExceededError,
    "OVERAGE_LIMIT_EXCEEDED": OverageLimitExceededError,
}


def is_processing_message(message: Optional[str]) -> bool:
    """True if a success message says the content is still being processed."""
    return bool(message) and PROCESSING_MARKER in message.lower()


def extract_detail(body: Any) -> Optional[str]:
    """
    Pull the server's human-readable detail out of an error body.

    Prefers ``detail``, then ``message``. Structured details (e.g. lists of
    field errors) are rendered as JSON. Plain text bodies are returned as-is.
    """
    if isinstance(body, dict):
        for key in ("detail", "message"):
            value = body.get(key)
            if value is None or value == "":
                continue
            if isinstance(value, str):
                return value
            return json.dumps(value, ensure_ascii=False)
        return None
    if isinstance(body, str):
        return body.strip() or None
    return None


def classify_response(response: TransportResponse, request: CompressRequest) -> ServiceResponse:
    """
    Classify one round trip.

    Args:
        response: Status code and parsed body
        request: Envelope that was sent (decides the async acknowledgement path)

    Returns:
        CompressSuccess, StillProcessing, Acknowledged or ServiceFailure
    """
    body = response.body

    if not response.is_success:
        error_code = body.get("error_code") if isinstance(body, dict) else None
        return ServiceFailure(
            status_code=response.status_code,
            body=body,
            detail=extract_detail(body),
            error_code=error_code,
        )

    if not isinstance(body, dict) or body.get("status") != SUCCESS_STATUS:
        return ServiceFailure(
            status_code=response.status_code,
            body=body,
            detail=extract_detail(body),
        )

    parsed = CompressResponse.model_validate(body)

    # Webhook requests are acknowledged, never polled, unless the result came back inline
    if request.is_async and (parsed.content is None or is_processing_message(parsed.message)):
        return Acknowledged(message=parsed.message, user_id=parsed.user_id)

    if is_processing_message(parsed.message):
        return StillProcessing(status_message=parsed.message or "")

    return CompressSuccess(
        content=parsed.content,
        original_length=parsed.original_length,
        compressed_length=parsed.compressed_length,
        compression_time=parsed.compression_time,
        message=parsed.message,
        user_id=parsed.user_id,
    )


def is_transient(failure: ServiceFailure) -> bool:
    """503 (overloaded) and 429 (rate-limited) are worth a backoff retry."""
    return failure.status_code in TRANSIENT_STATUS_CODES


def failure_to_error(failure: ServiceFailure) -> CompressError:
    """
    Map a non-retryable failure outcome to its exception.

    The server's detail text is preserved on ``detail`` and in the message.
    """
    status = failure.status_code
    detail = failure.detail
    details = {"status_code": status, "body": failure.body}
    kwargs = {"status_code": status, "detail": detail}

    if failure.error_code in _ERROR_CODE_ERRORS:
        error_cls = _ERROR_CODE_ERRORS[failure.error_code]
        return error_cls(f"{failure.error_code}: {detail or 'limit exceeded'}", details, **kwargs)

    if 200 <= status < 300:
        return TransportFailure(
            f"Unexpected response from compression service (status {status}): {detail or failure.body!r}",
            details,
            **kwargs,
        )

    if 400 <= status < 500 and status not in TRANSIENT_STATUS_CODES:
        error_cls = _STATUS_ERRORS.get(status, BadRequestError)
        return error_cls(f"Bad Request: {detail or status}", details, **kwargs)

    if status in TRANSIENT_STATUS_CODES:
        return ServiceUnavailableError(
            f"Service Unavailable: {detail or 'the compression service is temporarily unavailable'}",
            details,
            **kwargs,
        )

    if status >= 500:
        return ServerError(f"Server Error: {detail or status}", details, **kwargs)

    return TransportFailure(f"Request failed with status {status}", details, **kwargs)
