"""
Unit tests for response classification.

The processing marker is part of the service's wire contract; the literal is
pinned here so a wording change shows up as a failing test.
"""

import pytest

from compress_client.exceptions import (
    AuthenticationError,
    BadRequestError,
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
from compress_client.models.enums import OutcomeKind
from compress_client.models.responses import ServiceFailure, TransportResponse
from compress_client.retry.classifier import (
    PROCESSING_MARKER,
    classify_response,
    extract_detail,
    failure_to_error,
    is_processing_message,
    is_transient,
)

SYNC_REQUEST = CompressRequest(content="some text")
ASYNC_REQUEST = CompressRequest(content="some text", webhook_url="https://hooks.example.com/c")


def test_processing_marker_literal_is_pinned():
    assert PROCESSING_MARKER == "being processed"


@pytest.mark.parametrize(
    "message,expected",
    [
        ("Your content is being processed", True),
        ("Content BEING PROCESSED, check back later", True),
        ("Being Processed", True),
        ("Compression complete", False),
        ("processed", False),
        ("", False),
        (None, False),
    ],
)
def test_is_processing_message(message, expected):
    assert is_processing_message(message) is expected


# ============================================================================
# classify_response
# ============================================================================


def test_classify_success():
    response = TransportResponse(
        status_code=200,
        body={
            "status": "success",
            "content": "short",
            "compression_time": 0.8,
            "original_length": 100,
            "compressed_length": 20,
            "user_id": "u1",
        },
    )

    outcome = classify_response(response, SYNC_REQUEST)

    assert outcome.kind == OutcomeKind.SUCCESS
    assert outcome.content == "short"
    assert outcome.original_length == 100
    assert outcome.compressed_length == 20
    assert outcome.compression_time == 0.8
    assert outcome.user_id == "u1"


def test_classify_still_processing_despite_ok_status():
    response = TransportResponse(
        status_code=200,
        body={"status": "success", "message": "Your content is being processed"},
    )

    outcome = classify_response(response, SYNC_REQUEST)

    assert outcome.kind == OutcomeKind.STILL_PROCESSING
    assert outcome.status_message == "Your content is being processed"


def test_classify_success_message_without_marker_is_success():
    response = TransportResponse(
        status_code=200,
        body={"status": "success", "content": "c", "message": "Compression complete"},
    )
    assert classify_response(response, SYNC_REQUEST).kind == OutcomeKind.SUCCESS


def test_classify_webhook_request_is_acknowledged_even_when_processing():
    response = TransportResponse(
        status_code=202,
        body={"status": "success", "message": "Content is being processed, result will be sent to webhook"},
    )

    outcome = classify_response(response, ASYNC_REQUEST)

    assert outcome.kind == OutcomeKind.ACKNOWLEDGED
    assert "webhook" in outcome.message


def test_classify_webhook_request_without_content_is_acknowledged():
    response = TransportResponse(status_code=202, body={"status": "success", "message": "Accepted"})

    assert classify_response(response, ASYNC_REQUEST).kind == OutcomeKind.ACKNOWLEDGED


def test_classify_webhook_request_with_inline_result_keeps_content():
    response = TransportResponse(
        status_code=200,
        body={
            "status": "success",
            "content": "COMPRESSED",
            "original_length": 4000,
            "compressed_length": 400,
            "compression_time": 0.8,
        },
    )

    outcome = classify_response(response, ASYNC_REQUEST)

    assert outcome.kind == OutcomeKind.SUCCESS
    assert outcome.content == "COMPRESSED"
    assert outcome.original_length == 4000
    assert outcome.compressed_length == 400
    assert outcome.compression_time == 0.8


def test_classify_error_status_is_failure_with_detail():
    response = TransportResponse(status_code=400, body={"detail": "bad field"})

    outcome = classify_response(response, SYNC_REQUEST)

    assert outcome.kind == OutcomeKind.FAILURE
    assert outcome.status_code == 400
    assert outcome.detail == "bad field"


def test_classify_error_code_is_captured():
    response = TransportResponse(
        status_code=402,
        body={"detail": "Out of credits", "error_code": "CREDIT_LIMIT_EXCEEDED"},
    )
    assert classify_response(response, SYNC_REQUEST).error_code == "CREDIT_LIMIT_EXCEEDED"


@pytest.mark.parametrize("body", [{"status": "error", "message": "nope"}, "plain text", None])
def test_classify_unexpected_2xx_body_is_failure(body):
    outcome = classify_response(TransportResponse(status_code=200, body=body), SYNC_REQUEST)
    assert outcome.kind == OutcomeKind.FAILURE
    assert outcome.status_code == 200


# ============================================================================
# extract_detail
# ============================================================================


def test_extract_detail_prefers_detail_over_message():
    assert extract_detail({"detail": "d", "message": "m"}) == "d"
    assert extract_detail({"message": "m"}) == "m"


def test_extract_detail_renders_structured_detail_as_json():
    detail = extract_detail({"detail": [{"loc": ["body", "content"], "msg": "field required"}]})
    assert '"field required"' in detail


def test_extract_detail_plain_text_and_empty():
    assert extract_detail("  Service down  ") == "Service down"
    assert extract_detail("") is None
    assert extract_detail({}) is None
    assert extract_detail(None) is None


# ============================================================================
# Transient detection and error mapping
# ============================================================================


@pytest.mark.parametrize("status,expected", [(503, True), (429, True), (500, False), (400, False), (502, False)])
def test_is_transient(status, expected):
    assert is_transient(ServiceFailure(status_code=status)) is expected


@pytest.mark.parametrize(
    "status,error_cls",
    [
        (400, BadRequestError),
        (401, AuthenticationError),
        (402, PaymentRequiredError),
        (403, PermissionDeniedError),
        (404, NotFoundError),
        (409, BadRequestError),
        (422, UnprocessableContentError),
        (500, ServerError),
        (502, ServerError),
        (503, ServiceUnavailableError),
        (200, TransportFailure),
    ],
)
def test_failure_to_error_by_status(status, error_cls):
    error = failure_to_error(ServiceFailure(status_code=status, detail="why"))
    assert type(error) is error_cls
    assert error.status_code == status
    assert error.detail == "why"


def test_failure_to_error_bad_request_keeps_server_detail():
    error = failure_to_error(ServiceFailure(status_code=400, body={"detail": "bad field"}, detail="bad field"))
    assert isinstance(error, BadRequestError)
    assert error.detail == "bad field"
    assert "bad field" in str(error)


@pytest.mark.parametrize(
    "error_code,error_cls",
    [
        ("CREDIT_LIMIT_EXCEEDED", CreditLimitExceededError),
        ("OVERAGE_LIMIT_EXCEEDED", OverageLimitExceededError),
    ],
)
def test_failure_to_error_by_error_code(error_code, error_cls):
    error = failure_to_error(ServiceFailure(status_code=402, detail="limit", error_code=error_code))
    assert type(error) is error_cls
    assert isinstance(error, PaymentRequiredError)
