"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without network access or real waits.
"""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from compress_client.models.responses import TransportResponse
from compress_client.retry.engine import RetryEngine
from compress_client.transport.base_transport import BaseTransport


@pytest.fixture
def mock_transport():
    """Mock transport; set ``send.side_effect`` or ``send.return_value`` per test."""
    mock = AsyncMock(spec=BaseTransport)
    mock.send = AsyncMock()
    return mock


@pytest.fixture
def mock_sleep():
    """Sleep replacement that records requested waits (seconds) without waiting."""
    return AsyncMock(return_value=None)


@pytest.fixture
def engine(mock_transport, mock_sleep) -> RetryEngine:
    """RetryEngine with mocked transport, no real waits and zero jitter."""
    return RetryEngine(
        mock_transport,
        sleep=mock_sleep,
        rand=lambda: 0.0,
        metrics_enabled=False,
    )


@pytest.fixture
def make_response():
    """Factory fixture for TransportResponse objects.

    Usage:
        def test_something(make_response):
            ok = make_response(200, {"status": "success", "content": "short"})
    """
    def _create(status_code: int = 200, body: Any = None) -> TransportResponse:
        return TransportResponse(status_code=status_code, body=body)

    return _create


@pytest.fixture
def success_body() -> dict[str, Any]:
    """Typical success body of POST /api/v1/compress."""
    return {
        "status": "success",
        "content": "compressed text",
        "compression_time": 1.25,
        "original_length": 1200,
        "compressed_length": 300,
    }


@pytest.fixture
def processing_body() -> dict[str, Any]:
    """Success body that signals the content is still being processed."""
    return {
        "status": "success",
        "message": "Your content is being processed",
    }
