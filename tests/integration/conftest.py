"""Integration test fixtures (service double and wired-up client).

The service double is an httpx.MockTransport handler that replays a scripted
sequence of responses and records every request it receives.
"""

import json
from typing import Any, Union
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from compress_client.client import CompressClient
from compress_client.transport.httpx_transport import HttpxTransport

ScriptedReply = Union[httpx.Response, Exception]


class FakeCompressService:
    """Scripted stand-in for POST /api/v1/compress.

    Replies are consumed in order; the last one repeats once the script runs out.
    """

    def __init__(self) -> None:
        self.replies: list[ScriptedReply] = []
        self.requests: list[httpx.Request] = []

    def reply(self, status_code: int, body: Any = None) -> "FakeCompressService":
        self.replies.append(httpx.Response(status_code, json=body))
        return self

    def fail(self, error: Exception) -> "FakeCompressService":
        self.replies.append(error)
        return self

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.replies)) - 1
        reply = self.replies[index]
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def service() -> FakeCompressService:
    return FakeCompressService()


@pytest.fixture
def recorded_sleep() -> AsyncMock:
    """Sleep replacement; waits are visible via ``await_args_list``."""
    return AsyncMock(return_value=None)


@pytest_asyncio.fixture
async def compress_client(test_settings, service, recorded_sleep):
    """CompressClient over HttpxTransport wired to the service double."""
    http_client = httpx.AsyncClient(
        base_url=test_settings.BASE_URL,
        transport=httpx.MockTransport(service),
    )
    transport = HttpxTransport(
        base_url=test_settings.BASE_URL,
        api_key=test_settings.API_KEY,
        client=http_client,
    )
    client = CompressClient(
        settings=test_settings,
        transport=transport,
        engine_options={"sleep": recorded_sleep, "rand": lambda: 0.0},
    )
    yield client
    await transport.close()
