"""
httpx transport for the compression service.

Communicates with the service using a persistent httpx AsyncClient. Supports:
- Bearer credential attachment
- Connection pooling
- Per-call timeouts
"""

import asyncio
import json
import time
from typing import Any, Optional

import httpx
import structlog

from compress_client.models.responses import TransportResponse
from compress_client.transport.base_transport import BaseTransport
from compress_client.transport.exceptions import (
    TransportConnectionError,
    TransportError,
    TransportTimeoutError,
)

logger = structlog.get_logger(__name__)


class HttpxTransport(BaseTransport):
    """
    Transport using httpx for async HTTP communication.

    Never retries and never raises for HTTP error statuses: every received
    response is returned as a TransportResponse so the retry engine can
    classify it.
    """

    def __init__(
        self,
        base_url: str = "https://api.mielto.com",
        api_key: Optional[str] = None,
        connection_limits: Optional[httpx.Limits] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize transport.

        Args:
            base_url: Service base URL
            api_key: Bearer token, attached when present
            connection_limits: httpx connection pool limits (default: 10 max connections)
            client: Pre-built AsyncClient (tests inject one with a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key

        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0,
            )
        self._connection_limits = connection_limits
        self._client = client

        logger.info(
            "httpx transport initialized",
            base_url=self.base_url,
            authenticated=api_key is not None,
            connection_limits=str(connection_limits),
        )

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers(),
                limits=self._connection_limits,
                follow_redirects=True,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return response.text

    async def send(self, endpoint: str, body: dict[str, Any], timeout_ms: int) -> TransportResponse:
        start_time = time.time()
        timeout_s = timeout_ms / 1000.0
        client = await self._get_client()

        try:
            # httpx.Timeout bounds each phase; wait_for bounds the whole call
            response = await asyncio.wait_for(
                client.post(
                    endpoint,
                    json=body,
                    headers=self._headers(),
                    timeout=httpx.Timeout(timeout_s),
                ),
                timeout=timeout_s,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning("Compress request timeout", endpoint=endpoint, timeout_ms=timeout_ms, error=str(e))
            raise TransportTimeoutError(
                f"Request timeout after {timeout_s:g}s",
                details={"endpoint": endpoint, "timeout_ms": timeout_ms},
            ) from e
        except (httpx.ConnectError, httpx.NetworkError) as e:
            logger.warning("Compress network error", endpoint=endpoint, error=str(e))
            raise TransportConnectionError(
                f"Network error: {e}",
                details={"endpoint": endpoint, "error_type": type(e).__name__},
            ) from e
        except httpx.HTTPError as e:
            logger.error("Compress transport error", endpoint=endpoint, error=str(e), error_type=type(e).__name__)
            raise TransportError(
                f"Request failed: {e}",
                details={"endpoint": endpoint, "error_type": type(e).__name__},
            ) from e

        latency_ms = int((time.time() - start_time) * 1000)
        logger.debug(
            "Compress response received",
            endpoint=endpoint,
            status_code=response.status_code,
            latency_ms=latency_ms,
        )
        return TransportResponse(
            status_code=response.status_code,
            body=self._parse_body(response),
        )

    async def close(self) -> None:
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed httpx transport connection")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url})"
