"""
Abstract transport for the compression service.

Defines the contract the retry engine consumes. This abstraction keeps the
engine independent of any HTTP library: tests use mocks, production uses
HttpxTransport.
"""

from abc import ABC, abstractmethod
from typing import Any

import structlog

from compress_client.models.responses import TransportResponse

logger = structlog.get_logger(__name__)


class BaseTransport(ABC):
    """
    Abstract base class for transports.

    Responsibilities:
    - POST a JSON body to an endpoint with a per-call timeout
    - Attach the bearer credential
    - Return status code and parsed body for every received response

    Does NOT handle:
    - Retries of any kind (that's RetryEngine's job)
    - Classification of statuses (that's the classifier's job)
    """

    @abstractmethod
    async def send(self, endpoint: str, body: dict[str, Any], timeout_ms: int) -> TransportResponse:
        """
        Send one request.

        Args:
            endpoint: Path relative to the base URL (e.g. /api/v1/compress)
            body: JSON-serializable request body
            timeout_ms: Deadline for this call

        Returns:
            TransportResponse for any received response, including 4xx/5xx

        Raises:
            TransportTimeoutError: Deadline elapsed
            TransportConnectionError: Host unreachable
            TransportError: Any other failure without a response
        """
        pass

    async def close(self) -> None:
        """
        Release connections. Default implementation does nothing.
        """
        logger.debug("Closing transport", transport_class=self.__class__.__name__)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
