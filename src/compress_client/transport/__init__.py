"""
Transport abstraction and implementations.

Components:
- BaseTransport: Contract consumed by the retry engine
- HttpxTransport: httpx-based implementation
- exceptions: Timeout / connection / generic transport failures
"""

from compress_client.transport.base_transport import BaseTransport
from compress_client.transport.httpx_transport import HttpxTransport
from compress_client.transport.exceptions import (
    TransportConnectionError,
    TransportError,
    TransportTimeoutError,
)

__all__ = [
    "BaseTransport",
    "HttpxTransport",
    "TransportError",
    "TransportConnectionError",
    "TransportTimeoutError",
]
