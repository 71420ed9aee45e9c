"""
Exceptions raised by transport implementations.

The retry engine only depends on these three distinguishable failure codes:
timed out, could not connect, and anything else. Transports must not raise
for HTTP error statuses; those come back as a TransportResponse.
"""


class TransportError(Exception):
    """
    Base exception for transport failures without a usable response.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TransportTimeoutError(TransportError):
    """
    The per-call deadline elapsed before a response arrived.
    """
    pass


class TransportConnectionError(TransportError):
    """
    The host could not be reached (refused, DNS failure, reset).

    The retry engine treats this like an overload response.
    """
    pass
