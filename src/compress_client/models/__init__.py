"""
Pydantic data models for the compress client.

Includes:
- Enums (OutcomeKind, RetryKind)
- Content models (Message, Content, CompressRequest)
- Response models (TransportResponse, CompressResponse)
- Outcome models (CompressSuccess, StillProcessing, Acknowledged, ServiceFailure)
"""

from compress_client.models.enums import OutcomeKind, RetryKind
from compress_client.models.content import Content, CompressRequest, Message
from compress_client.models.responses import (
    Acknowledged,
    CompressOutcome,
    CompressResponse,
    CompressSuccess,
    ServiceFailure,
    ServiceResponse,
    StillProcessing,
    TransportResponse,
)

__all__ = [
    # Enums
    "OutcomeKind",
    "RetryKind",
    # Content models
    "Content",
    "CompressRequest",
    "Message",
    # Response models
    "TransportResponse",
    "CompressResponse",
    # Outcomes
    "CompressSuccess",
    "StillProcessing",
    "Acknowledged",
    "ServiceFailure",
    "ServiceResponse",
    "CompressOutcome",
]
