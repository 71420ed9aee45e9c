"""
Response models for the compression service.

``CompressResponse`` mirrors the wire body returned by the service.
The outcome models are the tagged result of classifying one round trip;
the retry engine branches on ``kind``.
"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from compress_client.models.enums import OutcomeKind


class TransportResponse(BaseModel):
    """Raw status code and parsed body of one HTTP round trip."""

    model_config = ConfigDict(frozen=True)

    status_code: int = Field(..., ge=100, le=599)
    body: Any = Field(default=None, description="Decoded JSON body, or raw text when not JSON")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class CompressResponse(BaseModel):
    """
    Success body of POST /api/v1/compress.

    {status: "success", content?, compression_time?, original_length?,
     compressed_length?, message?, user_id?}
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    status: str
    content: Optional[str] = None
    compression_time: Optional[float] = None
    original_length: Optional[int] = None
    compressed_length: Optional[int] = None
    message: Optional[str] = None
    user_id: Optional[str] = None


class CompressSuccess(BaseModel):
    """Terminal success: the compressed content is ready."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[OutcomeKind.SUCCESS] = OutcomeKind.SUCCESS
    content: Optional[str] = None
    original_length: Optional[int] = None
    compressed_length: Optional[int] = None
    compression_time: Optional[float] = None
    message: Optional[str] = None
    user_id: Optional[str] = None

    @property
    def compression_ratio(self) -> Optional[float]:
        """compressed_length / original_length, when both are known."""
        if not self.original_length or self.compressed_length is None:
            return None
        return self.compressed_length / self.original_length


class StillProcessing(BaseModel):
    """A 2xx success body whose message says the work is not done yet."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[OutcomeKind.STILL_PROCESSING] = OutcomeKind.STILL_PROCESSING
    status_message: str


class Acknowledged(BaseModel):
    """The service accepted the request for asynchronous (webhook) delivery."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[OutcomeKind.ACKNOWLEDGED] = OutcomeKind.ACKNOWLEDGED
    message: Optional[str] = None
    user_id: Optional[str] = None


class ServiceFailure(BaseModel):
    """A response came back with a status the engine does not treat as success."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[OutcomeKind.FAILURE] = OutcomeKind.FAILURE
    status_code: int
    body: Any = None
    detail: Optional[str] = None
    error_code: Optional[str] = None


ServiceResponse = Union[CompressSuccess, StillProcessing, Acknowledged, ServiceFailure]
CompressOutcome = Union[CompressSuccess, Acknowledged]
