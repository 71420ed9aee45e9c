"""
Content payload and request envelope models.

The compression service accepts either a single text blob or an ordered list
of message records. Both shapes are modelled here together with the outbound
request envelope, which is immutable so that retries of the same logical
request always send the same body and identity.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    """
    One message record in a conversation payload.

    Unknown attributes are preserved and forwarded to the service verbatim.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    message: str = Field(default="", description="Message text")
    role: Optional[str] = Field(default=None, description="Speaker role (user, assistant, ...)")
    created_at: Optional[str] = Field(default=None, description="ISO timestamp of the message")
    user_id: Optional[str] = Field(default=None, description="Identity of the message author")


Content = Union[str, list[Message]]


class CompressRequest(BaseModel):
    """
    Outbound request envelope for POST /api/v1/compress.

    Wire body: {content, include_metadata?, webhook_url?, user_id?}
    """

    model_config = ConfigDict(frozen=True)

    content: Content = Field(..., description="Text blob or ordered message records")
    include_metadata: bool = Field(default=False, description="Ask the service for compression metadata")
    webhook_url: Optional[str] = Field(
        default=None,
        description="Asynchronous delivery target; the service acknowledges and posts the result here",
    )
    user_id: Optional[str] = Field(default=None, description="Explicit caller identity")

    @property
    def is_async(self) -> bool:
        """True when the caller asked for asynchronous delivery."""
        return bool(self.webhook_url)

    def derive_user_id(self) -> Optional[str]:
        """
        Return the first non-empty ``user_id`` found scanning messages in order.

        Plain text payloads carry no identity.
        """
        if isinstance(self.content, str):
            return None
        for msg in self.content:
            if msg.user_id:
                return msg.user_id
        return None

    def with_resolved_identity(self) -> "CompressRequest":
        """
        Return an envelope whose ``user_id`` is set when one can be derived.

        An explicit ``user_id`` always wins. The returned envelope is the one
        sent on every attempt, so the identity is stable across retries.
        """
        if self.user_id:
            return self
        derived = self.derive_user_id()
        if derived is None:
            return self
        return self.model_copy(update={"user_id": derived})

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON body expected by the service."""
        if isinstance(self.content, str):
            content: Any = self.content
        else:
            content = [msg.model_dump(exclude_none=True) for msg in self.content]

        body: dict[str, Any] = {
            "content": content,
            "include_metadata": self.include_metadata,
        }
        if self.webhook_url:
            body["webhook_url"] = self.webhook_url
        if self.user_id:
            body["user_id"] = self.user_id
        return body
