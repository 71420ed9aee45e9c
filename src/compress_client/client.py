"""
High-level client for the compression service.

Wraps transport, retry engine and configuration behind one object:

    async with CompressClient(api_key="...") as client:
        result = await client.compress([{"message": "hi", "role": "user"}])
        print(result.content)

Configuration is immutable. ``with_options`` returns a new client instead of
mutating the current one, so concurrent requests never observe a half-applied
change.
"""

from typing import Any, Optional, Sequence, Union

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field

from compress_client.config import RetryConfig, Settings, get_settings
from compress_client.models.content import CompressRequest, Message
from compress_client.models.enums import OutcomeKind
from compress_client.models.responses import Acknowledged, CompressSuccess
from compress_client.retry.engine import RetryEngine, RetryObserver
from compress_client.retry.metadata import RetryMetadata
from compress_client.transport.base_transport import BaseTransport
from compress_client.transport.httpx_transport import HttpxTransport

logger = structlog.get_logger(__name__)

ContentInput = Union[str, Sequence[Union[Message, dict[str, Any]]]]


class CompressResult(BaseModel):
    """
    Result of one logical compression request.

    Attributes:
        outcome: CompressSuccess, or Acknowledged for webhook delivery
        metadata: Retry history
        warnings: Advisory messages (e.g. suggest webhook_url)
    """

    model_config = ConfigDict(frozen=True)

    outcome: Union[CompressSuccess, Acknowledged] = Field(..., discriminator="kind")
    metadata: RetryMetadata
    warnings: list[str] = Field(default_factory=list)

    @property
    def acknowledged(self) -> bool:
        """True when the result will be delivered to the webhook."""
        return self.outcome.kind == OutcomeKind.ACKNOWLEDGED

    @property
    def content(self) -> Optional[str]:
        """Compressed content, or None for acknowledgements."""
        if isinstance(self.outcome, CompressSuccess):
            return self.outcome.content
        return None


class CompressClient:
    """
    Client for the text compression service.

    Attributes:
        settings: Application settings the client was built from
        config: Immutable retry configuration used for every request
        engine: Retry engine driving each request
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        settings: Optional[Settings] = None,
        config: Optional[RetryConfig] = None,
        transport: Optional[BaseTransport] = None,
        base_url: Optional[str] = None,
        on_retry: Optional[RetryObserver] = None,
        engine_options: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Bearer token (defaults to COMPRESS_API_KEY)
            settings: Settings override (defaults to environment settings)
            config: Retry config override (defaults to values from settings)
            transport: Transport override (defaults to HttpxTransport)
            base_url: Service base URL override
            on_retry: Observer called before every retry wait
            engine_options: Extra RetryEngine keyword arguments (e.g. sleep)
        """
        self.settings = settings or get_settings()
        self.config = config or RetryConfig.from_settings(self.settings)
        self.on_retry = on_retry
        self._api_key = api_key if api_key is not None else self.settings.API_KEY
        self._base_url = (base_url or self.settings.BASE_URL).rstrip("/")
        self._engine_options = dict(engine_options or {})

        self._owns_transport = transport is None
        if transport is None:
            transport = HttpxTransport(
                base_url=self._base_url,
                api_key=self._api_key,
                connection_limits=httpx.Limits(
                    max_keepalive_connections=self.settings.MAX_KEEPALIVE_CONNECTIONS,
                    max_connections=self.settings.MAX_CONNECTIONS,
                    keepalive_expiry=30.0,
                ),
            )
        self.transport = transport

        self.engine = RetryEngine(
            transport,
            endpoint=self.settings.ENDPOINT,
            metrics_enabled=self.settings.PROMETHEUS_ENABLED,
            **self._engine_options,
        )

    async def compress(
        self,
        content: ContentInput,
        *,
        include_metadata: bool = False,
        webhook_url: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> CompressResult:
        """
        Compress a text blob or a list of messages.

        Args:
            content: Text, or message records ({"message", "role", "created_at", "user_id", ...})
            include_metadata: Ask the service for compression metadata
            webhook_url: Deliver the result asynchronously to this URL
            user_id: Explicit identity (otherwise derived from the messages)

        Returns:
            CompressResult with the outcome, retry metadata and warnings

        Raises:
            CompressError: Any terminal failure (see compress_client.exceptions)
        """
        request = CompressRequest(
            content=content if isinstance(content, str) else list(content),
            include_metadata=include_metadata,
            webhook_url=webhook_url,
            user_id=user_id,
        )
        outcome, metadata, warnings = await self.engine.submit(request, self.config, on_retry=self.on_retry)
        return CompressResult(outcome=outcome, metadata=metadata, warnings=warnings)

    def with_options(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        on_retry: Optional[RetryObserver] = None,
        **config_overrides: Any,
    ) -> "CompressClient":
        """
        Return a new client with updated options; this client is unchanged.

        A new credential or base URL gets a new transport. Otherwise the
        transport is shared and stays owned by this client.

        Args:
            api_key: New bearer token
            base_url: New service base URL
            on_retry: New observer
            **config_overrides: RetryConfig fields (e.g. max_retries=3)
        """
        config = RetryConfig.model_validate({**self.config.model_dump(), **config_overrides})

        needs_transport = api_key is not None or base_url is not None
        client = CompressClient(
            api_key if api_key is not None else self._api_key,
            settings=self.settings,
            config=config,
            transport=None if needs_transport else self.transport,
            base_url=base_url or self._base_url,
            on_retry=on_retry if on_retry is not None else self.on_retry,
            engine_options=self._engine_options,
        )
        logger.debug(
            "Derived client with new options",
            new_transport=needs_transport,
            overrides=sorted(config_overrides),
        )
        return client

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self.transport.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self._base_url}, "
            f"max_retries={self.config.max_retries})"
        )
