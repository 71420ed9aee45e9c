"""
Configuration settings for the compress client.

Settings are loaded from environment variables (prefix ``COMPRESS_``) with
sensible defaults. Use a .env file for local development.

``RetryConfig`` is the immutable value handed to the retry engine on every
call. Reconfiguring means building a new value, never mutating a shared one.
"""

from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="COMPRESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "compress-client"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Service ===
    API_KEY: Optional[str] = None
    BASE_URL: str = "https://api.mielto.com"
    ENDPOINT: str = "/api/v1/compress"
    MAX_CONNECTIONS: int = 10
    MAX_KEEPALIVE_CONNECTIONS: int = 5

    # === Timeouts ===
    REQUEST_TIMEOUT_MS: int = 120_000  # per-call ceiling, bounds synchronous blocking

    # === Retry & Backoff ===
    MAX_RETRIES: int = 10
    INITIAL_BACKOFF_MS: int = 10_000
    MAX_BACKOFF_MS: int = 600_000
    BACKOFF_FACTOR: float = 2.0

    # === Content Limits ===
    MAX_CONTENT_LENGTH: int = 800_000  # chars, rejected before any network call
    MESSAGE_COUNT_WARNING_THRESHOLD: int = 100  # advise webhook_url above this

    # === Processing Poll ===
    PROCESSING_POLL_UNIT_MS: int = 60_000
    PROCESSING_POLL_CHUNK_CHARS: int = 15_000

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


class RetryConfig(BaseModel):
    """
    Immutable retry/backoff configuration for one ``submit`` call.

    Attributes:
        max_retries: Attempt limit for each retry kind (1 = never retry)
        initial_backoff_ms: Backoff base delay for attempt 1
        max_backoff_ms: Backoff cap before jitter
        backoff_factor: Exponential growth factor
        request_timeout_ms: Ceiling applied to the estimated per-call timeout
        max_content_length: Hard character limit, checked before sending
        message_count_warning_threshold: Advisory threshold for webhook delivery
        processing_poll_unit_ms: Poll delay per content chunk
        processing_poll_chunk_chars: Characters per poll unit
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_retries: int = Field(default=10, ge=1)
    initial_backoff_ms: int = Field(default=10_000, ge=0)
    max_backoff_ms: int = Field(default=600_000, ge=0)
    backoff_factor: float = Field(default=2.0, ge=1.0)
    request_timeout_ms: int = Field(default=120_000, gt=0)
    max_content_length: int = Field(default=800_000, gt=0)
    message_count_warning_threshold: int = Field(default=100, ge=0)
    processing_poll_unit_ms: int = Field(default=60_000, gt=0)
    processing_poll_chunk_chars: int = Field(default=15_000, gt=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryConfig":
        """Build the retry config from application settings."""
        return cls(
            max_retries=settings.MAX_RETRIES,
            initial_backoff_ms=settings.INITIAL_BACKOFF_MS,
            max_backoff_ms=settings.MAX_BACKOFF_MS,
            backoff_factor=settings.BACKOFF_FACTOR,
            request_timeout_ms=settings.REQUEST_TIMEOUT_MS,
            max_content_length=settings.MAX_CONTENT_LENGTH,
            message_count_warning_threshold=settings.MESSAGE_COUNT_WARNING_THRESHOLD,
            processing_poll_unit_ms=settings.PROCESSING_POLL_UNIT_MS,
            processing_poll_chunk_chars=settings.PROCESSING_POLL_CHUNK_CHARS,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance (treat as read-only)
    """
    return Settings()
