"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import pytest

from compress_client.config import RetryConfig, Settings
from compress_client.models.content import Message


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            settings = test_settings.model_copy(update={"MAX_RETRIES": 2})
    """
    return Settings(
        # === Application ===
        APP_NAME="compress-client (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Service ===
        API_KEY="test-key",
        BASE_URL="https://compress.test",
        ENDPOINT="/api/v1/compress",

        # === Retry ===
        MAX_RETRIES=3,
        INITIAL_BACKOFF_MS=10_000,
        MAX_BACKOFF_MS=600_000,
        BACKOFF_FACTOR=2.0,

        # === Monitoring ===
        PROMETHEUS_ENABLED=False,  # Keep the global registry quiet unless a test needs it
    )


@pytest.fixture
def retry_config(test_settings: Settings) -> RetryConfig:
    """RetryConfig built from test settings (max_retries=3)."""
    return RetryConfig.from_settings(test_settings)


@pytest.fixture
def create_messages():
    """Factory fixture to create message lists.

    Usage:
        def test_something(create_messages):
            messages = create_messages(count=20, text="hello")
    """
    def _create(count: int = 3, text: str = "hello there", user_id: str | None = None) -> list[Message]:
        return [
            Message(
                message=text,
                role="user" if i % 2 == 0 else "assistant",
                created_at=f"2026-01-01T12:{i % 60:02d}:00Z",
                user_id=user_id,
            )
            for i in range(count)
        ]

    return _create
