"""Structured logging configuration using structlog.

Applications embedding the client opt in by calling ``configure_logging``
once at startup; importing the package never touches logging:

    from compress_client import get_settings
    from compress_client.logging_config import configure_logging

    configure_logging(get_settings())

``COMPRESS_ENVIRONMENT=production`` switches to one JSON object per line,
anything else renders coloured console output.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from compress_client.config import Settings, get_settings

# Loggers of the HTTP stack, which log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def app_context(app_name: str) -> Processor:
    """Build a processor that tags every event with ``app=<app_name>``."""

    def add_app_context(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("app", app_name)
        return event_dict

    return add_app_context


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        settings: Source of APP_NAME, LOG_LEVEL and ENVIRONMENT
            (defaults to the cached environment settings)
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    is_production = settings.ENVIRONMENT.lower() == "production"

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        app_context(settings.APP_NAME),
    ]
    if is_production:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared_processors)
    )
    handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.get_logger(__name__).info(
        "Logging configured",
        app=settings.APP_NAME,
        log_level=settings.LOG_LEVEL,
        environment=settings.ENVIRONMENT,
        renderer="json" if is_production else "console",
    )
