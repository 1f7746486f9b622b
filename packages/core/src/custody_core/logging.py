"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import Processor

from .config import CustodyCoreConfig


def configure_logging(config: Optional[CustodyCoreConfig] = None) -> None:
    """Configure structlog for the custody core.

    Console mode: ConsoleRenderer for readability.
    JSON mode (or any non-development environment): JSONRenderer.
    """
    config = config or CustodyCoreConfig()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    use_json = config.log_format == "json" or config.is_production

    if use_json:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, config.log_level),
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger."""
    return structlog.get_logger(name)


__all__ = ["configure_logging", "get_logger"]
