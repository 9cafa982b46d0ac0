"""Structured logging setup for applications embedding jot."""

import logging
import sys

import structlog
from structlog.stdlib import LoggerFactory

from jot.core.settings import TokenSettings


def configure_logging(level: str = "INFO", format_type: str = "console") -> None:
    """
    Route structlog through stdlib logging.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        format_type: "json" for production, "console" for development
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if format_type == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: TokenSettings) -> None:
    """Apply the log level and format from TokenSettings."""
    configure_logging(settings.log_level, settings.log_format)
