"""structlog setup for easytodo.

Events are snake_case names with key-value context. Output goes to stderr,
either through the coloured console renderer or as one JSON object per line.
"""

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from easytodo.config import Settings


def _renderer(log_format: str) -> list[Processor]:
    if log_format == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback)]


def configure_logging(settings: "Settings | None" = None) -> None:
    """Configure structlog (and the stdlib root logger) from settings.

    Args:
        settings: Application settings. If None, logs warnings and above to
            the console.
    """
    level_name = settings.log_level if settings is not None else "warning"
    log_format = settings.log_format if settings is not None else "console"
    level = logging.getLevelName(level_name.upper())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *_renderer(log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=level, stream=sys.stderr)


def ensure_logging(settings: "Settings | None" = None) -> None:
    """Configure logging unless the host application already did."""
    if not structlog.is_configured():
        configure_logging(settings)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


class Loggers:
    """Named loggers for easytodo components."""

    @staticmethod
    def store() -> structlog.stdlib.BoundLogger:
        return get_logger("easytodo.store")

    @staticmethod
    def projector() -> structlog.stdlib.BoundLogger:
        return get_logger("easytodo.projector")

    @staticmethod
    def persistence() -> structlog.stdlib.BoundLogger:
        return get_logger("easytodo.persistence")
