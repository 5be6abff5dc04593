from __future__ import annotations

import logging
import sys
from typing import Any, Optional, TextIO

import structlog

from hateoas_client.config.settings import settings


def configure_logging(level: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    """
    Configure structlog to emit one JSON object per event.

    Call once at startup; the level defaults to ``settings.LOG_LEVEL``.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    level_value = logging.getLevelName(level_name)
    if not isinstance(level_value, int):
        raise ValueError(f"Unknown log level: {level_name}")

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(sort_keys=True),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=True,
    )
