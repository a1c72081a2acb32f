"""
Logging setup for the decoder and its CLI.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Union

import structlog


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    *,
    stream: Optional[TextIO] = None,
) -> None:
    """Route structlog output to ``stream`` (stderr by default) and drop events below ``level``."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )
