"""Shared constants and logging setup."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any

import structlog

DEFAULT_TITLE = "Flashcards"
QUESTION_PREVIEW_LENGTH = 50


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog on top of stdlib logging, writing to stderr."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)

    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.ConsoleRenderer(),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
