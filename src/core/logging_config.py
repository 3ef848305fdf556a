"""Structured logging configuration.

This module initializes structlog with a stable JSON event format.
Every module logs snake_case events with keyword fields.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL

_CONFIGURED_LEVEL: str | None = None


def configure_logging(log_level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structlog processors and minimum level.

    Args:
        log_level: Lower-case level name such as ``info``.
    """
    global _CONFIGURED_LEVEL
    level = logging.getLevelName(log_level.upper())
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
    _CONFIGURED_LEVEL = log_level


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    if _CONFIGURED_LEVEL is None:
        configure_logging()
    return structlog.get_logger(name)


def _stderr_logger(*args: Any) -> Any:
    # Resolved per logger so a replaced sys.stderr is honoured.
    return structlog.PrintLogger(file=sys.stderr)
