"""Structured logging setup shared by the engine and the HTTP service."""

import logging
from typing import Optional

import structlog

from formguard.config import get_settings


def configure_logging(debug: Optional[bool] = None, level: Optional[str] = None) -> None:
    """Configure structlog processors and level filtering.

    Args:
        debug: Render human-readable console output instead of JSON.
            Defaults to ``FORMGUARD_DEBUG``.
        level: Minimum level name (``debug``, ``info``, ...). Defaults to
            ``FORMGUARD_LOG_LEVEL``.
    """
    settings = get_settings()
    debug = settings.DEBUG if debug is None else debug
    level_name = (level or settings.LOG_LEVEL).upper()
    min_level = logging.getLevelName(level_name)
    if not isinstance(min_level, int):
        min_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
    )
