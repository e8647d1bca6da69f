"""Logging configuration module."""

from __future__ import annotations

import logging

from app.config.settings import get_settings

_NOISY_LOGGERS = ("aiosqlite", "sqlalchemy.engine")


def configure_logging() -> None:
    """Configure root logger for the API process and the purge CLI."""

    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    # Driver chatter drowns out purge results at DEBUG.
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
