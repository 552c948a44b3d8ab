"""Logging configuration for the service."""

from __future__ import annotations

import logging

from app.core.config import Settings

# Libraries that are too chatty at INFO for day-to-day operation.
_QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
}


def configure_logging(settings: Settings) -> None:
    """Configure the root logger from settings."""
    level_name = settings.logging.level.upper()
    level = getattr(logging, level_name, logging.INFO)
    if settings.debug:
        level = logging.DEBUG

    logging.basicConfig(level=level, format=settings.logging.format)
    logging.getLogger().setLevel(level)

    for name, quiet_level in _QUIET_LOGGERS.items():
        if settings.database.echo and name == "sqlalchemy.engine":
            continue
        logging.getLogger(name).setLevel(quiet_level)
