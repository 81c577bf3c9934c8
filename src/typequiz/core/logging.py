"""Logging configuration helpers."""

from __future__ import annotations

import logging.config
from typing import Any

from .config import LoggingSettings

CONTAINER_LOGGER = "typequiz.core.container"

PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
KEY_VALUE_FORMAT = "ts=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)r"


def _logger_levels(settings: LoggingSettings) -> dict[str, dict[str, str]]:
    """Per-logger level overrides; the container logger may be tuned separately."""
    if not settings.container_level:
        return {}
    return {CONTAINER_LOGGER: {"level": settings.container_level.upper()}}


def configure_logging(settings: LoggingSettings) -> None:
    """Route every record to stderr at the configured levels.

    ``structured`` switches to ``key=value`` lines with the message quoted,
    which keeps one record per line even for multi-line messages.
    """
    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": KEY_VALUE_FORMAT if settings.structured else PLAIN_FORMAT
            },
        },
        "handlers": {
            "stderr": {"class": "logging.StreamHandler", "formatter": "default"},
        },
        "loggers": _logger_levels(settings),
        "root": {"handlers": ["stderr"], "level": settings.level.upper()},
    }
    logging.config.dictConfig(config)


__all__ = ["CONTAINER_LOGGER", "KEY_VALUE_FORMAT", "PLAIN_FORMAT", "configure_logging"]
