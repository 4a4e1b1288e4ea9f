"""
Logging setup.

Library modules only call ``logging.getLogger(__name__)``; applications
call ``configure_logging`` once at startup.
"""

from __future__ import annotations

import logging.config
from typing import Any

from lonja.config import Settings, get_settings


def logging_config(settings: Settings) -> dict[str, Any]:
    level = settings.log_level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
            "verbose": {
                "format": "{levelname} {asctime} {name} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "level": level,
                "class": "logging.StreamHandler",
                "formatter": settings.log_format,
            },
        },
        "loggers": {
            "lonja": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
        },
    }


def configure_logging(settings: Settings | None = None) -> None:
    logging.config.dictConfig(logging_config(settings or get_settings()))


__all__ = ("logging_config", "configure_logging")
