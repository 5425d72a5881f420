"""Console logging setup for the command line."""

from __future__ import annotations

import logging
import logging.config
from typing import Any

from .runtime_settings import LoggingSettings

LOGGER_NAME = "schema_form_converter"


def build_logging_config(level: str) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": "%(asctime)s [%(levelname)s] %(name)s - %(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["console"], "level": level, "propagate": False},
        },
    }


def configure_logging(settings: LoggingSettings, *, verbose: bool = False) -> None:
    """Route package log records to stderr at the configured level."""
    level = "DEBUG" if verbose else settings.level
    logging.config.dictConfig(build_logging_config(level))
