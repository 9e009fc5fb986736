"""Logging setup shared by the API and scripts."""

from __future__ import annotations

import logging.config
from typing import Any


def build_logging_config(level: str = "INFO") -> dict[str, Any]:
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "standard",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "fin_advisor": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
            # Request lines from the remote backend client are noise at INFO.
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
        },
    }


def configure_logging(level: str = "INFO") -> None:
    """Install the console logging configuration."""
    logging.config.dictConfig(build_logging_config(level))
