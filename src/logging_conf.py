# Logging configuration
from __future__ import annotations
import logging
import logging.config

from config import LOG_LEVEL

# stdout carries the MCP stdio transport, so every handler writes to stderr
LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "basic": {
            "format": "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "basic",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "": {"handlers": ["console"], "level": LOG_LEVEL},
        "httpx": {"handlers": ["console"], "level": "WARNING", "propagate": False},
    },
}


def setup_logging() -> None:
    logging.config.dictConfig(LOGGING_CONFIG)
