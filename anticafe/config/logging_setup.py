"""
Logging configuration.

Routes the ``anticafe`` loggers to stderr through Rich and, when a log
file is configured, to a rotating file as well.
"""

import logging.config
from typing import Any, Dict

from rich.console import Console

from .loader import LoggingConfig

LOGGER_NAME = "anticafe"


def build_logging_dict(config: LoggingConfig) -> Dict[str, Any]:
    """Build a ``logging.config.dictConfig`` mapping for the given settings."""
    handlers: Dict[str, Any] = {
        "console": {
            "class": "rich.logging.RichHandler",
            "formatter": "rich",
            "console": Console(stderr=True),
            "show_path": False,
        },
    }
    if config.file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": config.file,
            "maxBytes": 5_000_000,
            "backupCount": 5,
            "encoding": "utf-8",
            "formatter": "verbose",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "rich": {"format": "%(message)s", "datefmt": "[%X]"},
            "verbose": {
                "format": "[{asctime}] [{levelname}] {name}: {message}",
                "style": "{",
            },
        },
        "handlers": handlers,
        "loggers": {
            LOGGER_NAME: {
                "handlers": list(handlers),
                "level": config.level,
                "propagate": False,
            },
        },
    }


def configure_logging(config: LoggingConfig) -> None:
    """Apply logging settings to the ``anticafe`` logger hierarchy."""
    logging.config.dictConfig(build_logging_dict(config))
