"""Logging setup for the API process."""

import logging
from logging.config import dictConfig

from app.core.config import settings


def configure_logging(level: str | None = None) -> None:
    """Apply the process-wide logging config (console handler, app loggers)."""
    level = (level or settings.LOG_LEVEL).upper()
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "app": {"handlers": ["console"], "level": level, "propagate": False},
                "sqlalchemy.engine": {
                    "level": "INFO" if settings.DEBUG else "WARNING",
                },
            },
            "root": {"handlers": ["console"], "level": "WARNING"},
        }
    )
    logging.getLogger(__name__).debug("Logging configured at %s", level)
