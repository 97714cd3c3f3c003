from __future__ import annotations

import logging
from logging.config import dictConfig

_CONTEXT_KEYS = (
    "user_id",
    "sensor_id",
    "reading_id",
    "alert_id",
    "severity",
    "status",
)


class ContextualFormatter(logging.Formatter):
    """Appends known `extra` ids to the formatted line."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context_parts: list[str] = []
        for key in _CONTEXT_KEYS:
            value = getattr(record, key, None)
            if value is None:
                continue
            context_parts.append(f"{key}={value}")
        if context_parts:
            return f"{message} | {' '.join(context_parts)}"
        return message


def configure_logging(level: str | int = "INFO") -> None:
    """Configure application-wide logging with contextual formatting.

    Safe to call more than once; each call replaces the root handler so the
    latest level wins.
    """
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "contextual": {
                    "()": ContextualFormatter,
                    "fmt": "%(asctime)sZ | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                }
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "contextual",
                }
            },
            "root": {"handlers": ["default"], "level": level},
        }
    )
