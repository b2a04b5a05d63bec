"""Structured JSON logging for the task tracker service."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

from .config import Settings
from .context import UNBOUND, get_request_id, get_user_id

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_BUILTIN_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}
_CONTEXT_ATTRS = ("request_id", "user_id")

# Third-party loggers routed through the JSON handler instead of their own.
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _json_safe(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class JsonLogFormatter(logging.Formatter):
    """Render each record as one JSON object per line.

    ``static_fields`` (service name, environment) are written first, then the
    standard fields, the request context and finally any ``extra`` values.
    """

    def __init__(self, *, static_fields: dict[str, Any] | None = None) -> None:
        super().__init__()
        self._static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        entry: dict[str, Any] = {
            **self._static_fields,
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _CONTEXT_ATTRS:
            entry[name] = getattr(record, name, UNBOUND)

        for key, value in vars(record).items():
            if key in _BUILTIN_RECORD_ATTRS or key in entry:
                continue
            entry[key] = _json_safe(value)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack"] = self.formatStack(record.stack_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class RequestContextFilter(logging.Filter):
    """Stamp the current request id and authenticated user onto records.

    A ``user_id`` passed explicitly through ``extra`` is left as it is.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.request_id = get_request_id()
        if getattr(record, "user_id", None) is None:
            record.user_id = get_user_id()
        return True


def build_logging_config(settings: Settings) -> dict[str, Any]:
    """Return the ``dictConfig`` mapping for ``settings``."""

    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    server_loggers = {
        name: {"handlers": ["json"], "level": level, "propagate": False} for name in _SERVER_LOGGERS
    }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": JsonLogFormatter,
                "static_fields": {
                    "service": settings.project_name,
                    "environment": settings.environment,
                },
            }
        },
        "filters": {"request_context": {"()": RequestContextFilter}},
        "handlers": {
            "json": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "json",
                "filters": ["request_context"],
                "level": level,
            }
        },
        "root": {"handlers": ["json"], "level": level},
        "loggers": {
            **server_loggers,
            # passlib logs a trapped traceback while probing bcrypt>=4.1.
            "passlib": {"handlers": ["json"], "level": logging.ERROR, "propagate": False},
        },
    }


def configure_logging(settings: Settings) -> None:
    """Install the JSON logging configuration for the process."""

    logging.captureWarnings(True)
    logging.config.dictConfig(build_logging_config(settings))


__all__ = [
    "JsonLogFormatter",
    "RequestContextFilter",
    "build_logging_config",
    "configure_logging",
]
