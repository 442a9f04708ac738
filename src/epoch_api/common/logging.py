"""Process-wide logging for the Epoch API.

One console line per record::

    2026-01-05T14:03:11.207Z INFO  epoch_api.request [cid=5f0c...] request.complete method=GET path=/api/unix-to-date status_code=200 duration_ms=0.91

Event names are dotted (``conversion.batch.complete``); anything passed
through ``extra`` is appended as ``key=value``. The correlation ID comes from
a context variable bound per request by the request middleware.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

from epoch_api.settings import Settings

_correlation_id: ContextVar[str | None] = ContextVar("epoch_api_correlation_id", default=None)

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "correlation_id",
    "color_message",
    "taskName",
}

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_handler: logging.Handler | None = None


class ConsoleLogFormatter(logging.Formatter):
    """Single-line formatter with correlation ID and trailing extras."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)-5s %(name)s [cid=%(correlation_id)s] %(message)s")

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        moment = datetime.fromtimestamp(record.created, tz=UTC)
        return f"{moment:%Y-%m-%dT%H:%M:%S}.{int(record.msecs):03d}Z"

    def format(self, record: logging.LogRecord) -> str:
        record.correlation_id = getattr(record, "correlation_id", None) or _correlation_id.get() or "-"
        line = super().format(record)
        extras = " ".join(
            f"{key}={_render(value)}"
            for key, value in record.__dict__.items()
            if key not in _RECORD_FIELDS and not key.startswith("_")
        )
        return f"{line} {extras}" if extras else line


def setup_logging(settings: Settings) -> None:
    """Install the console handler on the root logger.

    Safe to call once per application built; later calls only change the
    level (``EPOCH_LOGGING_LEVEL``).
    """

    global _handler

    root = logging.getLogger()
    root.setLevel(logging.getLevelNamesMapping().get(settings.logging_level, logging.INFO))
    if _handler is not None and _handler in root.handlers:
        return

    _handler = logging.StreamHandler()
    _handler.setFormatter(ConsoleLogFormatter())
    root.handlers = [_handler]

    # Uvicorn output goes through the same handler.
    for name in _UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True


def bind_request_context(correlation_id: str | None) -> None:
    _correlation_id.set(correlation_id)


def clear_request_context() -> None:
    _correlation_id.set(None)


def log_context(
    *,
    direction: str | None = None,
    timezone: str | None = None,
    format_spec: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build an ``extra`` mapping, dropping conversion fields that are unset."""

    named = {"direction": direction, "timezone": timezone, "format_spec": format_spec}
    return {key: value for key, value in named.items() if value is not None} | extra


def _render(value: Any) -> str:
    return "null" if value is None else str(value)


__all__ = [
    "ConsoleLogFormatter",
    "bind_request_context",
    "clear_request_context",
    "log_context",
    "setup_logging",
]
