"""Structured logging configuration.

Uses standard library logging with a JSON formatter. Records go to stderr so the
CLI's own output on stdout stays readable.

Secret values handed to the store are registered with :func:`register_secret`; the
handler installed by :func:`configure_logging` masks them in every record it emits.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

REDACTED = "***"

_RESERVED_LOG_RECORD_ATTRS: set[str] = {
    "args",
    "asctime",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
}


class JsonFormatter(logging.Formatter):
    """A minimal JSON formatter for logging records."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = record.exc_text or self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


class SecretRedactionFilter(logging.Filter):
    """Masks registered secret values in the message, string extras and traceback."""

    def __init__(self) -> None:
        super().__init__()
        self._values: set[str] = set()

    def register(self, value: str) -> None:
        if value:
            self._values.add(value)

    def redact(self, text: str) -> str:
        # Longest first, so a value containing another is masked whole.
        for value in sorted(self._values, key=len, reverse=True):
            text = text.replace(value, REDACTED)
        return text

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003 (record)
        if not self._values:
            return True

        message = record.getMessage()
        masked = self.redact(message)
        if masked != message:
            record.msg = masked
            record.args = None

        for key, value in list(record.__dict__.items()):
            if key in _RESERVED_LOG_RECORD_ATTRS or key.startswith("_"):
                continue
            if isinstance(value, str):
                setattr(record, key, self.redact(value))

        if record.exc_info and not record.exc_text:
            record.exc_text = logging.Formatter().formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = self.redact(record.exc_text)
        return True


_redaction = SecretRedactionFilter()


def register_secret(value: str) -> None:
    """Mask *value* in every record emitted through :func:`configure_logging`'s handler."""

    _redaction.register(value)


def configure_logging(level: str) -> None:
    """Configure root logging with structured JSON output on stderr."""

    root = logging.getLogger()

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(JsonFormatter())
    handler.addFilter(_redaction)

    root.addHandler(handler)
    root.setLevel(level.upper())

    # uvicorn installs its own handlers; keep its access log at our level.
    logging.getLogger("uvicorn.access").setLevel(max(root.level, logging.INFO))
