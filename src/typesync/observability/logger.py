"""Structured JSON logger for typesync.

Every log record is emitted as a single-line JSON object so diagnostics
from the action builders can be filtered by field rather than by message
text.

Typical structured output::

    {"ts": "2025-07-01T12:00:00.123456+00:00", "level": "DEBUG",
     "logger": "typesync.attributes", "message": "ignored delta entry",
     "key": "_2", "kind": "ignored"}

Usage::

    from typesync.observability import get_logger

    log = get_logger("typesync.enums")
    log.debug("collapsed removals", extra={"extra_fields": {"keys": 3}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Guaranteed keys: ``ts`` (ISO-8601 UTC), ``level``, ``logger`` and
    ``message``.  Structured fields passed via
    ``extra={"extra_fields": {...}}`` are merged into the top-level object;
    ``exception`` and ``stack_info`` are added when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(
            record, "extra_fields", None
        )
        if extra_fields is not None:
            log_entry.update(extra_fields)

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(log_entry, default=str)


# One handler per logger name so repeated ``get_logger`` calls never stack
# duplicate handlers.
_configured_loggers: set[str] = set()


def get_logger(
    name: str = "typesync",
    *,
    level: int | str = logging.WARNING,
    stream: Any | None = None,
) -> logging.Logger:
    """Get or create a structured JSON logger.

    Parameters
    ----------
    name:
        Logger name.  Defaults to ``"typesync"``.  Modules use children
        such as ``"typesync.attributes"``.
    level:
        Minimum log level, as an ``int`` or a case-insensitive name.  The
        builders only log at ``DEBUG``, so the default ``WARNING`` keeps
        them silent until a caller lowers it.
    stream:
        Output stream for the handler.  Defaults to ``sys.stderr``.

    Returns
    -------
    logging.Logger
        A logger with a :class:`StructuredFormatter` handler attached.
        Repeated calls with the same *name* return the same logger and do
        **not** add duplicate handlers.
    """
    logger = logging.getLogger(name)

    if name not in _configured_loggers:
        resolved_level = (
            logging.getLevelName(level.upper())
            if isinstance(level, str)
            else level
        )
        logger.setLevel(resolved_level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

        _configured_loggers.add(name)

    return logger
