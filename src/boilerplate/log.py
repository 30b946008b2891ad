"""Key/value log formatting.

Loggers are plain ``logging.getLogger("boilerplate.<area>")`` loggers.
Structured context is passed through ``extra`` using ``fields()``::

    logger.error("Invalid port", extra=fields(err=exc, port="abc"))

and rendered by ``KeyValueFormatter`` as one logfmt-style line::

    t=2026-10-18T12:00:00+0000 lvl=eror msg="Invalid port" err=... port=abc
"""

import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

_LEVEL_NAMES = {
    logging.DEBUG: "dbug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "eror",
    logging.CRITICAL: "crit",
}

_HANDLER_NAME = "boilerplate.keyvalue"


def fields(**kwargs: Any) -> dict[str, dict[str, Any]]:
    """Wrap key/value pairs for the ``extra`` argument of a log call."""
    return {"fields": kwargs}


def _quote(value: object) -> str:
    text = str(value)
    if text == "" or any(c in text for c in ' ="\n\t'):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
        return f'"{escaped}"'
    return text


class KeyValueFormatter(logging.Formatter):
    """Render records as ``key=value`` pairs, time and level first."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, UTC).strftime("%Y-%m-%dT%H:%M:%S%z")
        level = _LEVEL_NAMES.get(record.levelno, record.levelname.lower())
        parts = [f"t={stamp}", f"lvl={level}", f"msg={_quote(record.getMessage())}"]
        for key, value in getattr(record, "fields", {}).items():
            parts.append(f"{key}={_quote(value)}")
        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(level: int | str = logging.INFO, stream: TextIO | None = None) -> None:
    """Attach a key/value stream handler to the ``boilerplate`` logger.

    Safe to call more than once; the handler is installed only once.
    """
    logger = logging.getLogger("boilerplate")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        return
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(KeyValueFormatter())
    logger.addHandler(handler)
