from __future__ import annotations

"""Small logging helpers to standardize path2md logger names, configuration and tracing.

This module provides:
    - JsonLogFormatter: one JSON object per record, trace fields attached.
    - setup_base_logger: Root logger configuration for the 'path2md' logger.
    - get_logger: Namespaced logger factory ('path2md.*').
    - trace_io utilities gated by PATH2MD_TRACE_IO.

Logs always go to stderr (or the given stream), never to the dump sink.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Optional, TextIO

BASE_LOGGER = "path2md"


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record: ts, level, logger, msg.

    Trace records carry the walked entry as ``path``; it is lifted to the top
    level so a log stream can be filtered per file. Remaining trace fields
    (kind, format, bytes, ...) go under ``ctx``.
    """

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload = {
            "ts": ts.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        ctx = dict(getattr(record, "context", None) or {})
        if "path" in ctx:
            payload["path"] = ctx.pop("path")
        if ctx:
            payload["ctx"] = ctx
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_base_logger(
    *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Configure (or re-target) the base 'path2md' logger and return it.

    Args:
        json_logs: If True, configure a JSON formatter, else plain text.
        level: Logging level for the base logger.
        stream: Optional stream (stderr by default).

    Returns:
        The configured base logger.
    """
    import sys as _sys

    base = logging.getLogger(BASE_LOGGER)
    base.setLevel(level)
    base.propagate = False

    # Replace our previous handler: stderr may have been swapped since.
    for old in [h for h in base.handlers if getattr(h, "_path2md", False)]:
        base.removeHandler(old)

    handler = logging.StreamHandler(stream or _sys.stderr)
    handler._path2md = True
    base.addHandler(handler)

    if json_logs:
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    return base


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a namespaced logger under 'path2md'."""
    if not name or name == BASE_LOGGER:
        return logging.getLogger(BASE_LOGGER)
    if name.startswith(BASE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{BASE_LOGGER}.{name}")


def is_trace_io_enabled() -> bool:
    """Check if IO tracing is enabled via env flag."""
    return os.getenv("PATH2MD_TRACE_IO") == "1"


def trace_io(logger: logging.Logger, message: str, **ctx) -> None:
    """Emit debug-verbosity IO trace messages only when enabled.

    Args:
        logger: Target logger.
        message: Human-readable description.
        **ctx: Structured context, attached to the record for JSON logs.
    """
    if not is_trace_io_enabled():
        return
    if ctx:
        logger.debug("%s | ctx=%r", message, ctx, extra={"context": ctx})
    else:
        logger.debug("%s", message)
