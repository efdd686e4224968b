"""
cf-cache-utils — Structured Logging

JSON log formatting with a request-scoped id, shared by every module.
Modules log through ``logging.getLogger(__name__)``; this module only
decides how records are rendered.
"""

import contextvars
import json
import logging
from collections.abc import Generator
from contextlib import contextmanager
from datetime import UTC, datetime
from uuid import uuid4

# Request ID context variable
_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar("request_id", default=None)

# LogRecord attributes that are never copied as extra fields
_RESERVED_ATTRS = frozenset(
    (
        "args",
        "msg",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
        "message",
    )
)

ROOT_LOGGER = "cf_cache_utils"


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = _request_id_ctx.get()
        if request_id:
            log_data["request_id"] = request_id

        for key, value in record.__dict__.items():
            if key not in log_data and not key.startswith("_") and key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def configure_logging(level: str = "INFO", fmt: str = "json") -> logging.Logger:
    """
    Install a single stream handler on the package logger.

    Args:
        level: Log level name
        fmt: "json" for JSONFormatter, "text" for a plain line format

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_request_id() -> str | None:
    """Get the request id bound to the current context."""
    return _request_id_ctx.get()


@contextmanager
def request_scope(request_id: str | None = None) -> Generator[str, None, None]:
    """
    Bind a request id for every log record emitted inside the block.

    Args:
        request_id: Explicit id, generated when omitted

    Yields:
        The bound request id
    """
    rid = request_id or uuid4().hex
    token = _request_id_ctx.set(rid)
    try:
        yield rid
    finally:
        _request_id_ctx.reset(token)
