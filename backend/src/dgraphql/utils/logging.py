"""JSON logging for the GraphQL Lambda function.

Every line written to stdout is one JSON object, so CloudWatch Logs
Insights can filter on ``level``, ``request_id`` and any ``extra`` field.

SECURITY NOTES:
- Request bodies carry queries and variables; log their size only
- Never log authorization headers or tokens
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from contextvars import ContextVar
from datetime import datetime
from datetime import timezone
from typing import Any
from typing import Mapping
from typing import Optional

# API Gateway request ID of the invocation being served
request_id: ContextVar[str] = ContextVar("request_id", default="")

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

# Libraries whose INFO output is noise in request logs
_QUIET_LOGGERS = ("graphql", "urllib3")


class StructuredLogFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        current_request = request_id.get()
        if current_request:
            entry["request_id"] = current_request

        if record.levelno != logging.INFO:
            entry["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info and record.exc_info[0] is not None:
            error_type, error, tb = record.exc_info
            entry["exception"] = {
                "type": error_type.__name__,
                "message": str(error),
                "traceback": traceback.format_exception(error_type, error, tb),
            }

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS
        }
        if extra:
            entry["extra"] = extra

        return json.dumps(entry, default=str)


def configure_logging(level: Optional[str] = None) -> None:
    """Send JSON logs to stdout at ``level`` (default: LOG_LEVEL or INFO).

    Existing root handlers are replaced, so calling this again on a warm
    container does not duplicate output.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel((level or os.getenv("LOG_LEVEL") or "INFO").upper())

    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(StructuredLogFormatter())
    root_logger.addHandler(stream)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the module logger for ``name``."""
    return logging.getLogger(name)


def set_request_context(req_id: Optional[str] = None) -> None:
    """Tag subsequent log lines with the invocation's request ID."""
    if req_id:
        request_id.set(req_id)


def clear_request_context() -> None:
    request_id.set("")


def log_lambda_event(logger: logging.Logger, event: Mapping[str, Any]) -> None:
    """Log the shape of an incoming event at DEBUG level.

    Query parameter names are logged without values and the body by
    length only.
    """
    query_params = event.get("queryStringParameters") or {}
    summary = {
        "http_method": event.get("httpMethod"),
        "path": event.get("path"),
        "query_params": sorted(query_params),
        "body_length": len(event.get("body") or ""),
    }
    logger.debug("Lambda event received", extra={"event": summary})


def log_response(
    logger: logging.Logger,
    status_code: int,
    duration_ms: Optional[float] = None,
) -> None:
    """Log the outgoing status; 4xx and 5xx are logged as warnings."""
    summary: dict[str, Any] = {"status_code": status_code}
    if duration_ms is not None:
        summary["duration_ms"] = round(duration_ms, 2)

    level = logging.INFO if status_code < 400 else logging.WARNING
    logger.log(level, "Lambda response", extra={"response": summary})
