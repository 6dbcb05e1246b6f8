"""
Structured JSON logging for the students API.

Each entry is one JSON line on the console stream. Routes log on the
"http" channel, store failures on "db" and record changes on "students";
the request ID set by the middleware in main.py is stamped on every entry
written while that request is handled.
"""

import logging
import json
import uuid
from datetime import datetime, timezone
from contextvars import ContextVar

from student_records.config import LOG_LEVEL

# Set per request by request_id_middleware
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

LOGGER_PREFIX = "app"
CHANNELS = ("http", "db", "students")


def _channel_of(logger_name: str) -> str:
    return logger_name.rsplit(".", 1)[-1] if "." in logger_name else LOGGER_PREFIX


class StructuredJsonFormatter(logging.Formatter):
    """
    Renders a record as {timestamp, level, message, channel, context, extra}.

    context always carries request_id (empty outside a request), merged with
    the student_id/email passed by the caller; a traceback, when attached,
    goes under "exception".
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_entry = {
            "timestamp": created.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "message": record.getMessage(),
            "channel": getattr(record, "channel", _channel_of(record.name)),
            "context": {
                "request_id": request_id_var.get(""),
                **(getattr(record, "context", {}) or {})
            },
            "extra": getattr(record, "extra_data", {}) or {}
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def setup_logging():
    """Install the JSON handler on the root logger and apply LOG_LEVEL to every channel."""
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredJsonFormatter())

    level = getattr(logging, LOG_LEVEL, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    for channel in CHANNELS:
        get_logger(channel).setLevel(level)

    return root_logger


def get_logger(channel: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_PREFIX}.{channel}")


def log_with_context(logger: logging.Logger, level: str, message: str,
                     context: dict = None, extra_data: dict = None,
                     exc_info=None):
    """
    Log on a channel logger with student context and request metrics.

    Args:
        logger: Channel logger from get_logger
        level: "DEBUG", "INFO", "WARNING" or "ERROR"
        message: Human-readable message
        context: Identifies the record involved, e.g. student_id, email
        extra_data: Measurements such as duration_ms, status_code, rows_deleted
        exc_info: Exception whose traceback should be included
    """
    logger.log(
        getattr(logging, level.upper(), logging.INFO),
        message,
        exc_info=exc_info,
        extra={"context": context or {}, "extra_data": extra_data or {}, "channel": _channel_of(logger.name)}
    )


def generate_request_id() -> str:
    return str(uuid.uuid4())
