"""Logging configuration for sensitive-filter.

Log records carry a correlation_id so every line written while handling
one command (or one host request) can be grouped. The CLI opens a fresh
:func:`correlation_scope` per invocation; host applications may open their
own around engine calls.
"""

import logging
import os
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional, TextIO

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "sensitive-filter"

JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


@contextmanager
def correlation_scope(correlation_id: Optional[str] = None) -> Iterator[str]:
    """Tag log records emitted inside the block with one correlation id.

    Args:
        correlation_id: Id to use. A random hex id is generated when omitted.

    Yields:
        The active correlation id.
    """
    value = correlation_id or uuid.uuid4().hex
    token = _correlation_id.set(value)
    try:
        yield value
    finally:
        _correlation_id.reset(token)


def current_correlation_id() -> str:
    """The active correlation id, or empty string outside any scope."""
    return _correlation_id.get()


class CorrelationFilter(logging.Filter):
    """Stamps the active correlation id ("-" when none) on each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = _correlation_id.get() or "-"
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter using ``level``/``timestamp`` keys and a service tag."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        for old, new in (("levelname", "level"), ("asctime", "timestamp")):
            if old in log_record:
                log_record[new] = log_record.pop(old)

        log_record["service"] = SERVICE_NAME
        log_record["correlation_id"] = getattr(record, "correlation_id", "-")


def _build_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return CustomJsonFormatter(fmt=JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """Route all logging through a single handler on the root logger.

    Args:
        level: Log level name. Defaults to SENSITIVE_LOG_LEVEL or INFO.
        json_format: JSON output when True. Defaults to
            SENSITIVE_LOG_FORMAT == "json" (the default).
        stream: Output stream. Defaults to stderr so CLI output on stdout
            stays clean.

    Returns:
        The installed handler.
    """
    level = (level or os.getenv("SENSITIVE_LOG_LEVEL", "INFO")).upper()
    if json_format is None:
        json_format = os.getenv("SENSITIVE_LOG_FORMAT", "json").lower() == "json"

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.addFilter(CorrelationFilter())
    handler.setFormatter(_build_formatter(json_format))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    logging.getLogger("redis").setLevel(logging.WARNING)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass ``__name__``)."""
    return logging.getLogger(name)
