# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Structured logging configuration for the DID method service.

Provides:
- JSON formatter for production (machine-parseable)
- Standard formatter for development (human-readable)
- Request IDs carried in a context variable so every log line emitted while
  handling a registration or resolution can be correlated
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)

# Libraries whose INFO output drowns the service's own logs
NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")


def get_request_id() -> str | None:
    """Get the request ID bound to the current context, if any."""
    return _request_id.get()


def set_request_id(request_id: str | None) -> None:
    """Bind a request ID to the current context, or clear it with None."""
    _request_id.set(request_id)


def generate_request_id() -> str:
    """Generate a new UUID-based request ID."""
    return str(uuid.uuid4())


@contextmanager
def request_context(request_id: str | None = None) -> Generator[str, None, None]:
    """Scope a request ID to a block.

    Args:
        request_id: ID to use. A new one is generated when omitted.

    Yields:
        The request ID in effect inside the block.

    Example:
        with request_context() as rid:
            logger.info("Registering DID")  # Will include rid
    """
    rid = request_id or generate_request_id()
    token = _request_id.set(rid)
    try:
        yield rid
    finally:
        _request_id.reset(token)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for production environments.

    One JSON object per line with timestamp, level, logger and message.
    The request ID is included when one is bound.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_request_id()
        if request_id:
            log_data["request_id"] = request_id

        if record.levelno >= logging.WARNING:
            log_data["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class StandardFormatter(logging.Formatter):
    """Human-readable formatter for development, colored on a TTY."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"
    REQUEST_ID_COLOR = "\033[90m"  # Gray

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy so other handlers see the untouched record
        record = logging.makeLogRecord(record.__dict__)

        request_id = get_request_id()
        if request_id:
            short_rid = request_id[:8]
            if self.use_colors:
                prefix = f"{self.REQUEST_ID_COLOR}[{short_rid}]{self.RESET} "
            else:
                prefix = f"[{short_rid}] "
            record.msg = prefix + str(record.msg)

        if self.use_colors:
            color = self.COLORS.get(record.levelname, "")
            record.levelname = f"{color}{record.levelname}{self.RESET}"

        return super().format(record)


def configure_logging(
    level: str | int | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """Configure root logging for the service.

    Arguments left as None fall back to configuration:

        DID_METHOD_LOG_LEVEL: log level
        DID_METHOD_LOG_FORMAT: "json" or "text" (auto-detect if unset)
        DID_METHOD_LOG_FILE: additional JSON log file
    """
    from .config import get_config

    config = get_config()

    if level is None:
        level = config.log_level
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_format is None:
        format_setting = config.log_format.lower()
        if format_setting == "json":
            json_format = True
        elif format_setting == "text":
            json_format = False
        else:
            json_format = not sys.stderr.isatty()

    log_file = config.log_file if log_file is None else log_file

    formatter: logging.Formatter = JSONFormatter() if json_format else StandardFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        # File output is always JSON
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
