"""
Structured logger with JSON output and file support.

Wraps the standard logging module. Text output is meant for an operator's
terminal, JSON output for log shipping from cron or CI runs.
"""

import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

from .interface import Logger

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_RESERVED_KEYS = {
    "args", "asctime", "created", "exc_info", "exc_text", "filename",
    "funcName", "levelname", "levelno", "lineno", "module",
    "msecs", "message", "msg", "name", "pathname", "process",
    "processName", "relativeCreated", "stack_info", "thread",
    "threadName", "taskName",
}


class JsonFormatter(logging.Formatter):
    """JSON formatter for logging records."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        session_id = getattr(record, "session_id", None)
        if session_id:
            log_data["session_id"] = str(session_id)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_KEYS and key != "session_id":
                log_data[key] = value

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Text formatter that appends extra kwargs to the message."""

    def format(self, record: logging.LogRecord) -> str:
        s = super().format(record)

        extra_args = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_KEYS and key != "session_id"
        }
        if extra_args:
            s += " " + " ".join(f"{k}={v}" for k, v in extra_args.items())

        return s


class StructuredLogger(Logger):
    """Logger implementation with structured JSON logging and file output.

    Example:
        logger = StructuredLogger(name="cicd-backup", level=logging.DEBUG)
        logger.info("Backup created", service="nexus", size_bytes=1024)
    """

    def __init__(
        self,
        name: str = "cicd-backup",
        level: int = logging.INFO,
        log_file: Optional[str] = None,
        json_format: bool = False,
        stream: Optional[TextIO] = None,
    ):
        """Initialize the structured logger.

        Args:
            name: Logger name
            level: Logging level (TRACE, logging.DEBUG, logging.INFO, etc.)
            log_file: Optional file path for log output
            json_format: If True, output logs as JSON; otherwise use text format
            stream: Console stream (default: stdout)
        """
        self._name = name
        self._session_id = str(uuid.uuid4())[:8]
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)

        # Clear existing handlers to avoid duplication if re-initialized
        if self._logger.hasHandlers():
            self._logger.handlers.clear()

        self._logger.propagate = False

        if json_format:
            formatter: logging.Formatter = JsonFormatter()
        else:
            formatter = TextFormatter(
                "%(asctime)s [%(levelname)s] [%(name)s] [session:%(session_id)s] %(message)s"
            )

        console_handler = logging.StreamHandler(stream or sys.stdout)
        console_handler.setFormatter(formatter)
        self._logger.addHandler(console_handler)

        if log_file:
            try:
                file_handler = logging.FileHandler(log_file)
                file_handler.setFormatter(formatter)
                self._logger.addHandler(file_handler)
            except OSError as e:
                # Fallback to console if file cannot be opened
                print(f"Failed to setup log file {log_file}: {e}", file=sys.stderr)

    @property
    def level(self) -> int:
        return self._logger.level

    def get_session_id(self) -> str:
        """Get the current session ID."""
        return self._session_id

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        """Internal logging method with extra kwargs handling."""
        extra = {"session_id": self._session_id}

        for k, v in kwargs.items():
            if k not in _RESERVED_KEYS:
                extra[k] = v
            else:
                # Prefix reserved keys to preserve them but avoid collision
                extra[f"_{k}"] = v

        self._logger.log(level, message, extra=extra)

    def trace(self, message: str, **kwargs: Any) -> None:
        """Log a trace message."""
        self._log(TRACE, message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug message."""
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log an info message."""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning message."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error message."""
        self._log(logging.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        """Log a critical message."""
        self._log(logging.CRITICAL, message, **kwargs)
