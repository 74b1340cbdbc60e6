"""
Backup Tool Logger Module

Provides a logging interface for the backup pipeline with session tracking,
structured output, and optional JSON formatting.

Usage:
    from cicd_backup.logger import get_logger, create_logger

    logger = get_logger("cicd-backup")
    logger.info("Backup started")

    logger = create_logger(name="cicd-backup", level="trace", json_format=True)

Level names follow the vocabulary operators already use in LOG_LEVEL:
    all < trace < debug < info < warn < error < fatal < mark < off

Environment Variables:
    {PREFIX}_LOG_FILE: Optional file path for log output
    {PREFIX}_LOG_JSON: Set to "true" for JSON output format

    Where {PREFIX} is derived from the logger name (e.g., CICD_BACKUP for "cicd-backup")
"""

import logging
import os
from typing import Optional, Union

from .interface import Logger
from .structured_logger import TRACE, JsonFormatter, StructuredLogger, TextFormatter

LEVELS = {
    "all": 1,
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
    "mark": logging.CRITICAL + 5,
    "off": logging.CRITICAL + 10,
}


def parse_level(level: Union[str, int]) -> int:
    """Translate a level name (case-insensitive) or number to a logging level.

    Raises:
        ValueError: If the name is not a known level
    """
    if isinstance(level, int):
        return level
    try:
        return LEVELS[level.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown log level '{level}'. Expected one of: {', '.join(LEVELS)}"
        ) from None


def _get_env_prefix(name: str) -> str:
    """Convert logger name to environment variable prefix.

    Examples:
        "cicd-backup" -> "CICD_BACKUP"
    """
    return name.upper().replace("-", "_")


def create_logger(
    name: str = "cicd-backup",
    level: Union[str, int, None] = None,
    log_file: Optional[str] = None,
    json_format: Optional[bool] = None,
) -> Logger:
    """Create a new logger instance with the specified configuration.

    If log_file or json_format are not provided, they are read from
    {PREFIX}_LOG_FILE and {PREFIX}_LOG_JSON where PREFIX is derived from the name.

    Args:
        name: Logger name
        level: Level name ("trace", "warn", ...) or logging constant; default info
        log_file: Optional file path for log output
        json_format: If True, output logs as JSON

    Returns:
        A configured Logger instance
    """
    env_prefix = _get_env_prefix(name)

    resolved_level = parse_level(level) if level is not None else logging.INFO

    if log_file is None:
        log_file = os.environ.get(f"{env_prefix}_LOG_FILE")

    if json_format is None:
        json_format = os.environ.get(f"{env_prefix}_LOG_JSON", "false").lower() == "true"

    return StructuredLogger(
        name=name,
        level=resolved_level,
        log_file=log_file,
        json_format=json_format,
    )


def get_logger(name: str = "cicd-backup") -> Logger:
    """Get a logger at the default level, configured from environment variables."""
    return create_logger(name=name)


__all__ = [
    # Interface
    "Logger",
    # Implementations
    "StructuredLogger",
    # Formatters (for custom use)
    "JsonFormatter",
    "TextFormatter",
    # Levels
    "TRACE",
    "LEVELS",
    "parse_level",
    # Factory functions
    "create_logger",
    "get_logger",
]
