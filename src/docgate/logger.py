"""Logging configuration for docgate.

Loggers can emit either human-readable lines or newline-delimited JSON.

Environment Variables:
    DOCGATE_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                       Default: INFO
    DOCGATE_LOG_FORMAT: Output format ("standard" or "json").
                        Default: standard
"""

import json
import logging
import os
import sys
from typing import Any

LOG_FORMAT_STANDARD = "%(asctime)s.%(msecs)03d - %(levelname)s - %(message)s"

LOG_FORMAT_DEBUG = (
    "%(asctime)s.%(msecs)03d - %(levelname)s - "
    "%(threadName)s - %(name)s:%(funcName)s - %(message)s"
)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "docgate"


def _resolve_log_level(level: int | str | None) -> int:
    if level is None:
        level = os.getenv("DOCGATE_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def _build_formatter(format_type: str, level: int) -> logging.Formatter:
    if format_type == "json":
        return JSONFormatter(datefmt=DATE_FORMAT)
    # DEBUG lines carry the thread name, useful when several callers wait
    if level == logging.DEBUG:
        return logging.Formatter(LOG_FORMAT_DEBUG, datefmt=DATE_FORMAT)
    return logging.Formatter(LOG_FORMAT_STANDARD, datefmt=DATE_FORMAT)


class JSONFormatter(logging.Formatter):
    """Format logs as newline-delimited JSON.

    Output structure includes timestamp, level, message, logger name,
    thread name, function, line number, and optional exception trace.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Convert log record to single-line JSON string."""
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "thread": record.threadName,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def configure_logger(
    name: str,
    level: int | str | None = None,
    format_type: str | None = None,
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """Configure a logger with docgate formatting.

    Args:
        name: Typically __name__ of the calling module.
        level: Override default level from environment.
        format_type: Either "standard" or "json".
        handler: Custom handler; defaults to StreamHandler on stderr.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    # Already configured
    if logger.handlers:
        return logger

    resolved = _resolve_log_level(level)
    logger.setLevel(resolved)

    if format_type is None:
        format_type = os.getenv("DOCGATE_LOG_FORMAT", "standard").lower()

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    handler.setLevel(resolved)
    handler.setFormatter(_build_formatter(format_type, resolved))
    logger.addHandler(handler)

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger using default environment settings."""
    return configure_logger(name)


def set_log_level(level: int | str) -> None:
    """Update the level of every configured docgate logger.

    Args:
        level: New log level as int constant or string name.
    """
    resolved = _resolve_log_level(level)
    format_type = os.getenv("DOCGATE_LOG_FORMAT", "standard").lower()

    manager = logging.Logger.manager
    names = [ROOT_LOGGER_NAME] + [
        n for n in manager.loggerDict if n.startswith(ROOT_LOGGER_NAME + ".")
    ]
    for name in names:
        logger = logging.getLogger(name)
        if not logger.handlers:
            continue
        logger.setLevel(resolved)
        for handler in logger.handlers:
            handler.setLevel(resolved)
            handler.setFormatter(_build_formatter(format_type, resolved))


def mask_sensitive(value: str, prefix_len: int = 4, suffix_len: int = 4) -> str:
    """Mask sensitive data for safe logging of credentials.

    Args:
        value: Sensitive string to mask.
        prefix_len: Characters preserved at start.
        suffix_len: Characters preserved at end.

    Returns:
        Masked string with middle replaced by asterisks.
    """
    if len(value) <= prefix_len + suffix_len:
        return "***"
    return f"{value[:prefix_len]}***{value[-suffix_len:]}"
