"""
Centralized logging configuration with structured JSON output.

Provides:
- JSON structured logging for log files and log shippers
- Human-readable console logging for interactive runs
- Automatic context injection (timestamp, module, level)

Usage:
    from linear_digest.core.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Fetched issues", extra={"extra_fields": {"issue_count": 250}})
"""

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any


class JSONFormatter(logging.Formatter):
    """
    Format log records as JSON for structured logging.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string"""
        log_data = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Added by log_with_context()
        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        return json.dumps(log_data, default=str)


class ContextFormatter(logging.Formatter):
    """
    Human-readable formatter for console output.

    Includes color coding for log levels (when supported).
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with color coding"""
        if not sys.stdout.isatty():
            return super().format(record)

        original = record.levelname
        color = self.COLORS.get(original, "")
        record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    json_output: bool = False,
) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        json_output: If True, use JSON formatter on the console too

    Example:
        # Interactive run
        setup_logging(level="DEBUG")

        # Scheduled run (JSON to file)
        setup_logging(level="INFO", log_file=Path(".tmp/logs/digest.log"), json_output=True)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    if json_output:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(
            ContextFormatter(
                fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)

        # Always use JSON for file output
        file_handler.setFormatter(JSONFormatter())

        root_logger.addHandler(file_handler)

    logging.getLogger("urllib3").setLevel(logging.WARNING)  # Reduce noise from requests
    logging.getLogger("requests").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for the specified module.

    Args:
        name: Module name (use __name__ in calling module)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: str, message: str, **context: Any) -> None:
    """
    Log message with additional context fields.

    Args:
        logger: Logger instance
        level: Log level (debug, info, warning, error, critical)
        message: Log message
        **context: Additional context fields (key-value pairs)

    Example:
        log_with_context(logger, "info", "Digest computed", open_count=42, overdue_count=3)
    """
    log_func = getattr(logger, level.lower())
    log_func(message, extra={"extra_fields": context})
