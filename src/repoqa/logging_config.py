"""
Logging configuration for repoqa.

Configured from environment variables:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL
- LOG_FORMAT: simple, detailed, json
"""

import os
import sys
import logging
import json
from datetime import datetime
from typing import Optional, TextIO

VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# Context attributes copied into JSON records when passed via `extra=`
CONTEXT_FIELDS = ("tool", "repo", "backend", "path")


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    One JSON object per line, with any known context fields attached.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def _build_formatter(format_style: str) -> logging.Formatter:
    if format_style == "json":
        return JSONFormatter()
    if format_style == "detailed":
        return logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
    return logging.Formatter(fmt="%(levelname)s - %(name)s - %(message)s")


def configure_logging(
    level: Optional[str] = None,
    format_style: Optional[str] = None,
    stream: Optional[TextIO] = None
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level. Defaults to LOG_LEVEL env var or INFO.
        format_style: simple, detailed or json. Defaults to LOG_FORMAT env var or simple.
        stream: Output stream (default: stdout)
    """
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_format = (format_style or os.getenv("LOG_FORMAT", "simple")).lower()

    if log_level not in VALID_LEVELS:
        sys.stderr.write(f"Warning: Invalid LOG_LEVEL '{log_level}', defaulting to INFO\n")
        log_level = "INFO"

    numeric_level = getattr(logging, log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(_build_formatter(log_format))
    root_logger.addHandler(console_handler)

    root_logger.info(f"Logging configured: level={log_level}, format={log_format}")

    # GitPython logs every git invocation at DEBUG
    logging.getLogger("git").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
