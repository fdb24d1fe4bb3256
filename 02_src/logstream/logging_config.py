"""Structured logging configuration for logstream.

Process diagnostics are emitted as one JSON object per line, the same shape
the service itself ingests, so its own output can be fed back into it.
"""

import json
import logging
import logging.config
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH

# Maps stdlib level names onto the four levels a LogEntry accepts.
_LEVEL_NAMES = {
    "CRITICAL": "error",
    "ERROR": "error",
    "WARNING": "warn",
    "INFO": "info",
    "DEBUG": "debug",
}


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": _LEVEL_NAMES.get(record.levelname, "info"),
            "message": record.getMessage(),
            "resourceId": record.name,
            "metadata": {
                "module": record.module,
                "function": record.funcName,
                "line": record.lineno,
            },
        }

        if record.exc_info:
            log_data["metadata"]["exception"] = self.formatException(record.exc_info)

        # extra={"context": {...}} on the logging call
        if hasattr(record, "context"):
            log_data["metadata"]["context"] = record.context

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str | None = None, log_file: str | None = None) -> None:
    """
    Setup structured logging for the application.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                   Defaults to LOG_LEVEL env var or INFO.
        log_file: Path to log file. Defaults to 04_logs/app.log.
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")

    if log_file is None:
        log_file = str(DEFAULT_LOG_PATH)

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": "logstream.logging_config.JSONFormatter",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                },
                "file": {
                    "class": "logging.handlers.RotatingFileHandler",
                    "filename": log_file,
                    "maxBytes": 10 * 1024 * 1024,  # 10 MB
                    "backupCount": 5,
                    "formatter": "json",
                    "encoding": "utf-8",
                },
            },
            "root": {
                "level": log_level.upper(),
                "handlers": ["console", "file"],
            },
        }
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module (pass ``__name__``)."""
    return logging.getLogger(name)
