"""
Log formatters for entitygen.

JSON output for build pipelines that collect logs, text output for
interactive use.
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any

# Context fields promoted to top-level keys
CONTEXT_FIELDS = ("run_id", "entity", "artifact")


class JSONFormatter(logging.Formatter):
    """
    JSON-structured log formatter.

    Outputs logs as single-line JSON objects with:
    - timestamp: ISO 8601 UTC timestamp
    - level, logger, message
    - run_id, entity, artifact (if available in record)
    - duration_ms (if available in record)
    - exception (if present)
    - extra: any additional fields
    """

    STANDARD_FIELDS = {
        "timestamp",
        "level",
        "logger",
        "message",
        "duration_ms",
        "exception",
        *CONTEXT_FIELDS,
    }

    # LogRecord attributes that never go into extra
    EXCLUDE_FIELDS = {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "message",
        "taskName",
    }

    def __init__(self, include_extra: bool = True) -> None:
        """
        Initialize the JSON formatter.

        Args:
            include_extra: Whether to include extra fields from the log record
        """
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_dict: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_dict[field] = value

        duration = getattr(record, "duration_ms", None)
        if duration is not None:
            log_dict["duration_ms"] = duration

        if record.exc_info:
            log_dict["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        if self.include_extra:
            extra = {}
            for key, value in record.__dict__.items():
                if (
                    key not in self.EXCLUDE_FIELDS
                    and key not in self.STANDARD_FIELDS
                    and not key.startswith("_")
                ):
                    try:
                        json.dumps(value)
                        extra[key] = value
                    except (TypeError, ValueError):
                        extra[key] = str(value)
            if extra:
                log_dict["extra"] = extra

        return json.dumps(log_dict, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """
    Human-readable text formatter.

    Example line:
        2024-01-01 12:00:00 INFO     entitygen.codegen [entity=user]: Wrote artifact (0.4ms)
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as readable text."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        level = record.levelname
        if self.use_colors and level in self.COLORS:
            level = f"{self.COLORS[level]}{level:8}{self.RESET}"
        else:
            level = f"{level:8}"

        message = record.getMessage()

        context_parts = []
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                context_parts.append(f"{field}={value}")
        context = f" [{', '.join(context_parts)}]" if context_parts else ""

        duration = getattr(record, "duration_ms", None)
        duration_str = f" ({duration:.1f}ms)" if duration is not None else ""

        log_line = f"{timestamp} {level} {record.name}{context}: {message}{duration_str}"

        if record.exc_info:
            log_line += "\n" + self.formatException(record.exc_info)

        return log_line
