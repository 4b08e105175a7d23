"""
Structured logging for generation runs.

JSON and text formatters, plus context injection of the run, entity and
artifact being generated.
"""

from entitygen.logging.config import (
    EntitygenLogger,
    LogFormat,
    LogLevel,
    configure_logging,
    get_logger,
)
from entitygen.logging.context import (
    ContextFilter,
    LogContext,
    clear_log_context,
    get_log_context,
    set_log_context,
    with_log_context,
)
from entitygen.logging.formatters import JSONFormatter, TextFormatter

__all__ = [
    # Configuration
    "configure_logging",
    "get_logger",
    "EntitygenLogger",
    "LogLevel",
    "LogFormat",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    # Context
    "ContextFilter",
    "LogContext",
    "get_log_context",
    "set_log_context",
    "clear_log_context",
    "with_log_context",
]
