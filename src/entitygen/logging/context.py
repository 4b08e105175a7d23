"""
Logging context management for entitygen.

Provides context injection for structured logging, so that the run, entity
and artifact being generated are automatically included in log messages.
"""

from __future__ import annotations

import contextvars
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

# Context variable for storing log context
_log_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "entitygen_log_context",
    default=None,
)


@dataclass
class LogContext:
    """
    Structured logging context.

    Contains fields that should be included in all log messages within
    a specific scope (e.g., a generation run or one entity).
    """

    run_id: str | None = None
    entity: str | None = None
    artifact: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary of non-None values."""
        result = {}
        if self.run_id is not None:
            result["run_id"] = self.run_id
        if self.entity is not None:
            result["entity"] = self.entity
        if self.artifact is not None:
            result["artifact"] = self.artifact
        result.update(self.extra)
        return result


def get_log_context() -> dict[str, Any]:
    """Get the current log context."""
    ctx = _log_context.get()
    return ctx.copy() if ctx else {}


def set_log_context(context: LogContext | dict[str, Any]) -> None:
    """
    Set the current log context.

    Args:
        context: LogContext or dict of context fields
    """
    if isinstance(context, LogContext):
        _log_context.set(context.to_dict())
    else:
        _log_context.set(context)


def clear_log_context() -> None:
    """Clear the current log context."""
    _log_context.set(None)


@contextmanager
def with_log_context(
    context: LogContext | dict[str, Any] | None = None,
    **kwargs: Any,
) -> Iterator[None]:
    """
    Context manager for setting log context within a scope.

    Fields are merged into the enclosing context, so nested scopes add to it.

    Example:
        with with_log_context(run_id="abc"):
            with with_log_context(entity="user"):
                logger.info("Rendering")  # Includes run_id and entity

    Args:
        context: Optional LogContext or dict of context fields
        **kwargs: Additional context fields
    """
    previous = _log_context.get()

    new_context = previous.copy() if previous else {}
    if context is not None:
        new_context.update(context.to_dict() if isinstance(context, LogContext) else context)
    new_context.update(kwargs)
    _log_context.set(new_context)

    try:
        yield
    finally:
        _log_context.set(previous)


class ContextFilter(logging.Filter):
    """
    Logging filter that injects context fields into log records.

    Add this filter to handlers or loggers to automatically include
    context fields in all log messages.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context fields to the log record."""
        context = get_log_context()
        for key, value in context.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
