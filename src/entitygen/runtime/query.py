"""
Query helpers used by generated extension modules.
"""

from enum import Enum
from typing import TypeVar

from sqlalchemy import Select

S = TypeVar("S", bound=Select)


class LockMode(str, Enum):
    """Row lock requested for a listing query."""

    NONE = "none"
    PESSIMISTIC_READ = "pessimistic_read"
    PESSIMISTIC_WRITE = "pessimistic_write"


def apply_lock_mode(statement: S, lock_mode: LockMode) -> S:
    """
    Apply a lock mode to a select statement.

    Dialects without row locks (e.g. SQLite) render the statement unchanged.
    """
    match lock_mode:
        case LockMode.NONE:
            return statement
        case LockMode.PESSIMISTIC_READ:
            return statement.with_for_update(read=True)
        case LockMode.PESSIMISTIC_WRITE:
            return statement.with_for_update()
        case _:
            raise ValueError(f"Unknown lock mode: {lock_mode!r}")
