"""
Runtime support imported by generated modules.
"""

from entitygen.runtime.base import EntityBase
from entitygen.runtime.constraints import (
    ConstraintMarker,
    ConstraintViolation,
    NotBlank,
    NotEmpty,
    NotNull,
    constraint_markers,
    validate_constraints,
)
from entitygen.runtime.metamodel import SingularAttribute
from entitygen.runtime.observable import ObservableData, Observer, observable
from entitygen.runtime.query import LockMode, apply_lock_mode

__all__ = [
    "EntityBase",
    # Constraints
    "ConstraintMarker",
    "ConstraintViolation",
    "NotNull",
    "NotBlank",
    "NotEmpty",
    "constraint_markers",
    "validate_constraints",
    # Data holders
    "ObservableData",
    "Observer",
    "observable",
    # Metamodel and queries
    "SingularAttribute",
    "LockMode",
    "apply_lock_mode",
]
