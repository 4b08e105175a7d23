"""
Constraint markers carried by generated contract annotations.

Generated contracts declare constrained attributes as
``Annotated[str | None, NotNull(), NotBlank()]``. The markers are plain
metadata; ``validate_constraints`` reads them back from an instance's class
hierarchy and checks the current attribute values.
"""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Sized
from dataclasses import dataclass
from typing import Annotated, Any, get_args, get_origin

_SKIPPED_MODULES = {"builtins", "typing", "typing_extensions"}


@dataclass(frozen=True)
class ConstraintMarker(ABC):
    """Base class of all constraint markers."""

    @abstractmethod
    def check(self, value: Any) -> bool:
        """Whether the value satisfies the constraint."""
        ...

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class NotNull(ConstraintMarker):
    """The value must not be None."""

    def check(self, value: Any) -> bool:
        return value is not None


@dataclass(frozen=True)
class NotBlank(ConstraintMarker):
    """The value must be a string with at least one non-whitespace character."""

    def check(self, value: Any) -> bool:
        return isinstance(value, str) and bool(value.strip())


@dataclass(frozen=True)
class NotEmpty(ConstraintMarker):
    """The value must not be None and must have a non-zero length."""

    def check(self, value: Any) -> bool:
        return isinstance(value, Sized) and len(value) > 0


@dataclass(frozen=True)
class ConstraintViolation:
    """A failed constraint check."""

    attribute: str
    constraint: str
    value: Any

    @property
    def message(self) -> str:
        return f"'{self.attribute}' violates {self.constraint} (value: {self.value!r})"


def constraint_markers(cls: type) -> dict[str, list[ConstraintMarker]]:
    """
    Collect the constraint markers declared for each attribute of a class.

    Every class of the MRO is inspected, so markers declared on a contract
    are found from the data holder implementing it.
    """
    markers: dict[str, list[ConstraintMarker]] = {}
    for klass in reversed(cls.__mro__):
        if klass.__module__ in _SKIPPED_MODULES:
            continue
        annotations = inspect.get_annotations(klass, eval_str=True)
        for attribute, annotation in annotations.items():
            if get_origin(annotation) is not Annotated:
                continue
            for metadata in get_args(annotation)[1:]:
                if isinstance(metadata, ConstraintMarker):
                    found = markers.setdefault(attribute, [])
                    if metadata not in found:
                        found.append(metadata)
    return markers


def validate_constraints(instance: object) -> list[ConstraintViolation]:
    """
    Check an instance against the constraint markers of its class.

    Returns:
        Violations in attribute declaration order (empty when valid)
    """
    violations = []
    for attribute, markers in constraint_markers(type(instance)).items():
        value = getattr(instance, attribute, None)
        for marker in markers:
            if not marker.check(value):
                violations.append(ConstraintViolation(attribute, marker.name, value))
    return violations
