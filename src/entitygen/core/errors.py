"""
Error taxonomy for entitygen.

All entitygen errors inherit from EntitygenError and include:
- A unique error code for programmatic handling
- A human-readable message naming the offending entity/attribute
- Optional hints describing how to fix the declaration

Configuration defects (ConfigurationError and subclasses) are fatal and abort
the generation run. InternalGenerationError marks a logic fault inside the
generator itself and is not a ConfigurationError.
"""

from typing import Any


class EntitygenError(Exception):
    """
    Base class for all entitygen errors.

    Attributes:
        code: Unique error code for programmatic handling
        message: Human-readable error message
        hints: Suggestions for how to fix the error
        details: Additional error context
    """

    code: str = "ENTITYGEN_ERROR"

    def __init__(
        self,
        message: str,
        *,
        hints: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.hints = hints or []
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "hints": self.hints,
            "details": self.details,
        }


class ConfigurationError(EntitygenError):
    """The entity declarations are defective; generation cannot proceed."""

    code = "CONFIGURATION_ERROR"


class MissingColumnTypeError(ConfigurationError):
    """An attribute was read without a declared column type."""

    code = "MISSING_COLUMN_TYPE"

    def __init__(self, attribute: str, entity: str, **kwargs: Any) -> None:
        super().__init__(
            f"'columnType' of attribute '{attribute}' in entity '{entity}' is not declared",
            hints=[f"Declare a column type for '{entity}.{attribute}'"],
            details={"attribute": attribute, "entity": entity},
            **kwargs,
        )


class UnknownEntityError(ConfigurationError):
    """A relationship refers to an entity that is not part of the run."""

    code = "UNKNOWN_ENTITY"

    def __init__(
        self,
        attribute: str,
        entity: str,
        target: str,
        known_entities: list[str] | None = None,
        **kwargs: Any,
    ) -> None:
        hints = []
        if known_entities:
            hints.append(f"Known entities: {', '.join(known_entities)}")
        super().__init__(
            f"'target' of attribute '{attribute}' in entity '{entity}' is a unknown entity ('{target}')",
            hints=hints,
            details={
                "attribute": attribute,
                "entity": entity,
                "target": target,
                "known_entities": known_entities,
            },
            **kwargs,
        )


class MissingIdentifierError(ConfigurationError):
    """A relationship target declares no identifier attribute."""

    code = "MISSING_IDENTIFIER"

    def __init__(self, attribute: str, entity: str, target: str, **kwargs: Any) -> None:
        super().__init__(
            f"'target' of attribute '{attribute}' in entity '{entity}' does not declare an identifier",
            hints=[f"Add an identifier attribute to entity '{target}'"],
            details={"attribute": attribute, "entity": entity, "target": target},
            **kwargs,
        )


class DuplicateNameError(ConfigurationError):
    """A name is declared twice, or two generated classes would share a name."""

    code = "DUPLICATE_NAME"

    def __init__(self, kind: str, name: str, scope: str | None = None, **kwargs: Any) -> None:
        where = f" in entity '{scope}'" if scope else ""
        super().__init__(
            f"Duplicate {kind} name '{name}'{where}",
            details={"kind": kind, "name": name, "scope": scope},
            **kwargs,
        )


class BuilderScopeError(EntitygenError):
    """A declaration builder was used outside of its scope."""

    code = "BUILDER_SCOPE"


class InternalGenerationError(EntitygenError):
    """
    A branch that should be unreachable was taken.

    This indicates a fault in the generator rather than in the declarations,
    e.g. a resolved identifier whose type is not an identifier variant.
    """

    code = "INTERNAL_GENERATION_ERROR"
