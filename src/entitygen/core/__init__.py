"""
Core entity model, type taxonomy and relationship resolution.
"""

from entitygen.core.builder import AttributeBuilder, EntityBuilder, EntitySetBuilder
from entitygen.core.errors import (
    BuilderScopeError,
    ConfigurationError,
    DuplicateNameError,
    EntitygenError,
    InternalGenerationError,
    MissingColumnTypeError,
    MissingIdentifierError,
    UnknownEntityError,
)
from entitygen.core.model import Attribute, Entity, EntitySet
from entitygen.core.resolver import ResolvedTarget, require_column_type, resolve_target
from entitygen.core.types import (
    BasicBoolean,
    BasicBytes,
    BasicDecimal,
    BasicInteger,
    BasicLocalDateTime,
    BasicLong,
    BasicString,
    BasicUuid,
    BasicZonedDateTime,
    ColumnType,
    Constraint,
    IdInteger,
    IdLong,
    IdUuid,
    ManyToOne,
    VersionInteger,
    VersionLong,
)

__all__ = [
    # Model
    "Attribute",
    "Entity",
    "EntitySet",
    # Builder
    "AttributeBuilder",
    "EntityBuilder",
    "EntitySetBuilder",
    # Types
    "ColumnType",
    "Constraint",
    "IdInteger",
    "IdLong",
    "IdUuid",
    "VersionInteger",
    "VersionLong",
    "BasicInteger",
    "BasicLong",
    "BasicBoolean",
    "BasicString",
    "BasicDecimal",
    "BasicBytes",
    "BasicUuid",
    "BasicLocalDateTime",
    "BasicZonedDateTime",
    "ManyToOne",
    # Resolution
    "ResolvedTarget",
    "require_column_type",
    "resolve_target",
    # Errors
    "EntitygenError",
    "ConfigurationError",
    "MissingColumnTypeError",
    "UnknownEntityError",
    "MissingIdentifierError",
    "DuplicateNameError",
    "BuilderScopeError",
    "InternalGenerationError",
]
