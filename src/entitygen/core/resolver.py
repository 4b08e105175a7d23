"""
Relationship resolution.

Resolution is repeated at every place a relationship attribute is processed.
It is a pure lookup against the immutable entity set, so repeated calls
always agree and always fail the same way.
"""

from dataclasses import dataclass

from entitygen.core.errors import (
    InternalGenerationError,
    MissingColumnTypeError,
    MissingIdentifierError,
    UnknownEntityError,
)
from entitygen.core.model import Attribute, Entity, EntitySet
from entitygen.core.types import ColumnType, IdInteger, IdLong, IdUuid, IdType, ManyToOne


@dataclass(frozen=True)
class ResolvedTarget:
    """Target entity of a relationship and the identifier it is joined on."""

    entity: Entity
    identifier: Attribute

    @property
    def identifier_type(self) -> IdType:
        column_type = self.identifier.column_type
        if not isinstance(column_type, IdType):
            raise InternalGenerationError(
                f"Identifier '{self.identifier.name}' of entity '{self.entity.name}' "
                "is not an identifier variant"
            )
        return column_type


def require_column_type(entity: Entity, attribute: Attribute) -> ColumnType:
    """
    Read the column type of an attribute.

    Raises:
        MissingColumnTypeError: If the attribute has no column type
    """
    column_type = attribute.column_type
    if column_type is None:
        raise MissingColumnTypeError(attribute.name, entity.name)
    return column_type


def resolve_target(entities: EntitySet, entity: Entity, attribute: Attribute) -> ResolvedTarget:
    """
    Resolve the target entity and identifier of a relationship attribute.

    Args:
        entities: All entities of the run
        entity: Entity owning the attribute
        attribute: Relationship attribute

    Returns:
        The target entity and its first identifier attribute

    Raises:
        MissingColumnTypeError: If the attribute has no column type
        UnknownEntityError: If the target is not part of the entity set
        MissingIdentifierError: If the target has no identifier attribute
        InternalGenerationError: If the attribute is not a relationship
    """
    column_type = require_column_type(entity, attribute)
    if not isinstance(column_type, ManyToOne):
        raise InternalGenerationError(
            f"Attribute '{attribute.name}' in entity '{entity.name}' is not a relationship"
        )

    target = entities.get_entity(column_type.target)
    if target is None:
        raise UnknownEntityError(
            attribute.name,
            entity.name,
            column_type.target,
            known_entities=entities.list_entities(),
        )

    for candidate in target.attributes:
        if isinstance(candidate.column_type, IdType):
            return ResolvedTarget(entity=target, identifier=candidate)

    raise MissingIdentifierError(attribute.name, entity.name, target.name)


def identifier_python_type(target: ResolvedTarget) -> str:
    """Python annotation of a resolved identifier."""
    match target.identifier_type:
        case IdInteger() | IdLong():
            return "int"
        case IdUuid():
            return "UUID"
        case _:
            raise InternalGenerationError(
                f"Unexpected identifier type on entity '{target.entity.name}'"
            )
