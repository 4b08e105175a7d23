"""
Entity model for entitygen.

The model is built once per generation run by a front-end (the declaration
builder or a JSON declaration) and is immutable for the duration of the run.
Generators only read it.
"""

from pydantic import BaseModel, Field, model_validator

from entitygen.core.errors import DuplicateNameError
from entitygen.core.types import (
    ColumnType,
    Constraint,
    IdType,
    ManyToOne,
    VersionType,
)


class Attribute(BaseModel):
    """
    A named field of an entity.

    ``column_type`` is optional at construction time; its absence is a
    configuration defect reported when a generator first reads it. The
    column flags are tri-state: ``None`` means the generated code leaves the
    runtime default in place.
    """

    name: str = Field(..., min_length=1)
    column_type: ColumnType | None = None
    column_name: str | None = None
    column_unique: bool | None = None
    column_nullable: bool | None = None
    column_insertable: bool | None = None
    column_updatable: bool | None = None
    constraints: tuple[Constraint, ...] = ()

    model_config = {"frozen": True}

    @property
    def is_identifier(self) -> bool:
        """Whether the attribute is declared with an identifier type."""
        return isinstance(self.column_type, IdType)

    @property
    def is_version(self) -> bool:
        return isinstance(self.column_type, VersionType)

    @property
    def is_relationship(self) -> bool:
        return isinstance(self.column_type, ManyToOne)


class Entity(BaseModel):
    """A generatable data type analogous to a persistable record."""

    name: str = Field(..., min_length=1)
    package_name: str = ""
    entity_name: str | None = None
    table_schema: str | None = None
    table_name: str | None = None
    attributes: tuple[Attribute, ...] = ()

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_unique_attributes(self) -> "Entity":
        seen: set[str] = set()
        for attribute in self.attributes:
            if attribute.name in seen:
                raise DuplicateNameError("attribute", attribute.name, scope=self.name)
            seen.add(attribute.name)
        return self

    def get_attribute(self, name: str) -> Attribute | None:
        """Get an attribute by name."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None

    def list_attributes(self) -> list[str]:
        """List attribute names in declared order."""
        return [attribute.name for attribute in self.attributes]


class EntitySet(BaseModel):
    """All entities of one generation run, in declared order."""

    entities: tuple[Entity, ...] = ()

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_unique_entities(self) -> "EntitySet":
        seen: set[str] = set()
        for entity in self.entities:
            if entity.name in seen:
                raise DuplicateNameError("entity", entity.name)
            seen.add(entity.name)
        return self

    def get_entity(self, name: str) -> Entity | None:
        """Get an entity by exact (case-sensitive) name."""
        for entity in self.entities:
            if entity.name == name:
                return entity
        return None

    def list_entities(self) -> list[str]:
        """List entity names in declared order."""
        return [entity.name for entity in self.entities]

    def __len__(self) -> int:
        return len(self.entities)
