"""
Fluent builder for entity declarations.

Scoping rules are enforced while the declarations are being built:

- entity scopes cannot nest;
- an attribute is declared only on an open entity, and attribute scopes
  cannot nest;
- once a scope is closed (its ``with`` block exited, a sibling declared, or
  the set built), its builder rejects further use.

Example:
    builder = EntitySetBuilder()
    with builder.entity("user", package_name="com.example.hr") as user:
        user.attribute("id", IdLong(auto_generated=True))
        with user.attribute("name", BasicString(length=50)) as name:
            name.not_null()
    entities = builder.build()
"""

from types import TracebackType

from entitygen.core.errors import BuilderScopeError, DuplicateNameError
from entitygen.core.model import Attribute, Entity, EntitySet
from entitygen.core.types import ColumnType, Constraint


class _Scope:
    """Open/closed state shared by all builders."""

    def __init__(self, description: str) -> None:
        self._description = description
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    def _ensure_open(self, action: str) -> None:
        if self._closed:
            raise BuilderScopeError(f"Cannot {action}: {self._description} is already closed")


class AttributeBuilder(_Scope):
    """Builder for one attribute; adds constraints."""

    def __init__(self, entity: "EntityBuilder", name: str, **columns: object) -> None:
        super().__init__(f"attribute '{name}' of entity '{entity.name}'")
        self._entity = entity
        self.name = name
        self._columns = columns
        self._constraints: list[Constraint] = []

    def constraint(self, constraint: Constraint) -> "AttributeBuilder":
        """Attach a validation marker."""
        self._ensure_open(f"add constraint {constraint.value}")
        self._constraints.append(constraint)
        return self

    def not_null(self) -> "AttributeBuilder":
        return self.constraint(Constraint.NOT_NULL)

    def not_blank(self) -> "AttributeBuilder":
        return self.constraint(Constraint.NOT_BLANK)

    def not_empty(self) -> "AttributeBuilder":
        return self.constraint(Constraint.NOT_EMPTY)

    def __enter__(self) -> "AttributeBuilder":
        self._ensure_open("enter scope")
        self._entity._active_attribute = self
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._entity._active_attribute = None
        self.close()

    def build(self) -> Attribute:
        return Attribute(name=self.name, constraints=tuple(self._constraints), **self._columns)


class EntityBuilder(_Scope):
    """Builder for one entity; declares attributes in order."""

    def __init__(
        self,
        parent: "EntitySetBuilder",
        name: str,
        *,
        package_name: str = "",
        entity_name: str | None = None,
        table_name: str | None = None,
        table_schema: str | None = None,
    ) -> None:
        super().__init__(f"entity '{name}'")
        self._parent = parent
        self.name = name
        self.package_name = package_name
        self.entity_name = entity_name
        self.table_name = table_name
        self.table_schema = table_schema
        self._attributes: list[AttributeBuilder] = []
        self._active_attribute: AttributeBuilder | None = None

    def attribute(
        self,
        name: str,
        column_type: ColumnType | None = None,
        *,
        column_name: str | None = None,
        column_unique: bool | None = None,
        column_nullable: bool | None = None,
        column_insertable: bool | None = None,
        column_updatable: bool | None = None,
        constraints: list[Constraint] | tuple[Constraint, ...] = (),
    ) -> AttributeBuilder:
        """
        Declare an attribute.

        Returns an AttributeBuilder which can be used as a context manager to
        attach constraints.
        """
        self._ensure_open(f"declare attribute '{name}'")
        if self._active_attribute is not None:
            raise BuilderScopeError(
                f"Cannot declare attribute '{name}' inside the scope of "
                f"attribute '{self._active_attribute.name}' of entity '{self.name}'"
            )
        if any(existing.name == name for existing in self._attributes):
            raise DuplicateNameError("attribute", name, scope=self.name)

        # A sibling declaration closes the previous attribute
        if self._attributes:
            self._attributes[-1].close()

        builder = AttributeBuilder(
            self,
            name,
            column_type=column_type,
            column_name=column_name,
            column_unique=column_unique,
            column_nullable=column_nullable,
            column_insertable=column_insertable,
            column_updatable=column_updatable,
        )
        for constraint in constraints:
            builder.constraint(constraint)
        self._attributes.append(builder)
        return builder

    def close(self) -> None:
        for attribute in self._attributes:
            attribute.close()
        super().close()

    def __enter__(self) -> "EntityBuilder":
        self._ensure_open("enter scope")
        self._parent._active_entity = self
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._parent._active_entity = None
        self.close()

    def build(self) -> Entity:
        return Entity(
            name=self.name,
            package_name=self.package_name,
            entity_name=self.entity_name,
            table_name=self.table_name,
            table_schema=self.table_schema,
            attributes=tuple(attribute.build() for attribute in self._attributes),
        )


class EntitySetBuilder(_Scope):
    """Root builder producing an immutable EntitySet."""

    def __init__(self) -> None:
        super().__init__("entity set")
        self._entities: list[EntityBuilder] = []
        self._active_entity: EntityBuilder | None = None

    def entity(
        self,
        name: str,
        package_name: str = "",
        *,
        entity_name: str | None = None,
        table_name: str | None = None,
        table_schema: str | None = None,
    ) -> EntityBuilder:
        """Declare an entity."""
        self._ensure_open(f"declare entity '{name}'")
        if self._active_entity is not None:
            raise BuilderScopeError(
                f"Cannot declare entity '{name}' inside the scope of entity "
                f"'{self._active_entity.name}'"
            )
        if any(existing.name == name for existing in self._entities):
            raise DuplicateNameError("entity", name)

        if self._entities:
            self._entities[-1].close()

        builder = EntityBuilder(
            self,
            name,
            package_name=package_name,
            entity_name=entity_name,
            table_name=table_name,
            table_schema=table_schema,
        )
        self._entities.append(builder)
        return builder

    def build(self) -> EntitySet:
        """Close every scope and build the entity set."""
        if self._active_entity is not None:
            raise BuilderScopeError(
                f"Cannot build while the scope of entity '{self._active_entity.name}' is open"
            )
        for entity in self._entities:
            entity.close()
        self.close()
        return EntitySet(entities=tuple(entity.build() for entity in self._entities))
