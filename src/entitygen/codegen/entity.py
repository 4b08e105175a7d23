"""
Persisted entity generator.

Generates ``<Entity>Entity``, a SQLAlchemy 2.0 declarative class.

Example output:
    class UserEntity(EntityBase):
        __tablename__ = "UserEntity"

        id: Mapped[int | None] = mapped_column(BigInteger, primary_key=True, autoincrement=False)

        name: Mapped[str | None] = mapped_column(String(50), info={"constraints": ["NotNull"]})

        managerId: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("EmployeeEntity.id"))
        manager: Mapped[EmployeeEntity | None] = relationship("EmployeeEntity", foreign_keys=[managerId])


    from app.EmployeeEntity import EmployeeEntity  # noqa: E402
"""

import json
from typing import Any

from entitygen.codegen.generator import CodeGenerator, Imports
from entitygen.core.errors import InternalGenerationError
from entitygen.core.model import Attribute, Entity
from entitygen.core.naming import (
    ENTITY,
    column_name,
    compound_name,
    entity_class_name,
    module_path,
    property_name,
    table_name,
)
from entitygen.core.resolver import require_column_type
from entitygen.core.types import (
    BasicType,
    ColumnTypeBase,
    IdInteger,
    IdLong,
    IdType,
    IdUuid,
    ManyToOne,
    VersionType,
)


def python_literal(value: Any) -> str:
    """Render a str/bool/int/None/list/dict value as Python source."""
    if isinstance(value, dict):
        items = ", ".join(f"{python_literal(k)}: {python_literal(v)}" for k, v in value.items())
        return "{" + items + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(python_literal(v) for v in value) + "]"
    if isinstance(value, str):
        return json.dumps(value)
    return repr(value)


class EntityGenerator(CodeGenerator):
    """Generates the SQLAlchemy mapping of an entity."""

    artifact = ENTITY

    def artifact_name(self, entity: Entity) -> str:
        return entity_class_name(entity)

    def render(self, entity: Entity) -> str:
        imports = Imports()
        imports.add("sqlalchemy.orm", "Mapped", "mapped_column")
        imports.add(self.options.entity_base_module, self.options.entity_base_class)
        self._add_type_imports(imports, entity)
        deferred = Imports()

        class_name = entity_class_name(entity)
        body = [
            f"class {class_name}({self.options.entity_base_class}):",
            f"    __tablename__ = {python_literal(table_name(entity))}",
        ]
        table_args = self._table_args(entity)
        if table_args:
            body.append(f"    __table_args__ = {python_literal(table_args)}")
        body.append("")

        version: str | None = None
        for index, attribute in enumerate(entity.attributes):
            if index:
                body.append("")
            column_type = require_column_type(entity, attribute)
            match column_type:
                case ManyToOne():
                    body.extend(self._relationship_lines(entity, attribute, imports, deferred))
                case IdType():
                    body.append(self._column_line(attribute, column_type, imports))
                case VersionType():
                    body.append(self._column_line(attribute, column_type, imports))
                    if version is None:
                        version = property_name(attribute)
                case BasicType():
                    body.append(self._column_line(attribute, column_type, imports))
                case _:
                    raise InternalGenerationError(
                        f"Unexpected column type of attribute '{attribute.name}' "
                        f"in entity '{entity.name}'"
                    )

        if not entity.attributes:
            body.pop()
        if version is not None:
            body.append("")
            body.append(f'    __mapper_args__ = {{"version_id_col": {version}}}')

        # Imported after the class body so mutually referencing modules can load
        if deferred:
            body.extend(["", ""])
            body.extend(f"{line}  # noqa: E402" for line in deferred.lines())

        return self._module(imports, body, future=True)

    def _table_args(self, entity: Entity) -> dict[str, Any]:
        table_args: dict[str, Any] = {}
        if entity.table_schema:
            table_args["schema"] = entity.table_schema
        if entity.entity_name:
            table_args["info"] = {"entity_name": entity.entity_name}
        return table_args

    def _column_info(self, attribute: Attribute) -> dict[str, Any]:
        info: dict[str, Any] = {}
        if attribute.column_insertable is not None:
            info["insertable"] = attribute.column_insertable
        if attribute.column_updatable is not None:
            info["updatable"] = attribute.column_updatable
        if attribute.constraints:
            info["constraints"] = [constraint.value for constraint in attribute.constraints]
        return info

    def _column_options(self, attribute: Attribute) -> list[str]:
        """Keyword arguments of ``mapped_column`` common to every attribute."""
        options = []
        if attribute.column_unique is not None:
            options.append(f"unique={attribute.column_unique}")
        if attribute.column_nullable is not None:
            options.append(f"nullable={attribute.column_nullable}")
        info = self._column_info(attribute)
        if info:
            options.append(f"info={python_literal(info)}")
        return options

    def _sql_type(
        self,
        column_type: ColumnTypeBase,
        imports: Imports,
        *,
        foreign_key: bool = False,
    ) -> str:
        if column_type.sql_type_name is None:
            raise InternalGenerationError(
                f"Column type '{type(column_type).__name__}' has no SQL type"
            )
        imports.add("sqlalchemy", column_type.sql_type_name)
        if foreign_key:
            return column_type.sql_type_name
        # SQLite only autoincrements INTEGER primary keys
        if isinstance(column_type, IdLong) and column_type.auto_generated:
            imports.add("sqlalchemy", "Integer")
            return 'BigInteger().with_variant(Integer, "sqlite")'
        return column_type.sql_type() or column_type.sql_type_name

    def _column_line(
        self,
        attribute: Attribute,
        column_type: ColumnTypeBase,
        imports: Imports,
    ) -> str:
        args = []
        if attribute.column_name:
            args.append(python_literal(attribute.column_name))
        args.append(self._sql_type(column_type, imports))

        match column_type:
            case IdInteger() | IdLong():
                args.append("primary_key=True")
                args.append(f"autoincrement={column_type.auto_generated}")
            case IdUuid():
                args.append("primary_key=True")
                if column_type.auto_generated:
                    imports.add("uuid", "uuid4")
                    args.append("default=uuid4")
        args.extend(self._column_options(attribute))

        name = property_name(attribute)
        return (
            f"    {name}: Mapped[{column_type.python_type} | None] = "
            f"mapped_column({', '.join(args)})"
        )

    def _relationship_lines(
        self,
        entity: Entity,
        attribute: Attribute,
        imports: Imports,
        deferred: Imports,
    ) -> list[str]:
        """Join column plus relationship property of an owning relationship."""
        target = self._resolve(entity, attribute)
        identifier_type = target.identifier_type
        target_class = entity_class_name(target.entity)

        reference = f"{table_name(target.entity)}.{column_name(target.identifier)}"
        if target.entity.table_schema:
            reference = f"{target.entity.table_schema}.{reference}"

        imports.add("sqlalchemy", "ForeignKey")
        args = []
        if attribute.column_name:
            args.append(python_literal(attribute.column_name))
        args.append(self._sql_type(identifier_type, imports, foreign_key=True))
        args.append(f"ForeignKey({python_literal(reference)})")
        args.extend(self._column_options(attribute))

        join_name = compound_name(attribute, target.identifier)
        lines = [
            f"    {join_name}: Mapped[{identifier_type.python_type} | None] = "
            f"mapped_column({', '.join(args)})"
        ]

        imports.add("sqlalchemy.orm", "relationship")
        relationship_args = [python_literal(target_class), f"foreign_keys=[{join_name}]"]
        if target.entity.name == entity.name:
            remote = f"{target_class}.{property_name(target.identifier)}"
            relationship_args.append(f"remote_side={python_literal(remote)}")
        else:
            deferred.add(module_path(target.entity, target_class), target_class)

        lines.append(
            f"    {property_name(attribute)}: Mapped[{target_class} | None] = "
            f"relationship({', '.join(relationship_args)})"
        )
        return lines
