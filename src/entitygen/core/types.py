"""
Column type taxonomy for entitygen.

The column type of an attribute is a closed union of frozen variants, tagged
by a ``kind`` discriminator. Each scalar variant knows the Python annotation
it maps to and the SQLAlchemy column type it is persisted with; the owning
relationship variant only carries the name of its target entity, which is
resolved lazily against the entity set.
"""

from enum import Enum
from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, Field


class Constraint(str, Enum):
    """Declarative validation markers attached to an attribute."""

    NOT_NULL = "NotNull"
    NOT_BLANK = "NotBlank"
    NOT_EMPTY = "NotEmpty"


class ColumnTypeBase(BaseModel):
    """Common base of every column type variant."""

    # Python annotation of the generated property (without "| None")
    python_type: ClassVar[str | None] = None
    # Module python_type is imported from, if it is not a builtin
    python_module: ClassVar[str | None] = None
    # SQLAlchemy type name imported from the sqlalchemy package
    sql_type_name: ClassVar[str | None] = None

    model_config = {"frozen": True}

    def sql_type(self) -> str | None:
        """SQLAlchemy type expression used in ``mapped_column``."""
        return self.sql_type_name


# === Identifiers ===


class IdType(ColumnTypeBase):
    """Identifier attribute (primary key)."""

    auto_generated: bool = False


class IdInteger(IdType):
    kind: Literal["id_integer"] = "id_integer"

    python_type = "int"
    sql_type_name = "Integer"


class IdLong(IdType):
    kind: Literal["id_long"] = "id_long"

    python_type = "int"
    sql_type_name = "BigInteger"


class IdUuid(IdType):
    kind: Literal["id_uuid"] = "id_uuid"

    python_type = "UUID"
    python_module = "uuid"
    sql_type_name = "Uuid"


# === Version counters ===


class VersionType(ColumnTypeBase):
    """Optimistic-locking version counter."""


class VersionInteger(VersionType):
    kind: Literal["version_integer"] = "version_integer"

    python_type = "int"
    sql_type_name = "Integer"


class VersionLong(VersionType):
    kind: Literal["version_long"] = "version_long"

    python_type = "int"
    sql_type_name = "BigInteger"


# === Basic scalars ===


class BasicType(ColumnTypeBase):
    """Plain scalar column."""


class BasicInteger(BasicType):
    kind: Literal["integer"] = "integer"

    python_type = "int"
    sql_type_name = "Integer"


class BasicLong(BasicType):
    kind: Literal["long"] = "long"

    python_type = "int"
    sql_type_name = "BigInteger"


class BasicBoolean(BasicType):
    kind: Literal["boolean"] = "boolean"

    python_type = "bool"
    sql_type_name = "Boolean"


class BasicString(BasicType):
    kind: Literal["string"] = "string"
    length: int | None = Field(default=None, ge=1)

    python_type = "str"
    sql_type_name = "String"

    def sql_type(self) -> str:
        if self.length is not None:
            return f"String({self.length})"
        return "String"


class BasicDecimal(BasicType):
    kind: Literal["decimal"] = "decimal"
    precision: int | None = Field(default=None, ge=1)
    scale: int | None = Field(default=None, ge=0)

    python_type = "Decimal"
    python_module = "decimal"
    sql_type_name = "Numeric"

    def sql_type(self) -> str:
        params = []
        if self.precision is not None:
            params.append(f"precision={self.precision}")
        if self.scale is not None:
            params.append(f"scale={self.scale}")
        if params:
            return f"Numeric({', '.join(params)})"
        return "Numeric"


class BasicBytes(BasicType):
    kind: Literal["bytes"] = "bytes"

    python_type = "bytes"
    sql_type_name = "LargeBinary"


class BasicUuid(BasicType):
    kind: Literal["uuid"] = "uuid"

    python_type = "UUID"
    python_module = "uuid"
    sql_type_name = "Uuid"


class BasicLocalDateTime(BasicType):
    kind: Literal["local_datetime"] = "local_datetime"

    python_type = "datetime"
    python_module = "datetime"
    sql_type_name = "DateTime"


class BasicZonedDateTime(BasicType):
    kind: Literal["zoned_datetime"] = "zoned_datetime"

    python_type = "datetime"
    python_module = "datetime"
    sql_type_name = "DateTime"

    def sql_type(self) -> str:
        return "DateTime(timezone=True)"


# === Relationships ===


class RelationshipType(ColumnTypeBase):
    """Reference to another entity."""


class ManyToOne(RelationshipType):
    """Owning side of a many-to-one relationship."""

    kind: Literal["many_to_one"] = "many_to_one"
    target: str = Field(..., min_length=1, description="Name of the target entity")


ColumnType = Annotated[
    Union[
        IdInteger,
        IdLong,
        IdUuid,
        VersionInteger,
        VersionLong,
        BasicInteger,
        BasicLong,
        BasicBoolean,
        BasicString,
        BasicDecimal,
        BasicBytes,
        BasicUuid,
        BasicLocalDateTime,
        BasicZonedDateTime,
        ManyToOne,
    ],
    Field(discriminator="kind"),
]
