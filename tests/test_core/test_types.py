"""
Tests for the column type taxonomy.
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from entitygen.core.types import (
    BasicDecimal,
    BasicLocalDateTime,
    BasicString,
    BasicZonedDateTime,
    ColumnType,
    IdLong,
    IdUuid,
    ManyToOne,
    VersionInteger,
)


class TestColumnTypes:
    def test_python_types(self):
        assert IdLong().python_type == "int"
        assert IdUuid().python_type == "UUID"
        assert IdUuid().python_module == "uuid"
        assert BasicDecimal().python_type == "Decimal"
        assert BasicString().python_module is None

    def test_integer_and_long_share_python_type(self):
        """Integer and long differ only in their SQL type."""
        assert VersionInteger().python_type == IdLong().python_type
        assert VersionInteger().sql_type() == "Integer"
        assert IdLong().sql_type() == "BigInteger"

    def test_string_length(self):
        assert BasicString().sql_type() == "String"
        assert BasicString(length=50).sql_type() == "String(50)"

    def test_decimal_precision_and_scale(self):
        assert BasicDecimal().sql_type() == "Numeric"
        assert BasicDecimal(precision=10).sql_type() == "Numeric(precision=10)"
        assert BasicDecimal(precision=10, scale=2).sql_type() == "Numeric(precision=10, scale=2)"

    def test_datetimes(self):
        assert BasicLocalDateTime().sql_type() == "DateTime"
        assert BasicZonedDateTime().sql_type() == "DateTime(timezone=True)"

    def test_types_are_frozen(self):
        column_type = BasicString(length=10)
        with pytest.raises(ValidationError):
            column_type.length = 20

    def test_invalid_length(self):
        with pytest.raises(ValidationError):
            BasicString(length=0)

    def test_relationship_requires_target(self):
        with pytest.raises(ValidationError):
            ManyToOne(target="")


class TestDiscriminatedUnion:
    def test_parse_by_kind(self):
        adapter = TypeAdapter(ColumnType)

        assert adapter.validate_python({"kind": "id_long", "auto_generated": True}) == IdLong(
            auto_generated=True
        )
        assert adapter.validate_python({"kind": "string", "length": 5}) == BasicString(length=5)
        assert adapter.validate_python({"kind": "many_to_one", "target": "user"}) == ManyToOne(
            target="user"
        )

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            TypeAdapter(ColumnType).validate_python({"kind": "float"})
