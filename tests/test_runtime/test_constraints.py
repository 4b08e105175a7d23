"""Tests for constraint markers and validation."""

from __future__ import annotations

from typing import Annotated, Protocol

import pytest

from entitygen.runtime import (
    ConstraintMarker,
    ConstraintViolation,
    NotBlank,
    NotEmpty,
    NotNull,
    constraint_markers,
    validate_constraints,
)


class IAccount(Protocol):
    id: int | None
    email: Annotated[str | None, NotNull(), NotBlank()]
    tags: Annotated[list | None, NotEmpty()]


class AccountData(IAccount):
    id: int | None = None
    email: str | None = None
    tags: list | None = None


class TestMarkers:
    @pytest.mark.parametrize(
        "marker,value,expected",
        [
            (NotNull(), None, False),
            (NotNull(), "", True),
            (NotBlank(), None, False),
            (NotBlank(), "  \t", False),
            (NotBlank(), " a ", True),
            (NotBlank(), 3, False),
            (NotEmpty(), None, False),
            (NotEmpty(), [], False),
            (NotEmpty(), "", False),
            (NotEmpty(), ["x"], True),
            (NotEmpty(), {"k": 1}, True),
        ],
    )
    def test_check(self, marker, value, expected):
        assert marker.check(value) is expected

    def test_name(self):
        assert NotBlank().name == "NotBlank"

    def test_markers_are_values(self):
        assert NotNull() == NotNull()
        assert NotNull() != NotBlank()

    def test_base_marker_is_abstract(self):
        with pytest.raises(TypeError):
            ConstraintMarker()


class TestConstraintMarkers:
    def test_found_through_contract(self):
        markers = constraint_markers(AccountData)

        assert markers == {"email": [NotNull(), NotBlank()], "tags": [NotEmpty()]}

    def test_class_without_markers(self):
        class Plain:
            name: str = ""

        assert constraint_markers(Plain) == {}


class TestValidateConstraints:
    def test_defaults_violate(self):
        violations = validate_constraints(AccountData())

        assert violations == [
            ConstraintViolation("email", "NotNull", None),
            ConstraintViolation("email", "NotBlank", None),
            ConstraintViolation("tags", "NotEmpty", None),
        ]

    def test_valid_instance(self):
        data = AccountData()
        data.email = "ada@example.com"
        data.tags = ["admin"]

        assert validate_constraints(data) == []

    def test_message(self):
        violation = ConstraintViolation("email", "NotBlank", " ")

        assert violation.message == "'email' violates NotBlank (value: ' ')"
