"""
Shared test fixtures.
"""

import importlib
import sys
import uuid
from pathlib import Path

import pytest

from entitygen.config import GenerationOptions
from entitygen.core import (
    BasicBoolean,
    BasicDecimal,
    BasicLocalDateTime,
    BasicString,
    Constraint,
    EntitySet,
    EntitySetBuilder,
    IdLong,
    IdUuid,
    ManyToOne,
    VersionInteger,
)

# === Entity sets ===


@pytest.fixture
def user_entities() -> EntitySet:
    """A single user entity with a generated long id and a constrained name."""
    builder = EntitySetBuilder()
    with builder.entity("user", package_name="com.example.accounts") as user:
        user.attribute("id", IdLong(auto_generated=True))
        with user.attribute("name", BasicString(length=50)) as name:
            name.not_null()
    return builder.build()


@pytest.fixture
def hr_entities() -> EntitySet:
    """Employees with a self-referencing manager and a department."""
    builder = EntitySetBuilder()
    with builder.entity("employee", package_name="com.example.hr") as employee:
        employee.attribute("id", IdLong(auto_generated=True))
        employee.attribute("version", VersionInteger())
        employee.attribute(
            "name",
            BasicString(length=100),
            constraints=[Constraint.NOT_NULL, Constraint.NOT_BLANK],
        )
        employee.attribute("salary", BasicDecimal(precision=10, scale=2))
        employee.attribute("hiredAt", BasicLocalDateTime(), column_name="hired_at")
        employee.attribute("active", BasicBoolean(), column_updatable=False)
        employee.attribute("badge", BasicString(), column_insertable=False)
        employee.attribute("manager", ManyToOne(target="employee"))
        employee.attribute("department", ManyToOne(target="department"))
    with builder.entity(
        "department",
        package_name="com.example.hr",
        table_name="departments",
        table_schema="hr",
    ) as department:
        department.attribute("id", IdUuid(auto_generated=True))
        department.attribute("code", BasicString(length=8), column_unique=True, column_nullable=False)
    return builder.build()


@pytest.fixture
def options() -> GenerationOptions:
    return GenerationOptions()


# === Generated code ===


@pytest.fixture
def generated_package(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """
    Factory importing generated modules from a fresh, uniquely named package.

    Each package gets its own declarative base, so mapped class names never
    collide between tests.
    """

    def factory(entities: EntitySet, **option_values):
        from entitygen.codegen import Orchestrator

        package = f"generated_{uuid.uuid4().hex[:10]}"
        base_module = f"{package}_base"
        (tmp_path / f"{base_module}.py").write_text(
            "from sqlalchemy.orm import DeclarativeBase\n"
            "\n"
            "\n"
            "class Base(DeclarativeBase):\n"
            "    pass\n"
        )

        relocated = EntitySet(
            entities=tuple(
                entity.model_copy(update={"package_name": package})
                for entity in entities.entities
            )
        )
        options = GenerationOptions(entity_base=f"{base_module}.Base", **option_values)
        Orchestrator(relocated, options).run(tmp_path)

        monkeypatch.syspath_prepend(str(tmp_path))
        importlib.invalidate_caches()

        def load(name: str):
            return importlib.import_module(f"{package}.{name}")

        load.base = importlib.import_module(base_module)
        load.package = package
        return load

    yield factory

    for name in list(sys.modules):
        if name.startswith("generated_"):
            del sys.modules[name]
