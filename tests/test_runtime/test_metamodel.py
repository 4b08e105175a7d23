"""Tests for metamodel handles and lock modes."""

from __future__ import annotations

import pytest
from sqlalchemy import BigInteger, ForeignKey, String, create_engine, select
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, aliased, mapped_column, relationship

from entitygen.runtime import LockMode, SingularAttribute, apply_lock_mode


class Base(DeclarativeBase):
    pass


class NodeEntity(Base):
    __tablename__ = "nodes"

    id: Mapped[int] = mapped_column(primary_key=True)
    label: Mapped[str | None] = mapped_column(String(20))
    parentId: Mapped[int | None] = mapped_column(BigInteger, ForeignKey("nodes.id"))
    parent: Mapped[NodeEntity | None] = relationship(
        "NodeEntity", foreign_keys=[parentId], remote_side="NodeEntity.id"
    )


class NodeEntity_:
    label = SingularAttribute(NodeEntity, "label")
    parent = SingularAttribute(NodeEntity, "parent", "parentId")


class TestSingularAttribute:
    def test_of_defaults_to_owner(self):
        assert NodeEntity_.label.of() is NodeEntity.label

    def test_of_alias(self):
        alias = aliased(NodeEntity, name="n2")

        assert "n2.label" in str(select(NodeEntity_.label.of(alias)))

    def test_join_of_relationship(self):
        assert NodeEntity_.parent.is_relationship
        assert NodeEntity_.parent.join_of() is NodeEntity.parentId

    def test_join_of_scalar(self):
        assert not NodeEntity_.label.is_relationship
        assert NodeEntity_.label.join_of() is NodeEntity.label

    def test_repr(self):
        assert repr(NodeEntity_.parent) == "SingularAttribute(NodeEntity.parent)"

    def test_query(self):
        engine = create_engine("sqlite:///:memory:")
        Base.metadata.create_all(engine)
        with Session(engine) as session:
            root = NodeEntity(label="root")
            session.add_all([root, NodeEntity(label="leaf", parent=root)])
            session.flush()

            children = session.scalars(
                select(NodeEntity).where(NodeEntity_.parent.join_of() == root.id)
            ).all()

        assert [node.label for node in children] == ["leaf"]


class TestLockMode:
    def test_none_leaves_statement(self):
        statement = select(NodeEntity)

        assert apply_lock_mode(statement, LockMode.NONE) is statement

    def test_write_lock(self):
        statement = apply_lock_mode(select(NodeEntity), LockMode.PESSIMISTIC_WRITE)

        assert "FOR UPDATE" in str(statement)

    def test_read_lock(self):
        from sqlalchemy.dialects import postgresql

        statement = apply_lock_mode(select(NodeEntity), LockMode.PESSIMISTIC_READ)

        assert "FOR SHARE" in str(statement.compile(dialect=postgresql.dialect()))

    def test_sqlite_ignores_locks(self):
        from sqlalchemy.dialects import sqlite

        statement = apply_lock_mode(select(NodeEntity), LockMode.PESSIMISTIC_WRITE)

        assert "FOR UPDATE" not in str(statement.compile(dialect=sqlite.dialect()))

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            apply_lock_mode(select(NodeEntity), "exclusive")

    def test_values(self):
        assert LockMode("pessimistic_read") is LockMode.PESSIMISTIC_READ
