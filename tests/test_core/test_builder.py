"""
Tests for the declaration builder.
"""

import pytest

from entitygen.core import (
    BasicString,
    BuilderScopeError,
    Constraint,
    DuplicateNameError,
    EntitySetBuilder,
    IdLong,
    ManyToOne,
)


class TestEntitySetBuilder:
    def test_basic_builder(self):
        builder = EntitySetBuilder()
        with builder.entity("user", package_name="com.example") as user:
            user.attribute("id", IdLong(auto_generated=True))
            with user.attribute("name", BasicString(length=50)) as name:
                name.not_null().not_blank()
        entities = builder.build()

        user = entities.get_entity("user")
        assert user.package_name == "com.example"
        assert user.list_attributes() == ["id", "name"]
        assert user.get_attribute("name").constraints == (
            Constraint.NOT_NULL,
            Constraint.NOT_BLANK,
        )

    def test_entity_metadata(self):
        builder = EntitySetBuilder()
        builder.entity("user", entity_name="Account", table_name="accounts", table_schema="auth")
        user = builder.build().get_entity("user")

        assert user.entity_name == "Account"
        assert user.table_name == "accounts"
        assert user.table_schema == "auth"

    def test_column_flags(self):
        builder = EntitySetBuilder()
        with builder.entity("user") as user:
            user.attribute(
                "email",
                BasicString(),
                column_name="email_address",
                column_unique=True,
                column_nullable=False,
                column_insertable=True,
                column_updatable=False,
            )
        email = builder.build().get_entity("user").get_attribute("email")

        assert email.column_name == "email_address"
        assert email.column_unique is True
        assert email.column_nullable is False
        assert email.column_insertable is True
        assert email.column_updatable is False

    def test_entities_in_declared_order(self):
        builder = EntitySetBuilder()
        builder.entity("b")
        builder.entity("a")
        builder.entity("c")
        assert builder.build().list_entities() == ["b", "a", "c"]

    def test_relationship_target_not_checked_when_building(self):
        builder = EntitySetBuilder()
        with builder.entity("user") as user:
            user.attribute("group", ManyToOne(target="missing"))
        assert builder.build().get_entity("user").get_attribute("group").is_relationship


class TestBuilderScopes:
    def test_entity_scopes_cannot_nest(self):
        builder = EntitySetBuilder()
        with builder.entity("user"):
            with pytest.raises(BuilderScopeError):
                builder.entity("group")

    def test_attribute_scopes_cannot_nest(self):
        builder = EntitySetBuilder()
        with builder.entity("user") as user:
            with user.attribute("name", BasicString()):
                with pytest.raises(BuilderScopeError):
                    user.attribute("email", BasicString())

    def test_closed_entity_rejects_attributes(self):
        builder = EntitySetBuilder()
        with builder.entity("user") as user:
            pass
        with pytest.raises(BuilderScopeError):
            user.attribute("name", BasicString())

    def test_sibling_closes_previous_attribute(self):
        builder = EntitySetBuilder()
        with builder.entity("user") as user:
            name = user.attribute("name", BasicString())
            user.attribute("email", BasicString())
            assert name.closed
            with pytest.raises(BuilderScopeError):
                name.not_null()

    def test_sibling_closes_previous_entity(self):
        builder = EntitySetBuilder()
        user = builder.entity("user")
        builder.entity("group")
        with pytest.raises(BuilderScopeError):
            user.attribute("name", BasicString())

    def test_build_closes_everything(self):
        builder = EntitySetBuilder()
        user = builder.entity("user")
        name = user.attribute("name", BasicString())
        builder.build()

        assert user.closed
        assert name.closed
        with pytest.raises(BuilderScopeError):
            builder.entity("group")

    def test_build_inside_entity_scope(self):
        builder = EntitySetBuilder()
        with builder.entity("user"):
            with pytest.raises(BuilderScopeError):
                builder.build()


class TestBuilderDuplicates:
    def test_duplicate_entity(self):
        builder = EntitySetBuilder()
        builder.entity("user")
        with pytest.raises(DuplicateNameError):
            builder.entity("user")

    def test_duplicate_attribute(self):
        builder = EntitySetBuilder()
        with builder.entity("user") as user:
            user.attribute("name", BasicString())
            with pytest.raises(DuplicateNameError):
                user.attribute("name", BasicString())
