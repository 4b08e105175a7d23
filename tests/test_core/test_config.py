"""
Tests for generation options and declaration loading.
"""

import json

import pytest
from pydantic import ValidationError

from entitygen.config import GenerationOptions, load_entity_set, load_options
from entitygen.core import DuplicateNameError, IdLong


class TestGenerationOptions:
    def test_defaults(self):
        options = GenerationOptions()

        assert options.generate_composable_data is False
        assert options.generate_constrained_data is True
        assert options.generate_json_aware_data is False
        assert options.generate_only_data is False
        assert options.only_data_stops_run is False
        assert options.entity_base == "entitygen.runtime.EntityBase"

    def test_entity_base_parts(self):
        options = GenerationOptions(entity_base="app.models.Base")

        assert options.entity_base_module == "app.models"
        assert options.entity_base_class == "Base"

    def test_entity_base_needs_module(self):
        with pytest.raises(ValidationError):
            GenerationOptions(entity_base="Base")

    def test_from_env(self):
        options = GenerationOptions.from_env({
            "ENTITYGEN_GENERATE_ONLY_DATA": "true",
            "ENTITYGEN_GENERATE_CONSTRAINED_DATA": "0",
            "ENTITYGEN_ENTITY_BASE": "app.db.Base",
            "UNRELATED": "1",
        })

        assert options.generate_only_data is True
        assert options.generate_constrained_data is False
        assert options.entity_base == "app.db.Base"

    def test_from_env_invalid_boolean(self):
        with pytest.raises(ValueError, match="ENTITYGEN_GENERATE_ONLY_DATA"):
            GenerationOptions.from_env({"ENTITYGEN_GENERATE_ONLY_DATA": "maybe"})

    def test_load_options(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text(json.dumps({"generate_composable_data": True}))

        assert load_options(path).generate_composable_data is True


class TestLoadEntitySet:
    def test_load(self, tmp_path):
        path = tmp_path / "entities.json"
        path.write_text(json.dumps({
            "entities": [
                {
                    "name": "user",
                    "package_name": "com.example",
                    "attributes": [
                        {"name": "id", "column_type": {"kind": "id_long", "auto_generated": True}},
                        {
                            "name": "name",
                            "column_type": {"kind": "string", "length": 50},
                            "constraints": ["NotNull"],
                        },
                    ],
                },
            ],
        }))

        entities = load_entity_set(path)
        user = entities.get_entity("user")

        assert user.get_attribute("id").column_type == IdLong(auto_generated=True)
        assert user.get_attribute("name").constraints[0].value == "NotNull"

    def test_load_duplicate_entities(self, tmp_path):
        path = tmp_path / "entities.json"
        path.write_text(json.dumps({"entities": [{"name": "user"}, {"name": "user"}]}))

        with pytest.raises(DuplicateNameError):
            load_entity_set(path)
