"""
Generation options and declaration loading.

Options can be constructed directly, parsed from JSON, or read from
``ENTITYGEN_*`` environment variables.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field

from entitygen.core.model import EntitySet

ENV_PREFIX = "ENTITYGEN_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class GenerationOptions(BaseModel):
    """Switches controlling what the generators emit."""

    # Data holders notify observers on mutation
    generate_composable_data: bool = False
    # Contract attributes carry their constraint markers
    generate_constrained_data: bool = True
    # Reserved; no generator reads it yet
    generate_json_aware_data: bool = False
    # Only the contract and the data holder are generated
    generate_only_data: bool = False
    # With generate_only_data, stop the whole run after the first entity
    only_data_stops_run: bool = False
    # Declarative base of the persisted entities, as "module.Class"
    entity_base: str = Field(default="entitygen.runtime.EntityBase", pattern=r"^[\w.]+\.\w+$")

    model_config = {"frozen": True}

    @property
    def entity_base_module(self) -> str:
        return self.entity_base.rsplit(".", 1)[0]

    @property
    def entity_base_class(self) -> str:
        return self.entity_base.rsplit(".", 1)[1]

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GenerationOptions":
        """
        Build options from ``ENTITYGEN_<OPTION>`` environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            ValueError: If a boolean variable has an unrecognised value
        """
        environ = os.environ if environ is None else environ
        values: dict[str, object] = {}

        for name, field in cls.model_fields.items():
            raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is None:
                continue
            if field.annotation is bool:
                values[name] = _parse_bool(name, raw)
            else:
                values[name] = raw

        return cls(**values)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {ENV_PREFIX}{name.upper()}: {raw!r}")


def load_entity_set(path: Path | str) -> EntitySet:
    """
    Load entity declarations from a JSON file.

    The document has the shape of ``EntitySet``:
    ``{"entities": [{"name": ..., "attributes": [...]}, ...]}``.
    """
    return EntitySet.model_validate_json(Path(path).read_text())


def load_options(path: Path | str) -> GenerationOptions:
    """Load generation options from a JSON file."""
    return GenerationOptions.model_validate_json(Path(path).read_text())
