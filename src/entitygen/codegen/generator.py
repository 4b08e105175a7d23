"""
Base code generator.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar

from entitygen.config import GenerationOptions
from entitygen.core.model import Attribute, Entity, EntitySet
from entitygen.core.naming import compound_name, file_path, module_path, property_name
from entitygen.core.resolver import (
    ResolvedTarget,
    identifier_python_type,
    require_column_type,
    resolve_target,
)
from entitygen.core.types import ManyToOne

HEADER = [
    '"""',
    "Auto-generated by entitygen.",
    "",
    "Do not edit manually - regenerate from the entity declarations.",
    '"""',
]

# Longest import line before it is wrapped in parentheses
MAX_IMPORT_LINE = 88


@dataclass
class GeneratedFile:
    """A generated source file."""

    path: str
    content: str
    module_name: str
    entity: str = ""
    artifact: str = ""


@dataclass
class GenerationResult:
    """Result of code generation."""

    files: list[GeneratedFile] = field(default_factory=list)

    def write_all(self, base_dir: Path | str) -> list[Path]:
        """
        Write all generated files to disk.

        Existing files are overwritten.

        Args:
            base_dir: Base directory to write files to

        Returns:
            List of paths to written files
        """
        base_path = Path(base_dir)
        written = []

        for gf in self.files:
            target = base_path / gf.path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(gf.content)
            written.append(target)

        return written

    def paths(self) -> list[str]:
        """Relative paths of all files, in generation order."""
        return [gf.path for gf in self.files]

    def get(self, path: str) -> GeneratedFile | None:
        """Get a generated file by relative path."""
        for gf in self.files:
            if gf.path == path:
                return gf
        return None


class Imports:
    """
    Collects ``from module import name`` pairs.

    Lines are rendered sorted by module and name, so the output does not
    depend on the order in which attributes requested them.
    """

    def __init__(self) -> None:
        self._names: dict[str, set[str]] = {}

    def add(self, module: str, *names: str) -> None:
        self._names.setdefault(module, set()).update(names)

    def __bool__(self) -> bool:
        return bool(self._names)

    def lines(self) -> list[str]:
        lines = []
        for module in sorted(self._names):
            names = sorted(self._names[module])
            line = f"from {module} import {', '.join(names)}"
            if len(line) <= MAX_IMPORT_LINE:
                lines.append(line)
            else:
                lines.append(f"from {module} import (")
                lines.extend(f"    {name}," for name in names)
                lines.append(")")
        return lines


class CodeGenerator(ABC):
    """
    Abstract base class for artifact generators.

    A generator renders one artifact kind for one entity. Rendering is a pure
    function of the entity set, the options and the entity, and never writes
    to disk.
    """

    # Artifact kind, see entitygen.core.naming
    artifact: ClassVar[str]

    def __init__(self, entities: EntitySet, options: GenerationOptions | None = None) -> None:
        """
        Initialize the generator.

        Args:
            entities: All entities of the run, used to resolve relationships
            options: Generation options (defaults apply when omitted)
        """
        self.entities = entities
        self.options = options or GenerationOptions()

    @abstractmethod
    def artifact_name(self, entity: Entity) -> str:
        """Name of the generated module and of its main class."""
        ...

    @abstractmethod
    def render(self, entity: Entity) -> str:
        """Render the module source for an entity."""
        ...

    def generate_for(self, entity: Entity) -> GeneratedFile:
        name = self.artifact_name(entity)
        return GeneratedFile(
            path=file_path(entity, name),
            content=self.render(entity),
            module_name=module_path(entity, name),
            entity=entity.name,
            artifact=self.artifact,
        )

    def generate(self) -> GenerationResult:
        """Render the artifact of every entity, in declared order."""
        result = GenerationResult()
        for entity in self.entities.entities:
            result.files.append(self.generate_for(entity))
        return result

    # === Shared helpers ===

    def _module(
        self,
        imports: Imports,
        body: list[str],
        *,
        future: bool = False,
    ) -> str:
        """Assemble header, imports and body into module source."""
        lines = list(HEADER)
        lines.append("")
        if future:
            lines.append("from __future__ import annotations")
            lines.append("")
        if imports:
            lines.extend(imports.lines())
            lines.append("")
        lines.append("")
        lines.extend(body)
        return "\n".join(lines).rstrip("\n") + "\n"

    def _resolve(self, entity: Entity, attribute: Attribute) -> ResolvedTarget:
        return resolve_target(self.entities, entity, attribute)

    def _import_artifact(self, imports: Imports, entity: Entity, name: str) -> None:
        """Import the class ``name`` from the artifact module of the same name."""
        imports.add(module_path(entity, name), name)

    def _flat_property(self, entity: Entity, attribute: Attribute) -> tuple[str, str]:
        """
        Name and Python type of an attribute on the contract side.

        Relationships are flattened to the identifier of their target, so
        ``manager -> Employee(id: long)`` becomes ``("managerId", "int")``.
        """
        column_type = require_column_type(entity, attribute)
        if isinstance(column_type, ManyToOne):
            target = self._resolve(entity, attribute)
            return compound_name(attribute, target.identifier), identifier_python_type(target)
        return property_name(attribute), column_type.python_type or "object"

    def _add_type_imports(self, imports: Imports, entity: Entity) -> None:
        """Import the Python types used by the flattened properties."""
        for attribute in entity.attributes:
            column_type = require_column_type(entity, attribute)
            if isinstance(column_type, ManyToOne):
                column_type = self._resolve(entity, attribute).identifier_type
            if column_type.python_module and column_type.python_type:
                imports.add(column_type.python_module, column_type.python_type)
