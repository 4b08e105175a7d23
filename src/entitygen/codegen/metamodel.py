"""
Metamodel generator.

Generates ``<Entity>Entity_``, a class of typed attribute handles over the
persisted entity. Relationship handles are typed with the target entity
class and record the name of their join column.
"""

from entitygen.codegen.contract import RUNTIME_MODULE
from entitygen.codegen.generator import CodeGenerator, Imports
from entitygen.core.model import Entity
from entitygen.core.naming import (
    METAMODEL,
    compound_name,
    entity_class_name,
    metamodel_name,
    property_name,
)
from entitygen.core.resolver import require_column_type
from entitygen.core.types import ManyToOne


class MetamodelGenerator(CodeGenerator):
    """Generates the static metamodel of a persisted entity."""

    artifact = METAMODEL

    def artifact_name(self, entity: Entity) -> str:
        return metamodel_name(entity)

    def render(self, entity: Entity) -> str:
        owner = entity_class_name(entity)

        imports = Imports()
        imports.add("typing", "ClassVar")
        imports.add(RUNTIME_MODULE, "SingularAttribute")
        self._import_artifact(imports, entity, owner)

        body = [f"class {metamodel_name(entity)}:"]
        for index, attribute in enumerate(entity.attributes):
            if index:
                body.append("")
            column_type = require_column_type(entity, attribute)
            name = property_name(attribute)
            if isinstance(column_type, ManyToOne):
                target = self._resolve(entity, attribute)
                value_type = entity_class_name(target.entity)
                self._import_artifact(imports, target.entity, value_type)
                handle = (
                    f'SingularAttribute({owner}, "{name}", '
                    f'"{compound_name(attribute, target.identifier)}")'
                )
            else:
                value_type = column_type.python_type or "object"
                if column_type.python_module:
                    imports.add(column_type.python_module, value_type)
                handle = f'SingularAttribute({owner}, "{name}")'
            body.append(
                f"    {name}: ClassVar[SingularAttribute[{owner}, {value_type}]] = {handle}"
            )

        if not entity.attributes:
            body.append("    pass")

        return self._module(imports, body, future=True)
