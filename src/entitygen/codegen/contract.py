"""
Contract interface generator.

Generates ``I<Entity>``: a ``typing.Protocol`` declaring one attribute per
entity attribute, with relationships flattened to the target identifier.

Example output:
    class IUser(Protocol):
        id: int | None

        name: Annotated[str | None, NotNull()]

        managerId: int | None
"""

from entitygen.codegen.generator import CodeGenerator, Imports
from entitygen.core.model import Entity
from entitygen.core.naming import CONTRACT, contract_name

RUNTIME_MODULE = "entitygen.runtime"


class ContractGenerator(CodeGenerator):
    """Generates the contract interface shared by data holders and mappers."""

    artifact = CONTRACT

    def artifact_name(self, entity: Entity) -> str:
        return contract_name(entity)

    def render(self, entity: Entity) -> str:
        imports = Imports()
        imports.add("typing", "Protocol")
        self._add_type_imports(imports, entity)

        body = [f"class {contract_name(entity)}(Protocol):"]
        for index, attribute in enumerate(entity.attributes):
            if index:
                body.append("")
            name, python_type = self._flat_property(entity, attribute)
            annotation = f"{python_type} | None"
            if self.options.generate_constrained_data and attribute.constraints:
                markers = [constraint.value for constraint in attribute.constraints]
                imports.add("typing", "Annotated")
                imports.add(RUNTIME_MODULE, *markers)
                calls = ", ".join(f"{marker}()" for marker in markers)
                annotation = f"Annotated[{annotation}, {calls}]"
            body.append(f"    {name}: {annotation}")

        if not entity.attributes:
            body.append("    pass")

        return self._module(imports, body)
