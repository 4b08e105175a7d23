"""
Data holder generator.

Generates ``<Entity>Data``, the concrete implementation of the contract
interface. With ``generate_composable_data`` every attribute is an
``observable()`` cell and writes are reported to subscribers.
"""

from entitygen.codegen.contract import RUNTIME_MODULE
from entitygen.codegen.generator import CodeGenerator, Imports
from entitygen.core.model import Entity
from entitygen.core.naming import DATA, contract_name, data_name


class DataGenerator(CodeGenerator):
    """Generates the mutable data holder of an entity."""

    artifact = DATA

    def artifact_name(self, entity: Entity) -> str:
        return data_name(entity)

    def render(self, entity: Entity) -> str:
        composable = self.options.generate_composable_data

        imports = Imports()
        self._import_artifact(imports, entity, contract_name(entity))
        self._add_type_imports(imports, entity)

        if composable:
            imports.add(RUNTIME_MODULE, "ObservableData", "observable")
            bases = f"ObservableData, {contract_name(entity)}"
            default = "observable()"
        else:
            bases = contract_name(entity)
            default = "None"

        body = [f"class {data_name(entity)}({bases}):"]
        for index, attribute in enumerate(entity.attributes):
            if index:
                body.append("")
            name, python_type = self._flat_property(entity, attribute)
            body.append(f"    {name}: {python_type} | None = {default}")

        if not entity.attributes:
            body.append("    pass")

        return self._module(imports, body)
