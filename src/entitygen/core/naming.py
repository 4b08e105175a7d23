"""
Deterministic naming helpers shared by every generator.
"""

import re

from entitygen.core.model import Attribute, Entity

# Artifact kinds, in the order the orchestrator emits them
CONTRACT = "contract"
DATA = "data"
METAMODEL = "metamodel"
ENTITY = "entity"
ORDERS_PREDICATES = "orders_predicates"
EXTENSION = "extension"


def capitalized(name: str) -> str:
    """Title-case the first character when it is lowercase."""
    if name and name[0].islower():
        return name[0].title() + name[1:]
    return name


def decapitalized(name: str) -> str:
    """Lower-case the first character."""
    return name[:1].lower() + name[1:]


def to_snake_case(name: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    s2 = re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1)
    return s2.lower()


def contract_name(entity: Entity) -> str:
    return f"I{capitalized(entity.name)}"


def data_name(entity: Entity) -> str:
    return f"{capitalized(entity.name)}Data"


def entity_class_name(entity: Entity) -> str:
    return f"{capitalized(entity.name)}Entity"


def metamodel_name(entity: Entity) -> str:
    return f"{capitalized(entity.name)}Entity_"


def orders_predicates_name(entity: Entity) -> str:
    return f"{capitalized(entity.name)}OrdersPredicates"


def extension_name(entity: Entity) -> str:
    return f"{capitalized(entity.name)}Extension"


def order_name(entity: Entity) -> str:
    return f"{capitalized(entity.name)}Order"


def predicate_name(entity: Entity) -> str:
    return f"{capitalized(entity.name)}Predicate"


def property_name(attribute: Attribute) -> str:
    """Name of the generated property for an attribute."""
    return decapitalized(attribute.name)


def compound_name(attribute: Attribute, identifier: Attribute) -> str:
    """
    Flattened name of a relationship attribute.

    A relationship ``manager`` whose target identifier is ``id`` becomes
    ``managerId``.
    """
    return f"{decapitalized(attribute.name)}{capitalized(identifier.name)}"


def column_name(attribute: Attribute) -> str:
    """Physical column name of a scalar attribute."""
    return attribute.column_name or property_name(attribute)


def table_name(entity: Entity) -> str:
    """
    Physical table name of an entity.

    Falls back to the persisted-representation name, then to the persisted
    class name.
    """
    return entity.table_name or entity.entity_name or entity_class_name(entity)


def package_path(entity: Entity) -> str:
    """Directory of an entity's artifacts relative to the output root."""
    return entity.package_name.replace(".", "/")


def module_path(entity: Entity, artifact: str) -> str:
    """Dotted import path of an artifact module."""
    if entity.package_name:
        return f"{entity.package_name}.{artifact}"
    return artifact


def file_path(entity: Entity, artifact: str) -> str:
    """File path of an artifact relative to the output root."""
    directory = package_path(entity)
    if directory:
        return f"{directory}/{artifact}.py"
    return f"{artifact}.py"
