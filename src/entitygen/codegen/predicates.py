"""
Orders and predicates generator.

Generates ``<Entity>OrdersPredicates``: two closed hierarchies of frozen
dataclasses describing how a listing of the entity may be sorted and
filtered.

For an attribute ``name`` of entity ``user`` the module declares
``UserOrderName`` with ``UserOrderNameAscending``/``UserOrderNameDescending``
and ``UserPredicateName`` with one subclass per operator
(``UserPredicateNameEqual(x)``, ``UserPredicateNameBetween(x, y)``, ...).
"""

from dataclasses import dataclass

from entitygen.codegen.generator import CodeGenerator, Imports
from entitygen.core.errors import DuplicateNameError
from entitygen.core.model import Attribute, Entity
from entitygen.core.naming import (
    ORDERS_PREDICATES,
    capitalized,
    order_name,
    orders_predicates_name,
    predicate_name,
)
from entitygen.core.resolver import require_column_type
from entitygen.core.types import BasicString


@dataclass(frozen=True)
class Operator:
    """A comparison offered by the predicate hierarchy."""

    name: str
    # Number of operands: 0 (null checks), 1 (x) or 2 (x, y)
    arity: int
    strings_only: bool = False


OPERATORS = (
    Operator("Between", 2),
    Operator("Equal", 1),
    Operator("GreaterThan", 1),
    Operator("GreaterThanOrEqualTo", 1),
    Operator("IsNotNull", 0),
    Operator("IsNull", 0),
    Operator("LessThan", 1),
    Operator("LessThanOrEqualTo", 1),
    Operator("Like", 1, strings_only=True),
    Operator("NotBetween", 2),
    Operator("NotEqual", 1),
    Operator("NotGreaterThan", 1),
    Operator("NotGreaterThanOrEqualTo", 1),
    Operator("NotLessThan", 1),
    Operator("NotLessThanOrEqualTo", 1),
    Operator("NotLike", 1, strings_only=True),
)

# Order direction and the SQLAlchemy method sorting that way
DIRECTIONS = {"Ascending": "asc", "Descending": "desc"}


def operators_for(entity: Entity, attribute: Attribute) -> tuple[Operator, ...]:
    """Operators available for an attribute, in declaration order."""
    is_string = isinstance(require_column_type(entity, attribute), BasicString)
    return tuple(op for op in OPERATORS if is_string or not op.strings_only)


def order_class(entity: Entity, attribute: Attribute, direction: str = "") -> str:
    return f"{order_name(entity)}{capitalized(attribute.name)}{direction}"


def predicate_class(entity: Entity, attribute: Attribute, operator: str = "") -> str:
    return f"{predicate_name(entity)}{capitalized(attribute.name)}{operator}"


def hierarchy_classes(entity: Entity) -> list[str]:
    """
    Names of all order and predicate classes of an entity.

    Names are flattened, so attributes such as ``name`` and ``nameEqual`` may
    both claim ``<Entity>PredicateNameEqual``.

    Raises:
        DuplicateNameError: If two classes would share a name
    """
    names = [order_name(entity), predicate_name(entity)]
    for attribute in entity.attributes:
        names.append(order_class(entity, attribute))
        names.extend(order_class(entity, attribute, direction) for direction in DIRECTIONS)
        names.append(predicate_class(entity, attribute))
        names.extend(
            predicate_class(entity, attribute, op.name) for op in operators_for(entity, attribute)
        )

    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise DuplicateNameError(
                "class",
                name,
                scope=entity.name,
                hints=["Rename one of the attributes whose order or predicate classes clash"],
            )
        seen.add(name)
    return names


class OrdersPredicatesGenerator(CodeGenerator):
    """Generates the order and predicate hierarchies of an entity."""

    artifact = ORDERS_PREDICATES

    def artifact_name(self, entity: Entity) -> str:
        return orders_predicates_name(entity)

    def render(self, entity: Entity) -> str:
        hierarchy_classes(entity)

        imports = Imports()
        imports.add("dataclasses", "dataclass")
        self._add_type_imports(imports, entity)

        body = [f"class {order_name(entity)}:", "    pass", "", ""]
        for attribute in entity.attributes:
            body.extend(self._order_lines(entity, attribute))

        body.extend([f"class {predicate_name(entity)}:", "    pass", "", ""])
        for attribute in entity.attributes:
            body.extend(self._predicate_lines(entity, attribute))

        return self._module(imports, body)

    def _order_lines(self, entity: Entity, attribute: Attribute) -> list[str]:
        base = order_class(entity, attribute)
        lines = [f"class {base}({order_name(entity)}):", "    pass", "", ""]
        for direction in DIRECTIONS:
            lines.extend([
                "@dataclass(frozen=True)",
                f"class {order_class(entity, attribute, direction)}({base}):",
                "    pass",
                "",
                "",
            ])
        return lines

    def _predicate_lines(self, entity: Entity, attribute: Attribute) -> list[str]:
        _, python_type = self._flat_property(entity, attribute)
        base = predicate_class(entity, attribute)
        lines = [f"class {base}({predicate_name(entity)}):", "    pass", "", ""]
        for operator in operators_for(entity, attribute):
            lines.append("@dataclass(frozen=True)")
            lines.append(f"class {predicate_class(entity, attribute, operator.name)}({base}):")
            if operator.arity == 0:
                lines.append("    pass")
            else:
                lines.append(f"    x: {python_type}")
            if operator.arity == 2:
                lines.append(f"    y: {python_type}")
            lines.extend(["", ""])
        return lines
