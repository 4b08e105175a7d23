"""
Extension generator.

Generates ``<Entity>Extension``: free functions translating orders and
predicates into SQL expressions, counting and listing entities through a
``Session``, and copying properties between the contract and the persisted
entity.

For an entity ``user`` the module defines:

- ``user_order_clause(order, root=UserEntity)``
- ``user_predicate_clause(predicate, root=UserEntity)``
- ``count_user(session, distinct=False, filtering=())``
- ``list_user(session, distinct=False, filtering=(), ordering=(), lock_mode=LockMode.NONE,
  first_result=-1, max_results=-1)``
- ``copy_insertable_user_properties(data, session, entity)``
- ``copy_updatable_user_properties(data, session, entity)``
- ``copy_user_properties(entity, data)``
"""

from entitygen.codegen.contract import RUNTIME_MODULE
from entitygen.codegen.generator import CodeGenerator, Imports
from entitygen.codegen.predicates import (
    DIRECTIONS,
    hierarchy_classes,
    operators_for,
    order_class,
    predicate_class,
)
from entitygen.core.model import Attribute, Entity
from entitygen.core.naming import (
    EXTENSION,
    capitalized,
    compound_name,
    contract_name,
    entity_class_name,
    extension_name,
    metamodel_name,
    module_path,
    order_name,
    orders_predicates_name,
    predicate_name,
    property_name,
    to_snake_case,
)
from entitygen.core.resolver import require_column_type
from entitygen.core.types import IdType, ManyToOne, VersionType

# SQL expression per operator; {c} is the column, {x}/{y} the operands
OPERATOR_EXPRESSIONS = {
    "Between": "{c}.between(x, y)",
    "Equal": "{c} == x",
    "GreaterThan": "{c} > x",
    "GreaterThanOrEqualTo": "{c} >= x",
    "IsNotNull": "{c}.is_not(None)",
    "IsNull": "{c}.is_(None)",
    "LessThan": "{c} < x",
    "LessThanOrEqualTo": "{c} <= x",
    "Like": "{c}.like(x)",
    "NotBetween": "not_({c}.between(x, y))",
    "NotEqual": "{c} != x",
    "NotGreaterThan": "not_({c} > x)",
    "NotGreaterThanOrEqualTo": "not_({c} >= x)",
    "NotLessThan": "not_({c} < x)",
    "NotLessThanOrEqualTo": "not_({c} <= x)",
    "NotLike": "{c}.not_like(x)",
}

OPERAND_PATTERNS = {0: "()", 1: "(x=x)", 2: "(x=x, y=y)"}


def function_prefix(entity: Entity) -> str:
    """snake_case entity name used in generated function names."""
    return to_snake_case(capitalized(entity.name))


class ExtensionGenerator(CodeGenerator):
    """Generates query and mapping helpers of an entity."""

    artifact = EXTENSION

    def artifact_name(self, entity: Entity) -> str:
        return extension_name(entity)

    def render(self, entity: Entity) -> str:
        hierarchy_classes(entity)

        imports = Imports()
        imports.add("collections.abc", "Sequence")
        imports.add("typing", "Any")
        imports.add("sqlalchemy", "ColumnElement", "UnaryExpression", "func", "not_", "select")
        imports.add("sqlalchemy.orm", "Session")
        imports.add(RUNTIME_MODULE, "LockMode", "apply_lock_mode")
        self._import_artifact(imports, entity, contract_name(entity))
        self._import_artifact(imports, entity, entity_class_name(entity))
        if entity.attributes:
            self._import_artifact(imports, entity, metamodel_name(entity))

        body: list[str] = []
        body.extend(self._order_clause(entity, imports))
        body.extend(self._predicate_clause(entity, imports))
        body.extend(self._count(entity))
        body.extend(self._list(entity))
        body.extend(self._copy_to_entity(entity, imports, "insertable"))
        body.extend(self._copy_to_entity(entity, imports, "updatable"))
        body.extend(self._copy_to_data(entity))

        return self._module(imports, body, future=True)

    def _column(self, entity: Entity, attribute: Attribute) -> str:
        """Expression of the compared column; relationships compare their join column."""
        handle = f"{metamodel_name(entity)}.{property_name(attribute)}"
        if isinstance(require_column_type(entity, attribute), ManyToOne):
            return f"{handle}.join_of(root)"
        return f"{handle}.of(root)"

    def _order_clause(self, entity: Entity, imports: Imports) -> list[str]:
        module = module_path(entity, orders_predicates_name(entity))
        imports.add(module, order_name(entity))
        prefix = function_prefix(entity)
        lines = [
            f"def {prefix}_order_clause(",
            f"    order: {order_name(entity)}, root: Any = {entity_class_name(entity)}",
            ") -> UnaryExpression[Any]:",
            f'    """Translate a {order_name(entity)} into an ORDER BY expression."""',
        ]
        if entity.attributes:
            lines.append("    match order:")
        for attribute in entity.attributes:
            column = self._column(entity, attribute)
            for direction, method in DIRECTIONS.items():
                name = order_class(entity, attribute, direction)
                imports.add(module, name)
                lines.append(f"        case {name}():")
                lines.append(f"            return {column}.{method}()")
        lines.append('    raise TypeError(f"Unknown order: {order!r}")')
        lines.extend(["", ""])
        return lines

    def _predicate_clause(self, entity: Entity, imports: Imports) -> list[str]:
        module = module_path(entity, orders_predicates_name(entity))
        imports.add(module, predicate_name(entity))
        prefix = function_prefix(entity)
        lines = [
            f"def {prefix}_predicate_clause(",
            f"    predicate: {predicate_name(entity)}, root: Any = {entity_class_name(entity)}",
            ") -> ColumnElement[bool]:",
            f'    """Translate a {predicate_name(entity)} into a WHERE expression."""',
        ]
        if entity.attributes:
            lines.append("    match predicate:")
        for attribute in entity.attributes:
            column = self._column(entity, attribute)
            for operator in operators_for(entity, attribute):
                name = predicate_class(entity, attribute, operator.name)
                imports.add(module, name)
                expression = OPERATOR_EXPRESSIONS[operator.name].format(c=column)
                lines.append(f"        case {name}{OPERAND_PATTERNS[operator.arity]}:")
                lines.append(f"            return {expression}")
        lines.append('    raise TypeError(f"Unknown predicate: {predicate!r}")')
        lines.extend(["", ""])
        return lines

    def _count(self, entity: Entity) -> list[str]:
        prefix = function_prefix(entity)
        entity_class = entity_class_name(entity)
        return [
            f"def count_{prefix}(",
            "    session: Session,",
            "    distinct: bool = False,",
            f"    filtering: Sequence[{predicate_name(entity)}] = (),",
            ") -> int:",
            f'    """Count {entity_class} rows matching all predicates."""',
            f"    statement = select({entity_class})",
            "    if filtering:",
            f"        statement = statement.where(*({prefix}_predicate_clause(p) for p in filtering))",
            "    if distinct:",
            "        statement = statement.distinct()",
            "    counting = select(func.count()).select_from(statement.subquery())",
            "    return session.execute(counting).scalar_one()",
            "",
            "",
        ]

    def _list(self, entity: Entity) -> list[str]:
        prefix = function_prefix(entity)
        entity_class = entity_class_name(entity)
        return [
            f"def list_{prefix}(",
            "    session: Session,",
            "    distinct: bool = False,",
            f"    filtering: Sequence[{predicate_name(entity)}] = (),",
            f"    ordering: Sequence[{order_name(entity)}] = (),",
            "    lock_mode: LockMode = LockMode.NONE,",
            "    first_result: int = -1,",
            "    max_results: int = -1,",
            f") -> list[{entity_class}]:",
            '    """',
            f"    List {entity_class} rows matching all predicates.",
            "",
            "    Negative first_result/max_results leave the offset/limit unset.",
            '    """',
            f"    statement = select({entity_class})",
            "    if filtering:",
            f"        statement = statement.where(*({prefix}_predicate_clause(p) for p in filtering))",
            "    if ordering:",
            f"        statement = statement.order_by(*({prefix}_order_clause(o) for o in ordering))",
            "    if distinct:",
            "        statement = statement.distinct()",
            "    statement = apply_lock_mode(statement, lock_mode)",
            "    if first_result >= 0:",
            "        statement = statement.offset(first_result)",
            "    if max_results >= 0:",
            "        statement = statement.limit(max_results)",
            "    return list(session.scalars(statement))",
            "",
            "",
        ]

    def _copy_to_entity(self, entity: Entity, imports: Imports, flag: str) -> list[str]:
        """
        Copy contract properties onto a persisted entity.

        Identifiers and versions are never copied; attributes whose
        ``column_<flag>`` is explicitly False are skipped.
        """
        prefix = function_prefix(entity)
        lines = [
            f"def copy_{flag}_{prefix}_properties(",
            f"    data: {contract_name(entity)}, session: Session, entity: {entity_class_name(entity)}",
            ") -> None:",
        ]
        copied = 0
        for attribute in entity.attributes:
            column_type = require_column_type(entity, attribute)
            if isinstance(column_type, (IdType, VersionType)):
                continue
            if getattr(attribute, f"column_{flag}") is False:
                continue
            name = property_name(attribute)
            if isinstance(column_type, ManyToOne):
                target = self._resolve(entity, attribute)
                target_class = entity_class_name(target.entity)
                self._import_artifact(imports, target.entity, target_class)
                key = compound_name(attribute, target.identifier)
                lines.append(
                    f"    entity.{name} = None if data.{key} is None "
                    f"else session.get({target_class}, data.{key})"
                )
            else:
                lines.append(f"    entity.{name} = data.{name}")
            copied += 1
        if not copied:
            lines.append("    pass")
        lines.extend(["", ""])
        return lines

    def _copy_to_data(self, entity: Entity) -> list[str]:
        lines = [
            f"def copy_{function_prefix(entity)}_properties("
            f"entity: {entity_class_name(entity)}, data: {contract_name(entity)}) -> None:",
        ]
        for attribute in entity.attributes:
            name = property_name(attribute)
            if isinstance(require_column_type(entity, attribute), ManyToOne):
                target = self._resolve(entity, attribute)
                key = compound_name(attribute, target.identifier)
                identifier = property_name(target.identifier)
                lines.append(
                    f"    data.{key} = None if entity.{name} is None else entity.{name}.{identifier}"
                )
            else:
                lines.append(f"    data.{name} = entity.{name}")
        if not entity.attributes:
            lines.append("    pass")
        return lines

