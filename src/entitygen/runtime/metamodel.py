"""
Metamodel attribute handles.

A generated ``<Entity>Entity_`` class exposes one ``SingularAttribute`` per
attribute of the persisted entity. Handles are resolved against a root (the
mapped class or an alias of it) to obtain SQL expressions.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy.orm import InstrumentedAttribute

O = TypeVar("O")
T = TypeVar("T")


class SingularAttribute(Generic[O, T]):
    """
    Handle of a single-valued attribute of a mapped class.

    Attributes:
        owner: The mapped class declaring the attribute
        name: Attribute name on the mapped class
        join_column: For a relationship, the attribute holding the foreign key
    """

    def __init__(self, owner: type[O], name: str, join_column: str | None = None) -> None:
        self.owner = owner
        self.name = name
        self.join_column = join_column

    @property
    def is_relationship(self) -> bool:
        return self.join_column is not None

    def of(self, root: Any = None) -> InstrumentedAttribute[Any]:
        """Attribute expression on ``root`` (defaults to the owner)."""
        return getattr(self.owner if root is None else root, self.name)

    def join_of(self, root: Any = None) -> InstrumentedAttribute[Any]:
        """
        Foreign-key column expression of a relationship on ``root``.

        Scalar attributes resolve to themselves.
        """
        if self.join_column is None:
            return self.of(root)
        return getattr(self.owner if root is None else root, self.join_column)

    def __repr__(self) -> str:
        return f"SingularAttribute({self.owner.__name__}.{self.name})"
