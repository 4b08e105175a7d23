"""
Default declarative base of generated persisted entities.
"""

from sqlalchemy.orm import DeclarativeBase


class EntityBase(DeclarativeBase):
    """Declarative base used when no other base is configured."""
