"""Base model and mixins for all SQLAlchemy models.

Provides:
- Base: Declarative base class for all models
- IdentityMixin: Adds an integer primary key assigned by the store

Identity values are generated by the database on insert and never change
afterwards; nothing in the application writes to ``id`` directly.
"""

from sqlalchemy import Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Largest value a 32-bit INTEGER id column can hold.
MAX_ID = 2**31 - 1


class Base(DeclarativeBase):
    """Declarative base for all book store models."""
    pass


class IdentityMixin:
    """Mixin providing a store-assigned integer primary key."""

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    @classmethod
    def is_storable_id(cls, item_id: int) -> bool:
        """Whether ``item_id`` fits the id column; larger ids can never exist."""
        return 1 <= item_id <= MAX_ID
