"""SQLAlchemy models for the book store.

Each model inherits from Base and uses IdentityMixin for its store-assigned
integer key. Reads and writes go through the object mapper in
verticals/bookstore/mapping.py; the models carry no serialisation of their own.

Deleting an author never touches its books: the ORM leaves book rows alone
and the foreign key decides whether the delete is allowed.
"""

from typing import Optional

from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.models.base import Base, IdentityMixin


class Author(IdentityMixin, Base):
    """An author of zero or more books."""

    __tablename__ = "authors"

    firstname: Mapped[str] = mapped_column(String(50), nullable=False)
    lastname: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    books: Mapped[list["Book"]] = relationship(
        back_populates="author", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"Author(id={self.id!r}, firstname={self.firstname!r}, lastname={self.lastname!r})"


class Book(IdentityMixin, Base):
    """A book in the catalog."""

    __tablename__ = "books"

    title: Mapped[str] = mapped_column(String(150), nullable=False)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    isbn: Mapped[str | None] = mapped_column(String(20), nullable=True)
    summary: Mapped[str | None] = mapped_column(String(500), nullable=True)
    image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    author_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("authors.id"), nullable=True, index=True
    )

    author: Mapped[Optional["Author"]] = relationship(back_populates="books")

    def __repr__(self) -> str:
        return f"Book(id={self.id!r}, title={self.title!r}, author_id={self.author_id!r})"


class User(IdentityMixin, Base):
    """Login credentials. Managed outside the CRUD API."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(512), nullable=False)
