"""Book store mapping profile.

Registers every entity <-> DTO map the controllers use. Entity columns keep
the store's names (``firstname``); DTOs use Python names (``first_name``).
Read DTOs resolve the column names through their validation aliases; write
maps name the DTO field each column is read from.
"""

from patterns.mapper import Mapper
from verticals.bookstore.models.db_models import Author, Book
from verticals.bookstore.models.schemas import (
    AuthorCreateDTO,
    AuthorDTO,
    AuthorUpdateDTO,
    BookCreateDTO,
    BookDTO,
    BookUpdateDTO,
)

_AUTHOR_COLUMNS = {"firstname": "first_name", "lastname": "last_name"}


def configure_mapper(mapper: Mapper) -> Mapper:
    """Register the book store maps on ``mapper`` and return it."""
    # entity -> read DTO
    mapper.register(Author, AuthorDTO)
    mapper.register(Book, BookDTO)

    # write DTOs -> entity
    mapper.register(AuthorCreateDTO, Author, **_AUTHOR_COLUMNS)
    mapper.register(AuthorUpdateDTO, Author, **_AUTHOR_COLUMNS)
    mapper.register(BookCreateDTO, Book)
    mapper.register(BookUpdateDTO, Book)

    return mapper


mapper = configure_mapper(Mapper())


def get_mapper() -> Mapper:
    """FastAPI dependency for the shared, stateless mapper."""
    return mapper
