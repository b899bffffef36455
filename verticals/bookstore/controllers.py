"""Book store controllers: one CrudController per entity."""

from patterns.controller import CrudController
from verticals.bookstore.models.db_models import Author, Book
from verticals.bookstore.models.schemas import (
    AuthorCreateDTO,
    AuthorDTO,
    AuthorUpdateDTO,
    BookCreateDTO,
    BookDTO,
    BookUpdateDTO,
)


class AuthorsController(CrudController[Author]):
    """Endpoint used to interact with the authors in the book store's database."""

    name = "Authors"
    entity = Author
    read_dto = AuthorDTO
    create_dto = AuthorCreateDTO
    update_dto = AuthorUpdateDTO


class BooksController(CrudController[Book]):
    """Interacts with the books table."""

    name = "Books"
    entity = Book
    read_dto = BookDTO
    create_dto = BookCreateDTO
    update_dto = BookUpdateDTO
