"""Book store repositories: async database access for authors and books.

Extends BaseRepository with the eager loading the book store needs: books
always come back with their author, so mapping them never triggers a lazy
load outside the session's async context.
"""

from fastapi import Depends
from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.database import get_session
from patterns.repository import BaseRepository, RepositoryResult
from verticals.bookstore.models.db_models import Author, Book


# ---------------------------------------------------------------------------
# Author repository
# ---------------------------------------------------------------------------

class AuthorRepository(BaseRepository[Author]):
    """Repository for author CRUD."""

    model = Author


# ---------------------------------------------------------------------------
# Book repository
# ---------------------------------------------------------------------------

class BookRepository(BaseRepository[Book]):
    """Repository for book CRUD; reads include the owning author."""

    model = Book

    def _select(self) -> Select:
        return super()._select().options(selectinload(Book.author))

    async def create(self, entity: Book) -> RepositoryResult:
        result = await super().create(entity)
        if result:
            await self.session.refresh(entity, attribute_names=["author"])
        return result


# ---------------------------------------------------------------------------
# FastAPI dependency factories
# ---------------------------------------------------------------------------

def get_author_repository(
    session: AsyncSession = Depends(get_session),
) -> AuthorRepository:
    """FastAPI dependency for AuthorRepository."""
    return AuthorRepository(session)


def get_book_repository(
    session: AsyncSession = Depends(get_session),
) -> BookRepository:
    """FastAPI dependency for BookRepository."""
    return BookRepository(session)
