"""Async repository pattern for database access.

Provides a generic base repository with the CRUD operations every entity
needs. Reads return entities (or None); writes return a RepositoryResult,
which behaves as a boolean success flag and keeps the failure detail for
whoever collapses it into a response.

Example: AuthorRepository and BookRepository in verticals/bookstore.
"""

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from sqlalchemy import Select, exists, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.models.base import Base

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=Base)


# ---------------------------------------------------------------------------
# Write result
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RepositoryResult:
    """Outcome of a write. Truthy when the store accepted the change."""

    ok: bool
    error: str | None = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls) -> "RepositoryResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str) -> "RepositoryResult":
        return cls(ok=False, error=error)


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(Generic[ModelT]):
    """Generic async repository with find/exists/create/update/delete.

    Subclass and set `model` to your SQLAlchemy model::

        class BookRepository(BaseRepository[Book]):
            model = Book

            def _select(self):
                return super()._select().options(selectinload(Book.author))

    Store exceptions are never caught here; they propagate to the caller.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    def _select(self) -> Select:
        return select(self.model).order_by(self.model.id)

    # -- Reads --

    async def find_all(self) -> Sequence[ModelT]:
        """Every row, in ascending id order."""
        result = await self.session.execute(self._select())
        return result.scalars().all()

    async def find_by_id(self, item_id: int) -> ModelT | None:
        """A single row, or None when no row has that id."""
        if not self.model.is_storable_id(item_id):
            return None
        stmt = self._select().where(self.model.id == item_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def is_exists(self, item_id: int) -> bool:
        if not self.model.is_storable_id(item_id):
            return False
        stmt = select(exists().where(self.model.id == item_id))
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    # -- Writes --

    async def create(self, entity: ModelT) -> RepositoryResult:
        """Insert a new row; the store assigns its id."""
        self.session.add(entity)
        await self.save()
        if inspect(entity).persistent and entity.id is not None:
            return RepositoryResult.success()
        return RepositoryResult.failure(f"{self.model.__name__} was not persisted")

    async def update(self, entity: ModelT) -> RepositoryResult:
        """Replace the stored row that has the entity's id with the entity's values."""
        merged = await self.session.merge(entity)
        await self.save()
        if inspect(merged).persistent:
            return RepositoryResult.success()
        return RepositoryResult.failure(
            f"{self.model.__name__} id {entity.id} was not updated"
        )

    async def delete(self, entity: ModelT) -> RepositoryResult:
        """Remove a row previously loaded through this repository."""
        await self.session.delete(entity)
        await self.save()
        if inspect(entity).was_deleted:
            return RepositoryResult.success()
        return RepositoryResult.failure(
            f"{self.model.__name__} id {entity.id} was not deleted"
        )

    async def save(self) -> None:
        """Commit the current unit of work."""
        await self.session.commit()
