"""Async SQLAlchemy database engine and session management.

Provides the async database layer with:
- Connection pooling (configurable pool_size/max_overflow)
- FastAPI dependency injection via get_session()
- One session per request; repositories commit their own unit of work
- PostgreSQL (asyncpg) in production, SQLite (aiosqlite) for local runs and tests
"""

from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import DatabaseSettings, Settings

# ---------------------------------------------------------------------------
# Engine & session factory
# ---------------------------------------------------------------------------


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> AsyncEngine:
    """SQLite ignores REFERENCES clauses unless each connection opts in."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def build_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create an engine, leaving pool sizing to SQLite's own pool classes."""
    if settings.is_sqlite:
        return enable_sqlite_foreign_keys(
            create_async_engine(settings.url, echo=settings.echo)
        )

    return create_async_engine(
        settings.url,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        echo=settings.echo,
        pool_pre_ping=True,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
    )


engine = build_engine(Settings.from_env().database)
async_session_factory = build_session_factory(engine)


def configure_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Point the module engine and session factory at ``settings.url``.

    Called by the app factory so that an explicit ``Settings`` object decides
    which database requests talk to. The previous engine is left for the
    garbage collector; it has not opened connections unless it was used.
    """
    global engine, async_session_factory

    engine = build_engine(settings)
    async_session_factory = build_session_factory(engine)
    return engine


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session for the duration of one request.

    Writes are committed by the repository that made them; anything left
    uncommitted is rolled back when the session closes.

    Usage in FastAPI routes::

        @router.get("/items")
        async def list_items(session: AsyncSession = Depends(get_session)):
            result = await session.execute(select(Item))
            return result.scalars().all()
    """
    async with async_session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# Lifecycle hooks
# ---------------------------------------------------------------------------

async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create database tables from models (dev/test only)."""
    from core.models.base import Base

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of the connection pool on shutdown."""
    await engine.dispose()
