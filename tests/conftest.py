"""Shared fixtures: in-memory SQLite store, sessions and an HTTP client."""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from api.main import create_app
from core.config import DatabaseSettings, Settings
from core.database import (
    build_session_factory,
    enable_sqlite_foreign_keys,
    get_session,
    init_db,
)
from patterns.repository import RepositoryResult


class RecordingLogger:
    """LoggerService stand-in that keeps (level, message) pairs."""

    def __init__(self):
        self.entries: list[tuple[str, str]] = []

    def log_info(self, message: str) -> None:
        self.entries.append(("info", message))

    def log_warn(self, message: str) -> None:
        self.entries.append(("warn", message))

    def log_error(self, message: str) -> None:
        self.entries.append(("error", message))

    def levels(self) -> list[str]:
        return [level for level, _ in self.entries]


class InMemoryRepository:
    """Dict-backed repository honouring the CRUD repository contract."""

    def __init__(self):
        self.rows: dict[int, object] = {}
        self.calls: list[str] = []
        self._next_id = 1
        self.fail_writes = False

    async def find_all(self):
        self.calls.append("find_all")
        return [self.rows[key] for key in sorted(self.rows)]

    async def find_by_id(self, item_id):
        self.calls.append("find_by_id")
        return self.rows.get(item_id)

    async def is_exists(self, item_id):
        self.calls.append("is_exists")
        return item_id in self.rows

    async def create(self, entity):
        self.calls.append("create")
        if self.fail_writes:
            return RepositoryResult.failure("disk full")
        entity.id = self._next_id
        self._next_id += 1
        self.rows[entity.id] = entity
        return RepositoryResult.success()

    async def update(self, entity):
        self.calls.append("update")
        if self.fail_writes:
            return RepositoryResult.failure("disk full")
        self.rows[entity.id] = entity
        return RepositoryResult.success()

    async def delete(self, entity):
        self.calls.append("delete")
        if self.fail_writes:
            return RepositoryResult.failure("disk full")
        del self.rows[entity.id]
        return RepositoryResult.success()


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def memory_repository():
    return InMemoryRepository()


@pytest_asyncio.fixture
async def engine():
    engine = enable_sqlite_foreign_keys(
        create_async_engine(
            "sqlite+aiosqlite://",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def app(session_factory):
    app = create_app(Settings(database=DatabaseSettings(url="sqlite+aiosqlite://")))

    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
