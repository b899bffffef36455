"""Test the async repositories against an in-memory SQLite store."""
import pytest
from sqlalchemy.exc import IntegrityError

from patterns.repository import RepositoryResult
from verticals.bookstore.models.db_models import Author, Book
from verticals.bookstore.repository import AuthorRepository, BookRepository


def test_repository_result_is_boolean_like():
    assert RepositoryResult.success()
    failed = RepositoryResult.failure("constraint violated")
    assert not failed
    assert failed.error == "constraint violated"


@pytest.mark.asyncio
async def test_create_assigns_ids_in_order(session):
    repo = AuthorRepository(session)
    first = Author(firstname="A", lastname="One")
    second = Author(firstname="B", lastname="Two")

    assert await repo.create(first)
    assert await repo.create(second)

    assert first.id is not None
    assert second.id > first.id
    assert [a.id for a in await repo.find_all()] == [first.id, second.id]


@pytest.mark.asyncio
async def test_find_by_id_and_exists(session):
    repo = AuthorRepository(session)
    author = Author(firstname="A", lastname="B")
    await repo.create(author)

    assert (await repo.find_by_id(author.id)).lastname == "B"
    assert await repo.is_exists(author.id)
    assert await repo.find_by_id(author.id + 100) is None
    assert not await repo.is_exists(author.id + 100)


@pytest.mark.asyncio
async def test_update_replaces_row(session_factory):
    async with session_factory() as session:
        author = Author(firstname="Old", lastname="Name")
        await AuthorRepository(session).create(author)
        author_id = author.id

    async with session_factory() as session:
        result = await AuthorRepository(session).update(
            Author(id=author_id, firstname="New", lastname="Name")
        )
        assert result

    async with session_factory() as session:
        stored = await AuthorRepository(session).find_by_id(author_id)
        assert stored.firstname == "New"


@pytest.mark.asyncio
async def test_delete_removes_row(session_factory):
    async with session_factory() as session:
        author = Author(firstname="A", lastname="B")
        await AuthorRepository(session).create(author)
        author_id = author.id

    async with session_factory() as session:
        repo = AuthorRepository(session)
        loaded = await repo.find_by_id(author_id)
        assert await repo.delete(loaded)
        assert not await repo.is_exists(author_id)


@pytest.mark.asyncio
async def test_books_load_their_author(session_factory):
    async with session_factory() as session:
        author = Author(firstname="Jane", lastname="Austen")
        await AuthorRepository(session).create(author)
        book = Book(title="Emma", isbn="9780141439587", author_id=author.id)
        assert await BookRepository(session).create(book)
        assert book.author.lastname == "Austen"
        book_id = book.id

    async with session_factory() as session:
        repo = BookRepository(session)
        loaded = await repo.find_by_id(book_id)
        assert loaded.author.firstname == "Jane"
        assert [b.author.id for b in await repo.find_all()] == [author.id]


@pytest.mark.asyncio
@pytest.mark.parametrize("item_id", [2**31, 99999999999999999999, 0, -1])
async def test_ids_outside_the_column_range_are_never_found(session, item_id):
    repo = AuthorRepository(session)
    await repo.create(Author(firstname="A", lastname="B"))

    assert await repo.find_by_id(item_id) is None
    assert not await repo.is_exists(item_id)


@pytest.mark.asyncio
async def test_deleting_an_author_leaves_its_books_untouched(session_factory):
    async with session_factory() as session:
        author = Author(firstname="Jane", lastname="Austen")
        await AuthorRepository(session).create(author)
        book = Book(title="Emma", isbn="9780141439587", author_id=author.id)
        await BookRepository(session).create(book)
        author_id, book_id = author.id, book.id

    async with session_factory() as session:
        repo = AuthorRepository(session)
        loaded = await repo.find_by_id(author_id)
        with pytest.raises(IntegrityError):
            await repo.delete(loaded)

    async with session_factory() as session:
        stored = await BookRepository(session).find_by_id(book_id)
        assert stored.author_id == author_id
        assert await AuthorRepository(session).is_exists(author_id)
