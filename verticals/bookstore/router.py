"""Book store API router: CRUD endpoints for authors and books.

Follows the standard router pattern:
- Controllers built per request from injected repository, logger and mapper
- Request bodies taken as raw JSON; controllers validate them explicitly
- ControllerResult turned into a JSON, plain-text or empty response
"""

from typing import Any, Callable

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from core.observability.logging_setup import LoggerService
from patterns.controller import ControllerResult, CrudController
from patterns.mapper import Mapper
from verticals.bookstore.controllers import AuthorsController, BooksController
from verticals.bookstore.mapping import get_mapper
from verticals.bookstore.repository import (
    AuthorRepository,
    BookRepository,
    get_author_repository,
    get_book_repository,
)


# ============================================================================
# Dependencies
# ============================================================================

def get_logger_service(request: Request) -> LoggerService:
    """The process-wide logger created by the app factory."""
    return request.app.state.logger_service


def get_authors_controller(
    repo: AuthorRepository = Depends(get_author_repository),
    logger: LoggerService = Depends(get_logger_service),
    mapper: Mapper = Depends(get_mapper),
) -> AuthorsController:
    return AuthorsController(repo, logger, mapper)


def get_books_controller(
    repo: BookRepository = Depends(get_book_repository),
    logger: LoggerService = Depends(get_logger_service),
    mapper: Mapper = Depends(get_mapper),
) -> BooksController:
    return BooksController(repo, logger, mapper)


def to_response(result: ControllerResult) -> Response:
    """Render a ControllerResult as an HTTP response."""
    if result.body is None:
        return Response(status_code=result.status_code)
    if isinstance(result.body, str):
        return PlainTextResponse(result.body, status_code=result.status_code)
    return JSONResponse(result.body, status_code=result.status_code)


# ============================================================================
# CRUD routes
# ============================================================================

def crud_router(
    controller_dependency: Callable[..., CrudController], tag: str
) -> APIRouter:
    """Build the five CRUD routes over the controller the dependency yields."""
    router = APIRouter(tags=[tag])

    @router.get("")
    async def list_items(controller: CrudController = Depends(controller_dependency)):
        """List every record."""
        return to_response(await controller.list())

    @router.get("/{item_id}")
    async def get_item(
        item_id: int, controller: CrudController = Depends(controller_dependency)
    ):
        """Get one record by id."""
        return to_response(await controller.get(item_id))

    @router.post("", status_code=201)
    async def create_item(
        payload: Any = Body(None),
        controller: CrudController = Depends(controller_dependency),
    ):
        """Create a record."""
        return to_response(await controller.create(payload))

    @router.put("/{item_id}", status_code=204)
    async def update_item(
        item_id: int,
        payload: Any = Body(None),
        controller: CrudController = Depends(controller_dependency),
    ):
        """Replace a record."""
        return to_response(await controller.update(item_id, payload))

    @router.delete("/{item_id}", status_code=204)
    async def delete_item(
        item_id: int, controller: CrudController = Depends(controller_dependency)
    ):
        """Delete a record."""
        return to_response(await controller.delete(item_id))

    return router


router = APIRouter()
router.include_router(crud_router(get_authors_controller, "Authors"), prefix="/authors")
router.include_router(crud_router(get_books_controller, "Books"), prefix="/books")
