"""Book Store API — FastAPI entry point.

Builds the app: settings, logging, middleware, routers and lifecycle hooks.
The book store router is mounted under /api.

Run with::

    uvicorn api.main:app
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.middleware import RequestLoggingMiddleware
from core.config import Settings
from core.database import close_db, configure_engine, init_db
from core.observability.logging_setup import LoggerService, configure_logging
from verticals.bookstore.router import router as bookstore_router


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown hooks."""
    settings: Settings = app.state.settings
    configure_logging(settings)
    if not settings.is_production:
        await init_db()

    app.state.logger_service.log_info(
        f"Book Store API started in {settings.environment} environment"
    )
    yield
    app.state.logger_service.log_info("Book Store API shutting down")
    await close_db()


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------

async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed path ids and undecodable bodies are client errors (400)."""
    errors = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    request.app.state.logger_service.log_warn(
        f"{request.method} {request.url.path}: Rejected request: {errors}"
    )
    return JSONResponse({"errors": errors}, status_code=400)


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI application; the entry point owns the logger.

    ``settings.database`` decides which store the request sessions use.
    """
    settings = settings or Settings.from_env()
    configure_engine(settings.database)

    app = FastAPI(
        title="Book Store API",
        description="CRUD API over the book store's authors and books",
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.logger_service = LoggerService()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(bookstore_router, prefix="/api")

    # -----------------------------------------------------------------------
    # Health & root
    # -----------------------------------------------------------------------

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": settings.version}

    @app.get("/")
    async def root():
        return {
            "name": "Book Store API",
            "version": settings.version,
            "docs": "/docs",
            "resources": ["/api/authors", "/api/books"],
        }

    return app


app = create_app()
