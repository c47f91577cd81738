import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.app.api.v1 import clients
from src.app.config import get_settings
from src.app.containers import Container
from src.app.logging import configure_logging
from src.shared.exceptions import PersistenceError

# Configure logging at module load time
_settings = get_settings()
configure_logging(_settings.logging.level, _settings.logging.format)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def default_lifespan(app: FastAPI):
    """Default application lifespan manager - creates the schema on startup and releases the pool on shutdown."""
    container: Container = app.state.container
    config = container.config()
    logger.info("Starting %s (store backend: %s)...", config.app_name, config.store_backend)

    db = container.database() if config.uses_database else None
    if db is not None and config.database.create_schema:
        await db.create_schema()
        logger.info("Database initialized successfully")

    yield

    logger.info("Shutting down %s...", config.app_name)
    if db is not None:
        await db.dispose()


def _field_name(loc: tuple) -> str:
    # ("body", "birth_date") -> "birth_date", ("query", "name") -> "name"
    parts = [str(part) for part in loc[1:]] or [str(part) for part in loc]
    return ".".join(parts)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report unparseable request data with the same shape as registry validation errors."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        errors.setdefault(_field_name(tuple(error["loc"])), []).append(error["msg"])
    logger.error("Rejected malformed request to %s: %s", request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": {"message": "Request validation failed", "errors": errors}},
    )


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.exception("Store failure while handling %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app(container: Container, lifespan=default_lifespan) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        container: DI container providing configuration and services.
        lifespan: Optional lifespan context manager. Defaults to default_lifespan.

    Returns:
        Configured FastAPI application.
    """
    container.wire(modules=[
        "src.app.api.v1.clients",
    ])

    config = container.config()

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        lifespan=lifespan,
    )

    # Attach container to app state for access in lifespan and routes
    app.state.container = container

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)

    # Include routers
    app.include_router(clients.router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {"message": f"Welcome to {config.app_name}"}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


container = Container()
app = create_app(container=container)
