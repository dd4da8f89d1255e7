"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version as get_version

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from todolist.config.settings import get_settings
from todolist.core.exceptions import APIError
from todolist.core.logging import setup_logging
from todolist.core.middleware import (
    CorrelationIdMiddleware,
    RequestLoggingMiddleware,
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
    correlation_id_var,
)
from todolist.db.session import get_engine, get_session_factory
from todolist.health.router import router as health_router
from todolist.views.router import router as views_router
from todolist.views.templating import STATIC_DIR

logger = logging.getLogger(__name__)


def get_app_version() -> str:
    """Get application version from package metadata."""
    try:
        return get_version("todolist")
    except PackageNotFoundError:
        return "0.0.0-dev"


OPENAPI_TAGS = [
    {
        "name": "lists",
        "description": "Today list and named lists (server-rendered HTML)",
    },
    {
        "name": "health",
        "description": "Health check endpoints for liveness and readiness probes",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown.

    An unreachable store is logged but does not stop startup; requests that
    need the store fail individually until it comes back.
    """
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Server starting on port %d", settings.port)

    try:
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
        logger.info("Successfully connected to the store")
    except Exception as e:
        logger.error("Store connection error: %s", e)

    yield

    logger.info("Application shutting down")
    try:
        await get_engine().dispose()
        logger.info("Database engine disposed successfully")
    except Exception as e:
        logger.error("Error disposing database engine: %s", e)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle application errors with correlation ID for debugging."""
    correlation_id = correlation_id_var.get()
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.message,
            "error": type(exc).__name__,
            "correlation_id": correlation_id,
            **exc.details,
        },
        headers={"X-Correlation-ID": correlation_id} if correlation_id else None,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle malformed form posts with correlation ID."""
    correlation_id = correlation_id_var.get()
    # ctx may contain non-serializable objects
    errors = [
        {
            "type": error.get("type"),
            "loc": error.get("loc"),
            "msg": error.get("msg"),
            "input": error.get("input"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={
            "detail": errors,
            "error": "ValidationError",
            "correlation_id": correlation_id,
        },
        headers={"X-Correlation-ID": correlation_id} if correlation_id else None,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions (store errors included) with a logged 500."""
    correlation_id = correlation_id_var.get()
    logger.exception(
        "Unhandled exception",
        extra={"correlation_id": correlation_id, "path": request.url.path},
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error": "InternalServerError",
            "correlation_id": correlation_id,
        },
        headers={"X-Correlation-ID": correlation_id} if correlation_id else None,
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    # OpenAPI docs only in debug mode
    docs_url = "/docs" if settings.debug else None
    redoc_url = "/redoc" if settings.debug else None
    openapi_url = "/openapi.json" if settings.debug else None

    app = FastAPI(
        title=settings.app_name,
        version=get_app_version(),
        debug=settings.debug,
        lifespan=lifespan,
        docs_url=docs_url,
        redoc_url=redoc_url,
        openapi_url=openapi_url,
        openapi_tags=OPENAPI_TAGS,
    )

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type", "X-Correlation-ID"],
            expose_headers=["X-Correlation-ID", "X-Process-Time"],
        )

    # First added = innermost
    app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.max_request_size)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RequestLoggingMiddleware, expose_timing=settings.expose_timing_header
    )
    app.add_middleware(CorrelationIdMiddleware)

    app.add_exception_handler(APIError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError,
        validation_error_handler,  # pyright: ignore[reportArgumentType]
    )
    app.add_exception_handler(
        Exception,
        generic_exception_handler,  # pyright: ignore[reportArgumentType]
    )

    # Static and health routes go before the catch-all list route
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    app.include_router(health_router)
    app.include_router(views_router)

    return app


app = create_app()


def main() -> None:
    """Run the application using uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "todolist.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
