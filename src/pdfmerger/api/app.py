"""FastAPI application factory."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager, suppress
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pdfmerger import __version__, logger
from pdfmerger.api.routes import router
from pdfmerger.exceptions import MergeError, PackageError, StorageError
from pdfmerger.logging import configure_logging
from pdfmerger.settings import Settings, get_settings
from pdfmerger.storage import UploadStore
from pdfmerger.sweeper import sweep_periodically

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


def _error(status_code: int, message: str) -> JSONResponse:
    """Build the JSON error payload shared by every endpoint."""
    return JSONResponse(status_code=status_code, content={"error": message})


def _failure_message(path: str, exc: Exception) -> str:
    """Return the client message for an unexpected failure on `path`."""
    if path == "/api/merge":
        return f"Merge failed: {exc}"
    if path == "/api/upload":
        return "Upload failed"
    return "Internal server error"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run the expiry sweep for the lifetime of the application."""
    settings: Settings = app.state.settings
    sweep_task: asyncio.Task[None] | None = None
    if settings.sweep_enabled:
        sweep_task = asyncio.create_task(
            sweep_periodically(
                app.state.store,
                interval_seconds=settings.sweep_interval_seconds,
                max_age_seconds=settings.file_ttl_seconds,
            ),
        )
    try:
        yield
    finally:
        if sweep_task is not None:
            sweep_task.cancel()
            with suppress(asyncio.CancelledError):
                await sweep_task


def _register_exception_handlers(app: FastAPI) -> None:
    """Answer every failure as ``{"error": message}``."""

    @app.exception_handler(StorageError)
    async def _storage_error(_: Request, exc: StorageError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(MergeError)
    async def _merge_error(_: Request, exc: MergeError) -> JSONResponse:
        logger.warning("Merge rejected", extra={"reason": str(exc)})
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(PackageError)
    async def _package_error(_: Request, exc: PackageError) -> JSONResponse:
        logger.error("Request failed", extra={"error": str(exc)})
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def _validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Invalid request body", extra={"errors": len(exc.errors())})
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body")

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unexpected request failure", extra={"path": request.url.path})
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, _failure_message(request.url.path, exc))


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the API application.

    Args:
        settings (Settings | None): Runtime settings, defaults to `get_settings()`.

    Returns:
        FastAPI: Configured application.
    """
    settings = settings or get_settings()
    configure_logging(settings=settings)

    app = FastAPI(
        title="PDF Merger",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = UploadStore(root=settings.upload_path)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": __version__}

    _register_exception_handlers(app)
    app.include_router(router)
    return app
