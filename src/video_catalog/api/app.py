"""FastAPI application factory.

The app owns one Database and one TokenVerifier, both constructed from
Settings and attached to app.state. Every error leaving a route passes
through map_exception().
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Generator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from video_catalog.api.auth import TokenVerifier
from video_catalog.catalog.errors import (
    BadRequestError,
    CatalogError,
    field_errors_from_validation,
    map_exception,
)
from video_catalog.config import Settings
from video_catalog.db.repo import DbSession
from video_catalog.db.session import Database

logger = logging.getLogger(__name__)


def get_db_session(request: Request) -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    session = request.app.state.database.session()
    try:
        yield session
    finally:
        session.close()


def get_settings(request: Request) -> Settings:
    """Dependency returning the app's Settings."""
    return request.app.state.settings


def _error_response(exc: BaseException, debug: bool) -> JSONResponse:
    payload = map_exception(exc, debug=debug)
    return JSONResponse(status_code=payload.status_code, content=payload.body)


def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(CatalogError)
    async def catalog_error_handler(_request: Request, exc: CatalogError):
        return _error_response(exc, settings.debug)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_request: Request, exc: RequestValidationError):
        return _error_response(
            BadRequestError(field_errors_from_validation(list(exc.errors()))), settings.debug
        )

    @app.exception_handler(HTTPException)
    async def http_error_handler(_request: Request, exc: HTTPException):
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code, content={"message": detail}, headers=exc.headers
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Error in {request.method} {request.url.path}")
        return _error_response(exc, settings.debug)


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Optional settings. Defaults to Settings.from_env().
        database: Optional pre-built Database. Defaults to one built from
            settings.database_url.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings.from_env()
    if database is None:
        database = Database(settings.database_url)

    logging.getLogger("video_catalog").setLevel(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.init()
        try:
            yield
        finally:
            database.dispose()

    app = FastAPI(
        title="Video Catalog API",
        description="Catalog of video records with owner-only writes",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.token_verifier = TokenVerifier(settings.jwt_secret, settings.jwt_algorithm)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app, settings)

    # Include routes
    from video_catalog.api.routes import videos

    app.include_router(videos.router, prefix="/api")

    @app.get("/")
    def root():
        """Service banner."""
        return {"status": "ok", "message": "Video Catalog API Running"}

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app
