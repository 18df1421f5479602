"""
FastAPI Application Factory.

Creates and configures the FastAPI application.
"""

import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from .. import __version__
from ..core.config import Settings, get_settings, load_settings
from ..core.logging import get_logger, setup_logging
from ..db.database import Database
from ..schemas.common import ErrorResponse
from .endpoints import health, users


logger = get_logger(__name__)

# Read by the uvicorn factory when started through run_server
ENV_FILE_VARIABLE = "USERAPI_ENV_FILE"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database on startup and release it on shutdown."""
    settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(
        level=settings.log.level,
        format=settings.log.format,
        log_file=settings.log.file,
    )

    if settings.database.synchronize:
        await database.create_all()

    logger.info(
        "Application started",
        database=settings.database.get_safe_url(),
        auth="api-key" if settings.server.api_key else "open",
    )
    try:
        yield
    finally:
        await database.dispose()
        logger.info("Application stopped")


async def _database_error_handler(request: Request, exc: OperationalError) -> JSONResponse:
    logger.error("Database error", path=request.url.path, error=str(exc.orig))
    body = ErrorResponse(
        error="DATABASE_UNAVAILABLE",
        message="The database could not be reached",
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(),
    )


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    title: str = "userapi",
    version: str = __version__,
    description: str = "CRUD REST API over the User entity",
    enable_cors: bool = True
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings (defaults to the cached settings)
        database: Database to use (defaults to one built from settings)
        title: API title
        version: API version
        description: API description
        enable_cors: Enable CORS middleware

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        env_file = os.getenv(ENV_FILE_VARIABLE)
        settings = load_settings(env_file) if env_file else get_settings()
    if database is None:
        database = Database.from_settings(settings)

    app = FastAPI(
        title=title,
        version=version,
        description=description,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    # CORS middleware - only enabled if origins are configured
    cors_origins = settings.server.get_cors_origins()
    if enable_cors and cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["X-API-Key", "Content-Type"],
        )

    app.add_exception_handler(OperationalError, _database_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)

    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": title,
            "version": version,
            "docs": "/docs",
            "health": "/health"
        }

    return app


def run_server(
    host: str = "127.0.0.1",
    port: int = 3000,
    reload: bool = False,
    env_file: Optional[str] = None
) -> None:
    """
    Run the API server.

    Args:
        host: Server host address
        port: Server port
        reload: Enable auto-reload for development
        env_file: `.env` file the application should load
    """
    import uvicorn

    if env_file:
        os.environ[ENV_FILE_VARIABLE] = env_file

    uvicorn.run(
        "userapi.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload
    )
