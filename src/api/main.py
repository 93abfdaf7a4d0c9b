"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool
from starlette.middleware.sessions import SessionMiddleware

from src.adapters.repository.postgres import run_migrations
from src.api.models import HealthResponse
from src.api.routes import router
from src.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

tags_metadata = [
    {
        "name": "signup",
        "description": "Account signup - create a user and start an authenticated session",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates database connection pool on startup
    - Runs migrations on startup
    - Closes connection pool on shutdown
    """
    settings: Settings = app.state.settings
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger.info("Starting application...")
    logger.info("Connecting to database...")

    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )

    logger.info("Running database migrations...")
    run_migrations(pool)

    # Store pool in app state for dependency injection
    app.state.pool = pool

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    pool.close()
    logger.info("Database connection pool closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    The session middleware signs the cookie with settings.secret_key; the
    cookie only ever carries the user id and the one-shot flash notice.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="signup",
        description="Account signup with hashed credentials and cookie sessions",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    # Read by the lifespan and by get_app_settings
    app.state.settings = settings
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age,
        same_site="lax",
    )
    app.include_router(router)

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request) -> HealthResponse:
        """
        Health check endpoint with database validation.

        Returns 200 OK if application and database are healthy.
        Raises exception if database connection fails.
        """
        pool = request.app.state.pool
        with pool.connection() as conn:
            conn.execute("SELECT 1")

        return HealthResponse(status="healthy")

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run("src.api.main:app", host=settings.host, port=settings.port)
