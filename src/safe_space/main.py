# src/safe_space/main.py
"""Main entry point for the Safe Space application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from safe_space.api.handlers import register_exception_handlers
from safe_space.api.v1 import (
    admin_router,
    comments_router,
    posts_router,
    reactions_router,
    reports_router,
    users_router,
)
from safe_space.core.identity import IdentityVerifier
from safe_space.core.settings import Settings, get_settings
from safe_space.db.session import Database

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the API application.

    Args:
        settings: Configuration; read from the environment when omitted
        database: Backing store; built from `settings.database_url` when omitted

    Returns:
        A FastAPI app with its settings, database and identity verifier on
        `app.state`
    """
    settings = settings or get_settings()
    database = database or Database.from_settings(settings)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Anonymous peer-support community API",
        version=settings.app_version,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.identity_verifier = IdentityVerifier(settings)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Add GZip middleware for compression
    app.add_middleware(GZipMiddleware)

    register_exception_handlers(app)

    # Include API routers
    app.include_router(posts_router, prefix="/api/v1")
    app.include_router(comments_router, prefix="/api/v1")
    app.include_router(reactions_router, prefix="/api/v1")
    app.include_router(reports_router, prefix="/api/v1")
    app.include_router(admin_router, prefix="/api/v1")
    app.include_router(users_router, prefix="/api/v1")

    @app.on_event("startup")
    async def on_startup() -> None:
        if settings.auto_create_tables:
            database.create_tables()
        logger.info("%s %s started", settings.app_name, settings.app_version)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        database.dispose()

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with basic information about the API."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("safe_space.main:app", host="0.0.0.0", port=8000, reload=get_settings().debug)
