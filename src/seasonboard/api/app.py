# src/seasonboard/api/app.py
"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import ConfigError, SeasonboardConfig, get_default_config_path, load_config
from ..db.session import create_session, init_db

logger = logging.getLogger(__name__)

# Global config - set on startup
_config: SeasonboardConfig | None = None


def get_config() -> SeasonboardConfig:
    """Get the current configuration."""
    if _config is None:
        raise RuntimeError("Configuration not initialized")
    return _config


def configure(config: SeasonboardConfig) -> None:
    """Use an already loaded configuration instead of the default file."""
    global _config
    config.validate()
    init_db(config.db_path)
    _config = config


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    global _config

    if _config is None:
        try:
            configure(load_config(get_default_config_path()))
        except ConfigError as e:
            # Log but allow app to start in degraded mode
            logger.warning(f"Config not loaded: {e}")

    yield

    _config = None


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Error handling {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Seasonboard API",
        description="Season win tallies with solar Hijri month subtotals",
        version=__version__,
        lifespan=lifespan,
    )

    # Configure CORS for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://localhost:3000",
            "http://127.0.0.1:5173",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Exception, _unhandled_error)

    _register_routes(app)

    return app


def _register_routes(app: FastAPI) -> None:
    """Register all API routes."""
    from .routers import scoreboard_router

    app.include_router(scoreboard_router)

    @app.get("/")
    async def root():
        """API information."""
        return {
            "name": "Seasonboard API",
            "version": __version__,
            "docs": "/docs",
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        db_status = "not_initialized"

        try:
            session = create_session()
            session.close()
            db_status = "connected"
        except RuntimeError:
            pass

        return {
            "status": "healthy",
            "version": __version__,
            "database": db_status,
        }
