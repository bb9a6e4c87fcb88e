"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from quiniela.api.middleware import setup_middleware
from quiniela.core.config import Settings
from quiniela.core.logging import setup_logging
from quiniela.services.instants import Clock, system_clock
from quiniela.services.quinielas import QuinielaCreator

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    creator: QuinielaCreator | None = None,
    clock: Clock = system_clock,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings; loaded from the environment if omitted.
        creator: Creation collaborator. Without one, ``POST /api/v1/quinielas``
            answers 503 while validation and preview still work.
        clock: Current-instant provider used for draft validation.
    """
    if settings is None:
        settings = Settings()

    if not settings.is_testing:
        setup_logging(level=settings.log_level, log_format=settings.log_format)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting Quiniela API (env=%s)", settings.app_env)
        if app.state.quiniela_creator is None:
            logger.warning("No quiniela creator configured; creation is disabled")
        yield
        logger.info("Shutting down Quiniela API")

    application = FastAPI(
        title="Quiniela API",
        description="Quiniela draft validation and creation",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.state.settings = settings
    application.state.quiniela_creator = creator
    application.state.clock = clock

    setup_middleware(application)
    _register_routes(application)

    return application


def _register_routes(app: FastAPI) -> None:
    """Register all API route modules."""
    from quiniela.api.routes.health import router as health_router
    from quiniela.api.routes.quinielas import router as quinielas_router

    app.include_router(health_router, tags=["health"])
    app.include_router(quinielas_router)


# Module-level app instance for uvicorn (uvicorn quiniela.main:app)
app = create_app()
