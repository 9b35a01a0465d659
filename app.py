"""
app.py - FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It wires the scheduling service and registers the router.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.controllers.schedule_controller import router as schedule_router
from backend.services.allocation_service import BedSchedulingService
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    Services are attached to app.state so controllers resolve them through
    dependencies instead of module globals.
    """
    settings = settings or get_settings()
    scheduling_service = BedSchedulingService(settings=settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Check configuration before accepting requests."""
        _startup(app)
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.include_router(schedule_router)

    app.state.settings = settings
    app.state.scheduling_service = scheduling_service

    return app


def _startup(app: FastAPI) -> None:
    """Fail fast on a bad default strategy or solver setting."""
    scheduling_service: BedSchedulingService = app.state.scheduling_service
    config = scheduling_service.build_config()
    logger.info(
        "Startup complete | default_strategy=%s | cp_sat_max_time_seconds=%s",
        config.strategy,
        config.cp_sat_max_time_seconds,
    )


# Module-level app object for uvicorn
app = create_app()
