"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import Request

from backend.services.allocation_service import BedSchedulingService
from backend.utils.config import Settings, get_settings


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        settings = get_settings()
        request.app.state.settings = settings
    return settings


def get_scheduling_service(request: Request) -> BedSchedulingService:
    service = getattr(request.app.state, "scheduling_service", None)
    if service is None:
        service = BedSchedulingService(settings=get_app_settings(request))
        request.app.state.scheduling_service = service
    return service
