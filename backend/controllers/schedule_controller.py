"""HTTP controller layer for bed scheduling."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from backend.controllers.dependencies import get_app_settings, get_scheduling_service
from backend.domain.constraints import ValidationError, validate_guests
from backend.domain.models import Guest
from backend.services.allocation_service import BedSchedulingService
from backend.services.occupancy_service import build_occupancy_frame, minimum_beds_required
from backend.utils.config import Settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["scheduling"])


class GuestPayload(BaseModel):
    """Guest stay as received on the wire; interval rules are checked by the service."""

    id: int
    start: int
    end: int

    def to_domain(self) -> Guest:
        return Guest(id=self.id, start=self.start, end=self.end)


class ScheduleBedsRequest(BaseModel):
    bed_count: int = Field(ge=0)
    guests: list[GuestPayload] = Field(default_factory=list)
    strategy: Literal["graph", "interval", "cp_sat"] | None = None


class BedScheduleResponse(BaseModel):
    bed_id: int = Field(gt=0)
    guest_ids: list[int]
    hosted_count: int = Field(ge=0)


class ScheduleBedsResponse(BaseModel):
    strategy: str
    schedules: list[BedScheduleResponse]
    unscheduled_guest_ids: list[int]
    minimum_beds_required: int = Field(ge=0)


class OccupancyProfileRequest(BaseModel):
    guests: list[GuestPayload] = Field(default_factory=list)


class OccupancyRowResponse(BaseModel):
    date: int
    check_ins: int = Field(ge=0)
    check_outs: int = Field(ge=0)
    occupancy: int = Field(ge=0)


class OccupancyProfileResponse(BaseModel):
    minimum_beds_required: int = Field(ge=0)
    profile: list[OccupancyRowResponse]


class HealthResponse(BaseModel):
    status: str
    app_name: str
    app_version: str


@router.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        app_name=settings.app_name,
        app_version=settings.app_version,
    )


@router.post(
    "/schedule_beds",
    response_model=ScheduleBedsResponse,
    status_code=status.HTTP_200_OK,
)
async def schedule_beds(
    payload: ScheduleBedsRequest,
    service: BedSchedulingService = Depends(get_scheduling_service),
) -> ScheduleBedsResponse:
    """Allocate guests to beds, fullest bed first."""
    guests = [item.to_domain() for item in payload.guests]
    try:
        result = service.schedule(
            bed_count=payload.bed_count,
            guests=guests,
            strategy=payload.strategy,
        )
        return ScheduleBedsResponse(
            strategy=result.strategy,
            schedules=[
                BedScheduleResponse(
                    bed_id=schedule.bed_id,
                    guest_ids=schedule.guest_ids,
                    hosted_count=schedule.hosted_count,
                )
                for schedule in result.schedules
            ],
            unscheduled_guest_ids=result.unscheduled_guest_ids,
            minimum_beds_required=minimum_beds_required(guests),
        )
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected scheduling failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to schedule beds",
        ) from exc


@router.post(
    "/occupancy_profile",
    response_model=OccupancyProfileResponse,
    status_code=status.HTTP_200_OK,
)
async def occupancy_profile(payload: OccupancyProfileRequest) -> OccupancyProfileResponse:
    """Report per-date occupancy and the bed count needed to host everyone."""
    guests = [item.to_domain() for item in payload.guests]
    try:
        validate_guests(guests)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    frame = build_occupancy_frame(guests)
    return OccupancyProfileResponse(
        minimum_beds_required=minimum_beds_required(guests),
        profile=[
            OccupancyRowResponse(**{key: int(value) for key, value in row.items()})
            for row in frame.to_dict(orient="records")
        ],
    )
