"""Trip endpoints - listing and creation."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from tripflow.api.auth import get_current_context
from tripflow.api.deps import get_gateway
from tripflow.db.context import RequestContext
from tripflow.db.gateway import TripGateway
from tripflow.models.trip import Trip, TripDraft

router = APIRouter(prefix="/trips", tags=["trips"])


class CreateTripRequest(BaseModel):
    """Request body for POST /trips. The owner is always the caller."""

    title: str = Field(..., min_length=1, description="Trip title")
    start_date: date
    end_date: date
    cover_image: str | None = None
    notes: str | None = None


async def get_owned_trip(gateway: TripGateway, ctx: RequestContext, trip_id: str) -> Trip:
    """Look up a trip owned by the caller.

    Raises:
        HTTPException: 404 if the caller has no trip with this ID
    """
    trips = await gateway.list_trips(ctx.user_id)
    for trip in trips:
        if trip.id == trip_id:
            return trip
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")


@router.get("", response_model=list[Trip])
async def list_trips(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    gateway: Annotated[TripGateway, Depends(get_gateway)],
) -> list[Trip]:
    """List the caller's trips."""
    return await gateway.list_trips(ctx.user_id)


@router.post("", response_model=Trip, status_code=status.HTTP_201_CREATED)
async def create_trip(
    request: CreateTripRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    gateway: Annotated[TripGateway, Depends(get_gateway)],
) -> Trip:
    """Create a trip owned by the caller.

    Returns:
        Stored trip (422 if start_date is after end_date)
    """
    try:
        draft = TripDraft(user_id=ctx.user_id, **request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return await gateway.create_trip(draft)
