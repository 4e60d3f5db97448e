"""Itinerary endpoints - item CRUD, day view and AI generation."""

import datetime as dt
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, Field

from tripflow.api.auth import get_current_context
from tripflow.api.deps import get_gateway, get_generator
from tripflow.api.routes.trips import get_owned_trip
from tripflow.db.context import RequestContext
from tripflow.db.gateway import TripGateway
from tripflow.itinerary.controller import ItemDateOutOfRangeError, ensure_within_trip, persist_drafts
from tripflow.itinerary.grouping import group_by_day
from tripflow.llm.client import ItineraryGenerator
from tripflow.models.common import ActivityType
from tripflow.models.itinerary import (
    TIME_PATTERN,
    DayPlan,
    ItineraryItem,
    ItineraryItemDraft,
    ItineraryItemPatch,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips/{trip_id}", tags=["itinerary"])

GENERATION_FAILED_MESSAGE = "Failed to generate itinerary. Check API key or try again."


class CreateItemRequest(BaseModel):
    """Request body for POST /trips/{trip_id}/items."""

    date: dt.date
    time: str | None = Field(None, pattern=TIME_PATTERN)
    type: ActivityType = ActivityType.ACTIVITY
    title: str = ""
    location: str | None = None
    notes: str | None = None
    cost: float | None = None
    currency: str | None = None
    is_booked: bool | None = None
    details: dict[str, Any] = Field(default_factory=dict)


class GenerateRequest(BaseModel):
    """Request body for POST /trips/{trip_id}/generate."""

    prompt: str = Field(..., min_length=1, description="Free-text trip request")


@router.get("/items", response_model=list[ItineraryItem])
async def list_items(
    trip_id: str,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    gateway: Annotated[TripGateway, Depends(get_gateway)],
) -> list[ItineraryItem]:
    """List a trip's items ordered by date and time."""
    trip = await get_owned_trip(gateway, ctx, trip_id)
    return await gateway.list_itinerary(trip.id)


@router.post("/items", response_model=ItineraryItem, status_code=status.HTTP_201_CREATED)
async def add_item(
    trip_id: str,
    request: CreateItemRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    gateway: Annotated[TripGateway, Depends(get_gateway)],
) -> ItineraryItem:
    """Add an item to a trip.

    Returns:
        Stored item (422 if its date is outside the trip)
    """
    trip = await get_owned_trip(gateway, ctx, trip_id)
    try:
        ensure_within_trip(trip, request.date)
    except ItemDateOutOfRangeError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    draft = ItineraryItemDraft(trip_id=trip.id, **request.model_dump())
    return await gateway.add_itinerary_item(draft)


@router.patch("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_item(
    trip_id: str,
    item_id: str,
    patch: ItineraryItemPatch,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    gateway: Annotated[TripGateway, Depends(get_gateway)],
) -> Response:
    """Merge the set fields of the patch into an item."""
    trip = await get_owned_trip(gateway, ctx, trip_id)
    await gateway.update_itinerary_item(item_id, trip.id, patch)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    trip_id: str,
    item_id: str,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    gateway: Annotated[TripGateway, Depends(get_gateway)],
) -> Response:
    """Delete an item. Deleting a missing item also returns 204."""
    trip = await get_owned_trip(gateway, ctx, trip_id)
    await gateway.delete_itinerary_item(item_id, trip.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/days", response_model=list[DayPlan])
async def list_days(
    trip_id: str,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    gateway: Annotated[TripGateway, Depends(get_gateway)],
) -> list[DayPlan]:
    """Per-day view of a trip, one entry per date including empty days."""
    trip = await get_owned_trip(gateway, ctx, trip_id)
    items = await gateway.list_itinerary(trip.id)
    return group_by_day(trip, items)


@router.post(
    "/generate", response_model=list[ItineraryItem], status_code=status.HTTP_201_CREATED
)
async def generate_items(
    trip_id: str,
    request: GenerateRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    gateway: Annotated[TripGateway, Depends(get_gateway)],
    generator: Annotated[ItineraryGenerator, Depends(get_generator)],
) -> list[ItineraryItem]:
    """Generate items with AI and persist each of them.

    Returns:
        Stored items; empty list when AI generation is not configured.
        502 if the AI call fails or returns malformed output.
    """
    trip = await get_owned_trip(gateway, ctx, trip_id)

    try:
        drafts = await generator.generate_itinerary(trip.id, request.prompt, trip.start_date)
    except Exception as e:
        logger.error(f"AI generation failed for trip {trip.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=GENERATION_FAILED_MESSAGE
        ) from e

    return await persist_drafts(gateway, trip, drafts)
