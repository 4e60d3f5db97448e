"""Itinerary item models."""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from tripflow.models.common import ActivityType

TIME_PATTERN = r"^(\d{2}:\d{2})?$"


class FlightDetails(BaseModel):
    """Typed details for FLIGHT items."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    flight_number: str | None = Field(None, alias="flightNumber")
    from_: str | None = Field(None, alias="from")
    to: str | None = None

    @property
    def extras(self) -> dict[str, Any]:
        """Keys not covered by the typed fields."""
        return dict(self.model_extra or {})


class GenericDetails(BaseModel):
    """Details for variants without a typed field set."""

    model_config = ConfigDict(extra="allow")

    @property
    def extras(self) -> dict[str, Any]:
        """All stored keys."""
        return dict(self.model_extra or {})


ItemDetails = FlightDetails | GenericDetails


def parse_details(item_type: ActivityType, details: dict[str, Any] | None) -> ItemDetails:
    """Build the typed view of a detail mapping for the given variant.

    Args:
        item_type: Item variant
        details: Stored detail mapping (may be None)

    Returns:
        FlightDetails for FLIGHT, GenericDetails otherwise
    """
    data = details or {}
    if item_type == ActivityType.FLIGHT:
        return FlightDetails.model_validate(data)
    return GenericDetails.model_validate(data)


class ItineraryItemDraft(BaseModel):
    """Itinerary item before an id is assigned."""

    trip_id: str
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

    @property
    def sort_time(self) -> str:
        """Time used for intra-day ordering; absent time sorts first."""
        return self.time or ""

    def typed_details(self) -> ItemDetails:
        """Typed view of details keyed by the item's variant."""
        return parse_details(self.type, self.details)


class ItineraryItemPatch(BaseModel):
    """Partial update for an itinerary item. Only explicitly set fields apply."""

    date: dt.date | None = None
    time: str | None = Field(None, pattern=TIME_PATTERN)
    type: ActivityType | None = None
    title: str | None = None
    location: str | None = None
    notes: str | None = None
    cost: float | None = None
    currency: str | None = None
    is_booked: bool | None = None
    details: dict[str, Any] | None = None

    @field_validator("date", "type", "title", "details")
    @classmethod
    def not_null(cls, value: Any, info: ValidationInfo) -> Any:
        """Required item fields may be omitted but not cleared."""
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    def changes(self) -> dict[str, Any]:
        """Fields explicitly set on this patch."""
        return self.model_dump(exclude_unset=True)


class ItineraryItem(ItineraryItemDraft):
    """Stored itinerary item."""

    id: str

    def merged(self, patch: ItineraryItemPatch) -> "ItineraryItem":
        """Return a copy with the patch's set fields applied."""
        return ItineraryItem.model_validate({**self.model_dump(), **patch.changes()})


class DayPlan(BaseModel):
    """One calendar day of a trip with its sorted items."""

    date: dt.date
    day_number: int
    items: list[ItineraryItem]
