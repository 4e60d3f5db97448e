"""Models package - re-exports for convenience."""

from tripflow.models.common import ActivityType
from tripflow.models.itinerary import (
    DayPlan,
    FlightDetails,
    GenericDetails,
    ItemDetails,
    ItineraryItem,
    ItineraryItemDraft,
    ItineraryItemPatch,
    parse_details,
)
from tripflow.models.trip import Trip, TripDraft

__all__ = [
    # Common
    "ActivityType",
    # Trip
    "Trip",
    "TripDraft",
    # Itinerary
    "DayPlan",
    "FlightDetails",
    "GenericDetails",
    "ItemDetails",
    "ItineraryItem",
    "ItineraryItemDraft",
    "ItineraryItemPatch",
    "parse_details",
]
