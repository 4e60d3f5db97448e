"""Common types and enums shared across all models."""

from enum import Enum


class ActivityType(str, Enum):
    """Closed set of itinerary item variants."""

    FLIGHT = "FLIGHT"
    HOTEL = "HOTEL"
    ACTIVITY = "ACTIVITY"
    FOOD = "FOOD"
    TRANSIT = "TRANSIT"
    NOTE = "NOTE"
    CUSTOM = "CUSTOM"
