"""Process-wide service dependencies for the API."""

from tripflow.config import get_settings
from tripflow.db.engine import build_gateway
from tripflow.db.gateway import TripGateway
from tripflow.llm.client import ItineraryGenerator, get_itinerary_generator

# Resolved once per process on first use
_gateway: TripGateway | None = None


def get_gateway() -> TripGateway:
    """Get global persistence gateway instance."""
    global _gateway
    if _gateway is None:
        _gateway = build_gateway(get_settings())
    return _gateway


def get_generator() -> ItineraryGenerator:
    """Get itinerary generator for the current configuration."""
    return get_itinerary_generator(get_settings())
