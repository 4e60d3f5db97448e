"""Helper functions for UI - HTTP client for the TripFlow API."""

from datetime import date, timedelta
from typing import Any

import httpx
from pydantic import TypeAdapter

from tripflow.models.itinerary import ItineraryItem, ItineraryItemDraft, ItineraryItemPatch
from tripflow.models.trip import Trip, TripDraft

_TRIP_LIST = TypeAdapter(list[Trip])
_ITEM_LIST = TypeAdapter(list[ItineraryItem])

DEFAULT_TRIP_DAYS = 3


def get_auth_header(user_id: str) -> dict[str, str]:
    """Get auth header for API calls.

    The API trusts the bearer token as the user ID; there is no real login.
    """
    return {"Authorization": f"Bearer {user_id}"}


def default_trip_draft(user_id: str, title: str, today: date) -> TripDraft:
    """Draft for the dashboard's quick "new trip" action.

    Args:
        user_id: Owner of the new trip
        title: Trip title entered by the user
        today: Start date; the trip spans today to today + 3 days

    Returns:
        TripDraft with a placeholder cover image seeded from the title
    """
    return TripDraft(
        user_id=user_id,
        title=title,
        start_date=today,
        end_date=today + timedelta(days=DEFAULT_TRIP_DAYS),
        cover_image=f"https://picsum.photos/seed/{title}/800/400",
    )


class ApiTripGateway:
    """TripGateway implementation that calls the TripFlow API over HTTP.

    A fresh AsyncClient is opened per call so the gateway can be driven from
    separate asyncio.run() invocations (one per Streamlit rerun).
    """

    def __init__(
        self,
        base_url: str,
        user_id: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 60.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.user_id = user_id
        self._transport = transport
        self._timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=get_auth_header(self.user_id),
            transport=self._transport,
            timeout=self._timeout,
        )

    async def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        async with self._client() as client:
            response = await client.request(method, path, json=json)
        response.raise_for_status()
        return response

    async def list_trips(self, user_id: str) -> list[Trip]:
        """List trips of the configured user (the API scopes by caller)."""
        response = await self._request("GET", "/trips")
        return _TRIP_LIST.validate_python(response.json())

    async def create_trip(self, draft: TripDraft) -> Trip:
        """Create a trip through POST /trips."""
        body = draft.model_dump(mode="json", exclude={"user_id"})
        response = await self._request("POST", "/trips", json=body)
        return Trip.model_validate(response.json())

    async def list_itinerary(self, trip_id: str) -> list[ItineraryItem]:
        """List a trip's items ordered by date and time."""
        response = await self._request("GET", f"/trips/{trip_id}/items")
        return _ITEM_LIST.validate_python(response.json())

    async def add_itinerary_item(self, draft: ItineraryItemDraft) -> ItineraryItem:
        """Add an item through POST /trips/{trip_id}/items."""
        body = draft.model_dump(mode="json", exclude={"trip_id"})
        response = await self._request("POST", f"/trips/{draft.trip_id}/items", json=body)
        return ItineraryItem.model_validate(response.json())

    async def update_itinerary_item(
        self, item_id: str, trip_id: str, patch: ItineraryItemPatch
    ) -> None:
        """Send only the patch's set fields."""
        body = patch.model_dump(mode="json", exclude_unset=True)
        await self._request("PATCH", f"/trips/{trip_id}/items/{item_id}", json=body)

    async def delete_itinerary_item(self, item_id: str, trip_id: str) -> None:
        """Delete an item."""
        await self._request("DELETE", f"/trips/{trip_id}/items/{item_id}")

    async def generate(self, trip_id: str, prompt: str) -> list[ItineraryItem]:
        """Ask the API to generate and persist items for a trip.

        Raises:
            httpx.HTTPStatusError: 502 when generation fails server-side
        """
        response = await self._request("POST", f"/trips/{trip_id}/generate", json={"prompt": prompt})
        return _ITEM_LIST.validate_python(response.json())


def format_day_header(day_number: int, day: date) -> str:
    """Header shown above one day of the planner, e.g. "Day 1 · Thu, Nov 06"."""
    return f"Day {day_number} · {day.strftime('%a, %b %d')}"


def format_trip_range(trip: TripDraft) -> str:
    """Date range line shown on dashboard cards."""
    return f"{trip.start_date.strftime('%b %d')} – {trip.end_date.strftime('%b %d, %Y')}"
