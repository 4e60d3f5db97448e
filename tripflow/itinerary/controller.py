"""Itinerary controller - in-memory state for the open trip with optimistic edits.

Edit policy:
- add_item waits for the gateway and appends the stored record.
- update_item / update_item_details change local state first, then persist.
  A failed save is logged and local state is NOT rolled back; it stays
  divergent until the next load().
- delete_item persists first and only then removes the item locally.
- generate runs the AI adapter in-process and persists through persist_drafts.
  Clients talking to the HTTP API (the Streamlit UI) call POST /generate
  instead, which runs the same persist_drafts on the server, then load().
"""

import logging
from datetime import date
from typing import Any

from tripflow.db.gateway import TripGateway
from tripflow.itinerary.grouping import group_by_day
from tripflow.llm.client import ItineraryGenerator, UnconfiguredItineraryGenerator
from tripflow.models.common import ActivityType
from tripflow.models.itinerary import (
    DayPlan,
    ItineraryItem,
    ItineraryItemDraft,
    ItineraryItemPatch,
)
from tripflow.models.trip import Trip

logger = logging.getLogger(__name__)

DEFAULT_ITEM_TIME = "09:00"


class ItemDateOutOfRangeError(ValueError):
    """Item date falls outside the owning trip's date range."""

    def __init__(self, trip: Trip, day: date) -> None:
        super().__init__(
            f"Date {day.isoformat()} is outside trip {trip.id} "
            f"({trip.start_date.isoformat()} to {trip.end_date.isoformat()})"
        )
        self.trip_id = trip.id
        self.day = day


def ensure_within_trip(trip: Trip, day: date) -> None:
    """Raise ItemDateOutOfRangeError unless day is within the trip."""
    if not trip.contains(day):
        raise ItemDateOutOfRangeError(trip, day)


async def persist_drafts(
    gateway: TripGateway, trip: Trip, drafts: list[ItineraryItemDraft]
) -> list[ItineraryItem]:
    """Persist generated drafts one by one through add_itinerary_item.

    Drafts dated outside the trip are skipped.

    Returns:
        Stored items in draft order
    """
    saved: list[ItineraryItem] = []
    for draft in drafts:
        if not trip.contains(draft.date):
            logger.warning(
                f"Skipping generated item '{draft.title}' dated {draft.date.isoformat()} "
                f"outside trip {trip.id}"
            )
            continue
        saved.append(await gateway.add_itinerary_item(draft))
    return saved


class ItineraryController:
    """Owns the item list of exactly one open trip."""

    def __init__(
        self,
        gateway: TripGateway,
        trip: Trip,
        generator: ItineraryGenerator | None = None,
    ) -> None:
        self._gateway = gateway
        self._generator = generator or UnconfiguredItineraryGenerator()
        self.trip = trip
        self._items: list[ItineraryItem] = []

    @property
    def items(self) -> list[ItineraryItem]:
        """Current local items (copy)."""
        return list(self._items)

    def get_item(self, item_id: str) -> ItineraryItem | None:
        """Find a local item by ID."""
        return next((item for item in self._items if item.id == item_id), None)

    async def load(self) -> list[ItineraryItem]:
        """Replace local state with the stored items of the open trip."""
        self._items = await self._gateway.list_itinerary(self.trip.id)
        return self.items

    async def open_trip(self, trip: Trip) -> list[ItineraryItem]:
        """Switch to another trip and load its items."""
        self.trip = trip
        self._items = []
        return await self.load()

    def days(self) -> list[DayPlan]:
        """Per-day view of the local items, recomputed on every call."""
        return group_by_day(self.trip, self._items)

    async def add_item(
        self, day: date, item_type: ActivityType = ActivityType.ACTIVITY
    ) -> ItineraryItem:
        """Create a blank item of the given type on a trip day.

        Raises:
            ItemDateOutOfRangeError: If day is outside the trip
        """
        ensure_within_trip(self.trip, day)
        draft = ItineraryItemDraft(
            trip_id=self.trip.id,
            date=day,
            type=item_type,
            title="",
            time=DEFAULT_ITEM_TIME,
            location="",
            notes="",
            details={},
        )
        saved = await self._gateway.add_itinerary_item(draft)
        self._items.append(saved)
        return saved

    async def update_item(self, item_id: str, patch: ItineraryItemPatch) -> None:
        """Apply patch locally, then persist it."""
        self._items = [
            item.merged(patch) if item.id == item_id else item for item in self._items
        ]

        try:
            await self._gateway.update_itinerary_item(item_id, self.trip.id, patch)
        except Exception:
            logger.exception(f"Failed to save item {item_id}")

    async def update_item_details(self, item_id: str, details: dict[str, Any]) -> None:
        """Merge keys into an item's detail mapping and persist."""
        item = self.get_item(item_id)
        if item is None:
            return
        await self.update_item(item_id, ItineraryItemPatch(details={**item.details, **details}))

    async def delete_item(self, item_id: str) -> None:
        """Delete an item from the store, then from local state."""
        await self._gateway.delete_itinerary_item(item_id, self.trip.id)
        self._items = [item for item in self._items if item.id != item_id]

    async def generate(self, prompt: str) -> list[ItineraryItem]:
        """Generate items with the AI adapter, persist them and merge them locally.

        Returns:
            Stored generated items; empty when the prompt is blank or AI is unavailable
        """
        if not prompt.strip():
            return []

        drafts = await self._generator.generate_itinerary(
            self.trip.id, prompt, self.trip.start_date
        )
        saved = await persist_drafts(self._gateway, self.trip, drafts)
        self._items.extend(saved)
        return saved
