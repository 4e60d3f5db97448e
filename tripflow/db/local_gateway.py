"""Offline (mock) implementation of the persistence gateway."""

import logging
import uuid

from pydantic import TypeAdapter

from tripflow.db.local_store import KeyValueStore
from tripflow.db.seed_dev import DEMO_TRIP_ID, demo_items, demo_trip
from tripflow.models.itinerary import ItineraryItem, ItineraryItemDraft, ItineraryItemPatch
from tripflow.models.trip import Trip, TripDraft

logger = logging.getLogger(__name__)

_TRIP_LIST = TypeAdapter(list[Trip])
_ITEM_LIST = TypeAdapter(list[ItineraryItem])


class LocalTripGateway:
    """Local implementation of TripGateway over a KeyValueStore.

    One key holds the serialized trip list and one key per trip holds that
    trip's item list. Every write rewrites the whole affected list. The demo
    trip and its items are written on first read when nothing is stored yet.
    """

    def __init__(self, store: KeyValueStore, key_prefix: str = "tf_") -> None:
        self._store = store
        self._prefix = key_prefix

    @property
    def trips_key(self) -> str:
        """Key holding the trip list."""
        return f"{self._prefix}trips"

    def items_key(self, trip_id: str) -> str:
        """Key holding one trip's item list."""
        return f"{self._prefix}itinerary_{trip_id}"

    def _read_trips(self) -> list[Trip]:
        raw = self._store.get(self.trips_key)
        if raw is None:
            logger.info("No stored trips, seeding demo trip")
            trips = [demo_trip()]
            self._write_trips(trips)
            return trips
        return _TRIP_LIST.validate_json(raw)

    def _write_trips(self, trips: list[Trip]) -> None:
        self._store.set(self.trips_key, _TRIP_LIST.dump_json(trips).decode("utf-8"))

    def _read_items(self, trip_id: str) -> list[ItineraryItem]:
        raw = self._store.get(self.items_key(trip_id))
        if raw is None:
            items = demo_items() if trip_id == DEMO_TRIP_ID else []
            if items:
                self._write_items(trip_id, items)
            return items
        return _ITEM_LIST.validate_json(raw)

    def _write_items(self, trip_id: str, items: list[ItineraryItem]) -> None:
        self._store.set(self.items_key(trip_id), _ITEM_LIST.dump_json(items).decode("utf-8"))

    async def list_trips(self, user_id: str) -> list[Trip]:
        """List trips owned by user, in insertion order."""
        return [trip for trip in self._read_trips() if trip.user_id == user_id]

    async def create_trip(self, draft: TripDraft) -> Trip:
        """Create a new trip."""
        trip = Trip(id=str(uuid.uuid4()), **draft.model_dump())
        trips = self._read_trips()
        trips.append(trip)
        self._write_trips(trips)
        return trip

    async def list_itinerary(self, trip_id: str) -> list[ItineraryItem]:
        """List items ordered by (date, time)."""
        return sorted(self._read_items(trip_id), key=lambda i: (i.date, i.sort_time))

    async def add_itinerary_item(self, draft: ItineraryItemDraft) -> ItineraryItem:
        """Add a new item."""
        item = ItineraryItem(id=str(uuid.uuid4()), **draft.model_dump())
        items = self._read_items(draft.trip_id)
        items.append(item)
        self._write_items(draft.trip_id, items)
        return item

    async def update_itinerary_item(
        self, item_id: str, trip_id: str, patch: ItineraryItemPatch
    ) -> None:
        """Merge patch into the stored item; missing items are ignored."""
        items = self._read_items(trip_id)
        for index, item in enumerate(items):
            if item.id == item_id:
                items[index] = item.merged(patch)
                self._write_items(trip_id, items)
                return

    async def delete_itinerary_item(self, item_id: str, trip_id: str) -> None:
        """Delete item if present."""
        items = self._read_items(trip_id)
        self._write_items(trip_id, [item for item in items if item.id != item_id])
