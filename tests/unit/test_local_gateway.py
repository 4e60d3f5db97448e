"""Tests for the offline key-value stores and LocalTripGateway."""

import json
from datetime import date
from pathlib import Path

import pytest

from tripflow.db.local_gateway import LocalTripGateway
from tripflow.db.local_store import FileKeyValueStore, InMemoryKeyValueStore
from tripflow.db.seed_dev import DEMO_TRIP_ID, DEV_USER_ID
from tripflow.models.common import ActivityType
from tripflow.models.itinerary import ItineraryItemDraft, ItineraryItemPatch
from tripflow.models.trip import TripDraft


class TestFileKeyValueStore:
    """Test the durable file-backed store."""

    def test_missing_key_returns_none(self, tmp_path: Path) -> None:
        """Test reading an absent key."""
        store = FileKeyValueStore(tmp_path)
        assert store.get("tf_trips") is None

    def test_values_survive_new_instance(self, tmp_path: Path) -> None:
        """Test that a second store over the same directory sees written values."""
        FileKeyValueStore(tmp_path).set("tf_trips", "[]")
        assert FileKeyValueStore(tmp_path).get("tf_trips") == "[]"

    def test_overwrite_replaces_value(self, tmp_path: Path) -> None:
        """Test that set() replaces the whole value."""
        store = FileKeyValueStore(tmp_path)
        store.set("k", "one")
        store.set("k", "two")
        assert store.get("k") == "two"

    def test_keys_are_quoted_into_file_names(self, tmp_path: Path) -> None:
        """Test that unsafe key characters do not escape the directory."""
        store = FileKeyValueStore(tmp_path)
        store.set("tf_itinerary_../x", "[]")

        names = sorted(p.name for p in tmp_path.iterdir())
        assert names == ["tf_itinerary_..%2Fx.json"]

    def test_creates_directory(self, tmp_path: Path) -> None:
        """Test that a missing directory is created."""
        FileKeyValueStore(tmp_path / "nested" / "store").set("k", "v")
        assert (tmp_path / "nested" / "store" / "k.json").exists()


class TestSeeding:
    """Test demo data seeding on first read."""

    @pytest.mark.asyncio
    async def test_first_read_seeds_demo_trip(
        self, local_gateway: LocalTripGateway, memory_store: InMemoryKeyValueStore
    ) -> None:
        """Test that an empty store yields the demo trip for the dev user."""
        trips = await local_gateway.list_trips(DEV_USER_ID)

        assert len(trips) == 1
        assert trips[0].id == DEMO_TRIP_ID
        assert trips[0].title == "Jordan Adventure"
        assert trips[0].start_date == date(2025, 11, 6)
        assert trips[0].end_date == date(2025, 11, 9)
        assert memory_store.get("tf_trips") is not None

    @pytest.mark.asyncio
    async def test_demo_items_seeded(self, local_gateway: LocalTripGateway) -> None:
        """Test that the demo trip comes with its six items in order."""
        items = await local_gateway.list_itinerary(DEMO_TRIP_ID)

        assert [i.id for i in items] == ["101", "102", "103", "104", "201", "202"]
        flight = items[1]
        assert flight.type == ActivityType.FLIGHT
        assert flight.details == {"flightNumber": "SV 123", "from": "RUH", "to": "AMM"}

    @pytest.mark.asyncio
    async def test_other_users_see_no_demo_trip(self, local_gateway: LocalTripGateway) -> None:
        """Test that trips are scoped by owner."""
        assert await local_gateway.list_trips("someone-else") == []

    @pytest.mark.asyncio
    async def test_seed_persists_across_store_instances(self, tmp_path: Path) -> None:
        """Test that seeded and created data are durable in the file store."""
        first = LocalTripGateway(FileKeyValueStore(tmp_path))
        created = await first.create_trip(
            TripDraft(
                user_id=DEV_USER_ID,
                title="Lisbon",
                start_date=date(2026, 3, 1),
                end_date=date(2026, 3, 4),
            )
        )

        second = LocalTripGateway(FileKeyValueStore(tmp_path))
        trips = await second.list_trips(DEV_USER_ID)

        assert [t.id for t in trips] == [DEMO_TRIP_ID, created.id]

    @pytest.mark.asyncio
    async def test_uses_key_prefix(self, memory_store: InMemoryKeyValueStore) -> None:
        """Test that keys follow the configured prefix."""
        gateway = LocalTripGateway(memory_store, key_prefix="app_")
        await gateway.list_itinerary(DEMO_TRIP_ID)
        await gateway.list_trips(DEV_USER_ID)

        assert set(memory_store.keys()) == {"app_itinerary_1", "app_trips"}


class TestItemOperations:
    """Test add/list/update/delete on the local backend."""

    @pytest.mark.asyncio
    async def test_add_then_list_returns_item(self, local_gateway: LocalTripGateway) -> None:
        """Test that an added item is listed with unchanged fields plus an id."""
        draft = ItineraryItemDraft(
            trip_id="trip-9",
            date=date(2026, 1, 2),
            time="10:00",
            type=ActivityType.FOOD,
            title="Lunch",
            location="Market",
            cost=12.5,
            currency="EUR",
            details={"reservation": "R-1"},
        )

        saved = await local_gateway.add_itinerary_item(draft)
        items = await local_gateway.list_itinerary("trip-9")

        assert saved.id
        assert [i.model_dump() for i in items] == [saved.model_dump()]
        assert saved.model_dump(exclude={"id"}) == draft.model_dump()

    @pytest.mark.asyncio
    async def test_unknown_trip_has_no_items(
        self, local_gateway: LocalTripGateway, memory_store: InMemoryKeyValueStore
    ) -> None:
        """Test that reading a non-demo trip does not write anything."""
        assert await local_gateway.list_itinerary("nope") == []
        assert "tf_itinerary_nope" not in memory_store.keys()

    @pytest.mark.asyncio
    async def test_list_orders_by_date_then_time(self, local_gateway: LocalTripGateway) -> None:
        """Test list ordering with absent time first."""
        for day, time, title in [
            (date(2026, 1, 3), "08:00", "c"),
            (date(2026, 1, 2), "18:00", "b"),
            (date(2026, 1, 2), None, "a"),
        ]:
            await local_gateway.add_itinerary_item(
                ItineraryItemDraft(trip_id="t", date=day, time=time, title=title)
            )

        items = await local_gateway.list_itinerary("t")

        assert [i.title for i in items] == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_update_changes_only_patched_field(self, local_gateway: LocalTripGateway) -> None:
        """Test update then list shows the new value and nothing else changed."""
        before = {i.id: i for i in await local_gateway.list_itinerary(DEMO_TRIP_ID)}

        await local_gateway.update_itinerary_item(
            "104", DEMO_TRIP_ID, ItineraryItemPatch(notes="Late check-in")
        )

        after = {i.id: i for i in await local_gateway.list_itinerary(DEMO_TRIP_ID)}
        assert after["104"].notes == "Late check-in"
        patched = {"notes"}
        assert after["104"].model_dump(exclude=patched) == before["104"].model_dump(exclude=patched)
        assert {k: v.model_dump() for k, v in after.items() if k != "104"} == {
            k: v.model_dump() for k, v in before.items() if k != "104"
        }

    @pytest.mark.asyncio
    async def test_update_missing_item_is_noop(
        self, local_gateway: LocalTripGateway, memory_store: InMemoryKeyValueStore
    ) -> None:
        """Test that updating an unknown id changes nothing."""
        await local_gateway.list_itinerary(DEMO_TRIP_ID)
        stored = memory_store.get("tf_itinerary_1")

        await local_gateway.update_itinerary_item("999", DEMO_TRIP_ID, ItineraryItemPatch(title="x"))

        assert memory_store.get("tf_itinerary_1") == stored

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, local_gateway: LocalTripGateway) -> None:
        """Test delete removes the item and repeating it is not an error."""
        await local_gateway.delete_itinerary_item("201", DEMO_TRIP_ID)
        await local_gateway.delete_itinerary_item("201", DEMO_TRIP_ID)

        ids = [i.id for i in await local_gateway.list_itinerary(DEMO_TRIP_ID)]
        assert "201" not in ids
        assert len(ids) == 5

    @pytest.mark.asyncio
    async def test_stored_format_is_json_list(
        self, local_gateway: LocalTripGateway, memory_store: InMemoryKeyValueStore
    ) -> None:
        """Test that a trip's items are stored as one JSON array."""
        await local_gateway.add_itinerary_item(
            ItineraryItemDraft(trip_id="t", date=date(2026, 1, 2), title="Museum")
        )

        stored = json.loads(memory_store.get("tf_itinerary_t") or "")

        assert isinstance(stored, list)
        assert stored[0]["title"] == "Museum"
        assert stored[0]["date"] == "2026-01-02"
