"""Integration tests for SqlTripGateway on SQLite (aiosqlite)."""

from datetime import date

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from tripflow.db.models import ItineraryItem as ItineraryItemDB
from tripflow.db.sql_gateway import SqlTripGateway
from tripflow.models.common import ActivityType
from tripflow.models.itinerary import ItineraryItemDraft, ItineraryItemPatch
from tripflow.models.trip import Trip, TripDraft


async def _create_trip(gateway: SqlTripGateway, user_id: str = "alice") -> Trip:
    return await gateway.create_trip(
        TripDraft(
            user_id=user_id,
            title="Jordan Adventure",
            start_date=date(2025, 11, 6),
            end_date=date(2025, 11, 9),
            notes="Jordan Pass",
        )
    )


@pytest.mark.asyncio
async def test_ping(sql_gateway: SqlTripGateway) -> None:
    """Test connectivity check."""
    await sql_gateway.ping()


@pytest.mark.asyncio
async def test_trips_scoped_by_owner(sql_gateway: SqlTripGateway) -> None:
    """Test that list_trips only returns the owner's trips."""
    mine = await _create_trip(sql_gateway, "alice")
    await _create_trip(sql_gateway, "bob")

    trips = await sql_gateway.list_trips("alice")

    assert [t.model_dump() for t in trips] == [mine.model_dump()]


@pytest.mark.asyncio
async def test_add_then_list_keeps_fields(sql_gateway: SqlTripGateway) -> None:
    """Test that stored items read back unchanged."""
    trip = await _create_trip(sql_gateway)
    draft = ItineraryItemDraft(
        trip_id=trip.id,
        date=date(2025, 11, 6),
        time="12:35",
        type=ActivityType.FLIGHT,
        title="Flight to Amman",
        location="Gate 4",
        cost=320.5,
        currency="SAR",
        is_booked=True,
        details={"flightNumber": "SV 123", "from": "RUH", "to": "AMM"},
    )

    saved = await sql_gateway.add_itinerary_item(draft)
    items = await sql_gateway.list_itinerary(trip.id)

    assert len(items) == 1
    assert items[0].model_dump() == saved.model_dump()
    assert items[0].type == ActivityType.FLIGHT
    assert items[0].typed_details().flight_number == "SV 123"


@pytest.mark.asyncio
async def test_type_stored_as_plain_string(
    sql_gateway: SqlTripGateway, sqlite_engine: AsyncEngine
) -> None:
    """Test the enum is stored by value."""
    trip = await _create_trip(sql_gateway)
    saved = await sql_gateway.add_itinerary_item(
        ItineraryItemDraft(trip_id=trip.id, date=date(2025, 11, 6), type=ActivityType.HOTEL)
    )

    async with AsyncSession(sqlite_engine) as session:
        row = (
            await session.execute(select(ItineraryItemDB).where(ItineraryItemDB.id == saved.id))
        ).scalar_one()

    assert row.type == "HOTEL"


@pytest.mark.asyncio
async def test_list_orders_by_date_then_time(sql_gateway: SqlTripGateway) -> None:
    """Test ORDER BY date, COALESCE(time, '')."""
    trip = await _create_trip(sql_gateway)
    for day, time, title in [
        (date(2025, 11, 7), "08:00", "d"),
        (date(2025, 11, 6), "15:30", "c"),
        (date(2025, 11, 6), "07:00", "b"),
        (date(2025, 11, 6), None, "a"),
    ]:
        await sql_gateway.add_itinerary_item(
            ItineraryItemDraft(trip_id=trip.id, date=day, time=time, title=title)
        )

    items = await sql_gateway.list_itinerary(trip.id)

    assert [i.title for i in items] == ["a", "b", "c", "d"]


@pytest.mark.asyncio
async def test_update_changes_only_patched_fields(sql_gateway: SqlTripGateway) -> None:
    """Test partial update semantics."""
    trip = await _create_trip(sql_gateway)
    saved = await sql_gateway.add_itinerary_item(
        ItineraryItemDraft(
            trip_id=trip.id, date=date(2025, 11, 6), time="09:00", title="Old", location="Here"
        )
    )

    await sql_gateway.update_itinerary_item(
        saved.id, trip.id, ItineraryItemPatch(title="New", type=ActivityType.FOOD)
    )

    (item,) = await sql_gateway.list_itinerary(trip.id)
    assert item.title == "New"
    assert item.type == ActivityType.FOOD
    assert item.model_dump(exclude={"title", "type"}) == saved.model_dump(exclude={"title", "type"})


@pytest.mark.asyncio
async def test_update_details_replaces_mapping(sql_gateway: SqlTripGateway) -> None:
    """Test that a details patch stores the given mapping."""
    trip = await _create_trip(sql_gateway)
    saved = await sql_gateway.add_itinerary_item(
        ItineraryItemDraft(trip_id=trip.id, date=date(2025, 11, 6), details={"a": 1})
    )

    await sql_gateway.update_itinerary_item(
        saved.id, trip.id, ItineraryItemPatch(details={"a": 1, "b": "two"})
    )

    (item,) = await sql_gateway.list_itinerary(trip.id)
    assert item.details == {"a": 1, "b": "two"}


@pytest.mark.asyncio
async def test_update_missing_item_is_not_an_error(sql_gateway: SqlTripGateway) -> None:
    """Test that a zero-row update succeeds silently."""
    trip = await _create_trip(sql_gateway)

    await sql_gateway.update_itinerary_item("missing", trip.id, ItineraryItemPatch(title="x"))
    await sql_gateway.update_itinerary_item("missing", trip.id, ItineraryItemPatch())

    assert await sql_gateway.list_itinerary(trip.id) == []


@pytest.mark.asyncio
async def test_delete_is_idempotent(sql_gateway: SqlTripGateway) -> None:
    """Test delete then repeat delete."""
    trip = await _create_trip(sql_gateway)
    keep = await sql_gateway.add_itinerary_item(
        ItineraryItemDraft(trip_id=trip.id, date=date(2025, 11, 6), title="keep")
    )
    drop = await sql_gateway.add_itinerary_item(
        ItineraryItemDraft(trip_id=trip.id, date=date(2025, 11, 6), title="drop")
    )

    await sql_gateway.delete_itinerary_item(drop.id, trip.id)
    await sql_gateway.delete_itinerary_item(drop.id, trip.id)

    assert [i.id for i in await sql_gateway.list_itinerary(trip.id)] == [keep.id]
