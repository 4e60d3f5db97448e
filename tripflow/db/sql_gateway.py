"""SQL (remote) implementation of the persistence gateway."""

import uuid
from typing import Any

from sqlalchemy import delete, func, select, text, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tripflow.db.models import ItineraryItem as ItineraryItemDB
from tripflow.db.models import Trip as TripDB
from tripflow.models.common import ActivityType
from tripflow.models.itinerary import ItineraryItem, ItineraryItemDraft, ItineraryItemPatch
from tripflow.models.trip import Trip, TripDraft


def _trip_from_row(row: TripDB) -> Trip:
    return Trip(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        start_date=row.start_date,
        end_date=row.end_date,
        cover_image=row.cover_image,
        notes=row.notes,
    )


def _item_from_row(row: ItineraryItemDB) -> ItineraryItem:
    return ItineraryItem(
        id=row.id,
        trip_id=row.trip_id,
        date=row.date,
        time=row.time,
        type=row.type,
        title=row.title,
        location=row.location,
        notes=row.notes,
        cost=row.cost,
        currency=row.currency,
        is_booked=row.is_booked,
        details=row.details or {},
    )


def item_column_values(fields: dict[str, Any]) -> dict[str, Any]:
    """Convert model field values to column values (enum -> plain string)."""
    values = dict(fields)
    if isinstance(values.get("type"), ActivityType):
        values["type"] = values["type"].value
    return values


class SqlTripGateway:
    """SQL implementation of TripGateway.

    Each operation opens its own session and issues a single statement.
    Database errors propagate unmodified.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def ping(self) -> None:
        """Round-trip a trivial query to check connectivity."""
        async with self._session_factory() as session:
            await session.execute(text("SELECT 1"))

    async def list_trips(self, user_id: str) -> list[Trip]:
        """List trips owned by user."""
        async with self._session_factory() as session:
            result = await session.execute(select(TripDB).where(TripDB.user_id == user_id))
            return [_trip_from_row(row) for row in result.scalars()]

    async def create_trip(self, draft: TripDraft) -> Trip:
        """Create a new trip."""
        trip = Trip(id=str(uuid.uuid4()), **draft.model_dump())
        async with self._session_factory() as session:
            session.add(TripDB(**trip.model_dump()))
            await session.commit()
        return trip

    async def list_itinerary(self, trip_id: str) -> list[ItineraryItem]:
        """List items ordered by (date, time) with absent time first."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(ItineraryItemDB)
                .where(ItineraryItemDB.trip_id == trip_id)
                .order_by(ItineraryItemDB.date.asc(), func.coalesce(ItineraryItemDB.time, "").asc())
            )
            return [_item_from_row(row) for row in result.scalars()]

    async def add_itinerary_item(self, draft: ItineraryItemDraft) -> ItineraryItem:
        """Add a new item."""
        item = ItineraryItem(id=str(uuid.uuid4()), **draft.model_dump())
        async with self._session_factory() as session:
            session.add(ItineraryItemDB(**item_column_values(item.model_dump())))
            await session.commit()
        return item

    async def update_itinerary_item(
        self, item_id: str, trip_id: str, patch: ItineraryItemPatch
    ) -> None:
        """Merge patch into the stored item.

        Items are matched on both id and trip, so an id from another trip
        (or a missing id) updates zero rows.
        """
        changes = item_column_values(patch.changes())
        if not changes:
            return
        async with self._session_factory() as session:
            await session.execute(
                update(ItineraryItemDB)
                .where(ItineraryItemDB.id == item_id, ItineraryItemDB.trip_id == trip_id)
                .values(**changes)
            )
            await session.commit()

    async def delete_itinerary_item(self, item_id: str, trip_id: str) -> None:
        """Delete item if present in the given trip."""
        async with self._session_factory() as session:
            await session.execute(
                delete(ItineraryItemDB).where(
                    ItineraryItemDB.id == item_id, ItineraryItemDB.trip_id == trip_id
                )
            )
            await session.commit()
