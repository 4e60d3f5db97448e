"""Demo trip used to seed offline mode and dev databases."""

import asyncio
from datetime import date

from sqlalchemy import select

from tripflow.models.common import ActivityType
from tripflow.models.itinerary import ItineraryItem
from tripflow.models.trip import Trip

# Matches the no-header default in tripflow/api/auth.py
DEV_USER_ID = "mock-user"
DEMO_TRIP_ID = "1"


def demo_trip() -> Trip:
    """Illustrative trip owned by the dev user."""
    return Trip(
        id=DEMO_TRIP_ID,
        user_id=DEV_USER_ID,
        title="Jordan Adventure",
        start_date=date(2025, 11, 6),
        end_date=date(2025, 11, 9),
        cover_image="https://picsum.photos/800/400",
        notes="Don't forget the Jordan Pass!",
    )


def demo_items() -> list[ItineraryItem]:
    """Itinerary for the demo trip, days 1 and 2."""
    day1 = date(2025, 11, 6)
    day2 = date(2025, 11, 7)
    return [
        ItineraryItem(
            id="101",
            trip_id=DEMO_TRIP_ID,
            date=day1,
            time="07:00",
            type=ActivityType.TRANSIT,
            title="Head to RUH Airport",
            location="Riyadh",
        ),
        ItineraryItem(
            id="102",
            trip_id=DEMO_TRIP_ID,
            date=day1,
            time="12:35",
            type=ActivityType.FLIGHT,
            title="Flight to Amman",
            location="",
            details={"flightNumber": "SV 123", "from": "RUH", "to": "AMM"},
        ),
        ItineraryItem(
            id="103",
            trip_id=DEMO_TRIP_ID,
            date=day1,
            time="13:00",
            type=ActivityType.TRANSIT,
            title="Rental Car Pick-up",
            location="AMM Airport",
        ),
        ItineraryItem(
            id="104",
            trip_id=DEMO_TRIP_ID,
            date=day1,
            time="15:30",
            type=ActivityType.HOTEL,
            title="Mövenpick Petra",
            location="Tourism St, Wadi Musa 71810",
        ),
        ItineraryItem(
            id="201",
            trip_id=DEMO_TRIP_ID,
            date=day2,
            time="07:30",
            type=ActivityType.ACTIVITY,
            title="Petra Exploration",
            location="Visitor Center",
        ),
        ItineraryItem(
            id="202",
            trip_id=DEMO_TRIP_ID,
            date=day2,
            time="19:00",
            type=ActivityType.FOOD,
            title="Dinner @ Hotel",
            location="Mövenpick",
        ),
    ]


async def seed_dev_trip() -> None:
    """Seed the demo trip into the remote database.

    This function is idempotent - safe to run multiple times.
    """
    from tripflow.config import get_settings
    from tripflow.db.engine import create_async_engine_from_settings, create_session_factory
    from tripflow.db.models import ItineraryItem as ItineraryItemDB
    from tripflow.db.models import Trip as TripDB
    from tripflow.db.sql_gateway import item_column_values

    engine = create_async_engine_from_settings(get_settings())
    session_factory = create_session_factory(engine)

    async with session_factory() as session:
        result = await session.execute(select(TripDB).where(TripDB.id == DEMO_TRIP_ID))
        if result.scalar_one_or_none() is not None:
            print("Demo trip already exists")
        else:
            print(f"Creating demo trip with id {DEMO_TRIP_ID}...")
            session.add(TripDB(**demo_trip().model_dump()))
            for item in demo_items():
                session.add(ItineraryItemDB(**item_column_values(item.model_dump())))
            await session.commit()
            print("Dev seeding complete")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed_dev_trip())
