"""Day-by-day grouping of itinerary items."""

from collections import defaultdict
from datetime import date, timedelta

from tripflow.models.itinerary import DayPlan, ItineraryItem
from tripflow.models.trip import Trip


def trip_dates(start: date, end: date) -> list[date]:
    """Enumerate calendar dates from start to end inclusive."""
    dates = []
    current = start
    while current <= end:
        dates.append(current)
        current += timedelta(days=1)
    return dates


def sort_day_items(items: list[ItineraryItem]) -> list[ItineraryItem]:
    """Sort one day's items by "HH:MM" time, absent time first.

    The sort is stable, so items with equal or absent times keep their
    relative order.
    """
    return sorted(items, key=lambda item: item.sort_time)


def group_by_day(trip: Trip, items: list[ItineraryItem]) -> list[DayPlan]:
    """Build the per-day view of a trip.

    Every date of the trip gets a bucket, including days without items.
    Items dated outside the trip range appear in no bucket.

    Args:
        trip: Trip whose date range defines the buckets
        items: Items of the trip in any order

    Returns:
        One DayPlan per trip date, in date order
    """
    by_date: dict[date, list[ItineraryItem]] = defaultdict(list)
    for item in items:
        by_date[item.date].append(item)

    return [
        DayPlan(date=day, day_number=index + 1, items=sort_day_items(by_date.get(day, [])))
        for index, day in enumerate(trip_dates(trip.start_date, trip.end_date))
    ]
