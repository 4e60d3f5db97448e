"""Tests for day-by-day grouping of itinerary items."""

from datetime import date

from tripflow.itinerary.grouping import group_by_day, sort_day_items, trip_dates
from tripflow.models.itinerary import ItineraryItem
from tripflow.models.trip import Trip


def _item(item_id: str, day: date, time: str | None = None) -> ItineraryItem:
    return ItineraryItem(id=item_id, trip_id="trip-1", date=day, time=time, title=item_id)


def test_trip_dates_inclusive() -> None:
    """Test that both endpoints are enumerated."""
    dates = trip_dates(date(2025, 11, 6), date(2025, 11, 9))
    assert dates == [date(2025, 11, 6), date(2025, 11, 7), date(2025, 11, 8), date(2025, 11, 9)]


def test_trip_dates_across_month_boundary() -> None:
    """Test enumeration across a month end."""
    dates = trip_dates(date(2025, 1, 30), date(2025, 2, 2))
    assert len(dates) == 4
    assert dates[-1] == date(2025, 2, 2)


def test_single_item_scenario(trip: Trip) -> None:
    """Test a 4-day trip with one item on the second day."""
    days = group_by_day(trip, [_item("a", date(2025, 11, 7), "10:00")])

    assert [d.date for d in days] == trip_dates(trip.start_date, trip.end_date)
    assert [d.day_number for d in days] == [1, 2, 3, 4]
    assert [len(d.items) for d in days] == [0, 1, 0, 0]
    assert days[1].items[0].id == "a"


def test_every_in_range_item_lands_in_exactly_one_bucket(trip: Trip) -> None:
    """Test that bucket count matches trip length and items are not duplicated."""
    items = [
        _item("a", date(2025, 11, 6), "09:00"),
        _item("b", date(2025, 11, 9)),
        _item("c", date(2025, 11, 6), "07:00"),
        _item("d", date(2025, 11, 8), "12:00"),
    ]

    days = group_by_day(trip, items)

    assert len(days) == trip.num_days
    bucketed = [item.id for day in days for item in day.items]
    assert sorted(bucketed) == ["a", "b", "c", "d"]


def test_out_of_range_items_are_dropped(trip: Trip) -> None:
    """Test that items dated outside the trip appear in no bucket."""
    items = [_item("early", date(2025, 11, 5)), _item("late", date(2025, 11, 10))]

    days = group_by_day(trip, items)

    assert all(day.items == [] for day in days)


def test_day_items_sorted_with_absent_time_first(trip: Trip) -> None:
    """Test lexicographic time order within a day."""
    day = date(2025, 11, 6)
    items = [_item("late", day, "19:00"), _item("untimed", day), _item("early", day, "07:30")]

    days = group_by_day(trip, items)

    assert [i.id for i in days[0].items] == ["untimed", "early", "late"]


def test_sort_is_stable_for_equal_times() -> None:
    """Test that equal-time items keep their input order."""
    day = date(2025, 11, 6)
    items = [
        _item("first", day, "09:00"),
        _item("second", day, "09:00"),
        _item("none-a", day),
        _item("third", day, "09:00"),
        _item("none-b", day),
    ]

    sorted_items = sort_day_items(items)

    assert [i.id for i in sorted_items] == ["none-a", "none-b", "first", "second", "third"]


def test_adjacent_times_non_decreasing(trip: Trip) -> None:
    """Test the ordering invariant across every bucket."""
    items = [
        _item(str(n), date(2025, 11, 6 + n % 4), time)
        for n, time in enumerate(["23:00", None, "00:15", "12:00", "12:00", "06:45", None, "18:30"])
    ]

    for day in group_by_day(trip, items):
        keys = [item.sort_time for item in day.items]
        assert keys == sorted(keys)
