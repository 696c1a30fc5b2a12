# services/finance/stats.py
from collections import Counter
from datetime import date
from typing import Iterable, List, Optional

from travelbudget.schemas.trip.trip_schema import Trip, TripLike, as_trip
from travelbudget.schemas.finance.finance_schema import TripStatus, TravelStats, NextTrip
from travelbudget.services.finance.money import compute_fleet_total, compute_fleet_paid, percent_of
from travelbudget.services.finance.status import Moment, classify, classify_all, days_until_trip
from travelbudget.utils.parsing import as_instant


def _next_trip(trips: List[Trip], now: Moment) -> Optional[NextTrip]:
    instant = as_instant(now)
    ahead = [
        trip for trip in trips
        if trip.start_date is not None and as_instant(trip.start_date) > instant
    ]
    if not ahead:
        return None
    trip = min(ahead, key=lambda t: t.start_date)
    return NextTrip(
        id=trip.id,
        name=trip.name,
        destination=trip.destination,
        start_date=trip.start_date,
        days_until=days_until_trip(trip.start_date, now),
    )


def travel_stats(trips: Iterable[TripLike], now: Moment) -> TravelStats:
    trips = [as_trip(trip) for trip in trips]
    total_budget = compute_fleet_total(trips)
    total_spent = compute_fleet_paid(trips)

    destinations = {
        trip.destination.strip().lower()
        for trip in trips
        if trip.destination and trip.destination.strip()
    }
    statuses = Counter(classify(trip, now) for trip in trips)

    return TravelStats(
        total_trips=len(trips),
        total_budget=total_budget,
        total_spent=total_spent,
        average_trip_cost=total_budget / len(trips) if trips else 0.0,
        destination_count=len(destinations),
        upcoming_count=statuses[TripStatus.upcoming],
        active_count=statuses[TripStatus.active],
        completed_count=statuses[TripStatus.completed],
        pending_booking_count=sum(1 for trip in trips if not trip.is_booked),
        budget_used_percent=percent_of(total_spent, total_budget),
        next_trip=_next_trip(trips, now),
    )


def all_tags(trips: Iterable[TripLike]) -> List[str]:
    return sorted({tag for trip in trips for tag in as_trip(trip).tags})


def _matches(trip: Trip, query: str) -> bool:
    haystacks = (trip.name, trip.destination, trip.notes)
    return any(query in text.lower() for text in haystacks if text)


def filter_trips(
    trips: Iterable[TripLike],
    now: Moment,
    status: str = "all",
    tag: Optional[str] = None,
    query: Optional[str] = None,
) -> List[Trip]:
    """Dashboard filtering: status group, then tag, then free-text search."""
    trips = [as_trip(trip) for trip in trips]

    if status != "all":
        trips = getattr(classify_all(trips, now), TripStatus(status).value)

    if tag:
        trips = [trip for trip in trips if tag in trip.tags]

    if query and query.strip():
        needle = query.strip().lower()
        trips = [trip for trip in trips if _matches(trip, needle)]

    return trips


def sort_trips(trips: Iterable[TripLike], sort_by: str = "date") -> List[Trip]:
    trips = [as_trip(trip) for trip in trips]
    if sort_by == "date":
        # Trips without a start date go last
        return sorted(trips, key=lambda t: (t.start_date is None, t.start_date or date.min))
    if sort_by == "name":
        return sorted(trips, key=lambda t: (t.name or "").lower())
    if sort_by == "cost":
        return sorted(trips, key=lambda t: t.base_cost or 0.0, reverse=True)
    return trips
