# services/finance/status.py
import math
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Union

from travelbudget.core.logger import logger
from travelbudget.schemas.trip.trip_schema import TripLike, as_trip
from travelbudget.schemas.finance.finance_schema import TripStatus, TripsByStatus
from travelbudget.utils.parsing import as_instant

Moment = Union[date, datetime]


def classify(trip: TripLike, now: Moment) -> TripStatus:
    """
    Derive where a trip stands relative to `now`.

    The upcoming check runs before the completed check, so a malformed trip
    whose end precedes its start and that satisfies both reads as upcoming.
    A missing start or end date never satisfies its comparison. Calendar
    dates compare as midnight of that day; pass a plain date for `now` to
    compare whole days.
    """
    trip = as_trip(trip)
    instant = as_instant(now)

    if trip.start_date is not None and as_instant(trip.start_date) > instant:
        return TripStatus.upcoming
    if trip.end_date is not None and as_instant(trip.end_date) < instant:
        return TripStatus.completed
    return TripStatus.active


def classify_all(trips: Iterable[TripLike], now: Moment) -> TripsByStatus:
    groups = {status: [] for status in TripStatus}
    for trip in trips:
        trip = as_trip(trip)
        groups[classify(trip, now)].append(trip)

    logger.debug(
        f"Classified trips: {len(groups[TripStatus.upcoming])} upcoming, "
        f"{len(groups[TripStatus.active])} active, {len(groups[TripStatus.completed])} completed"
    )
    return TripsByStatus(
        upcoming=groups[TripStatus.upcoming],
        active=groups[TripStatus.active],
        completed=groups[TripStatus.completed],
    )


def days_between(target: Moment, now: Moment) -> int:
    """Ceiling of the day difference from `now` to `target`."""
    delta: timedelta = as_instant(target) - as_instant(now)
    return math.ceil(delta.total_seconds() / 86400)


def days_until_trip(start_date: Optional[date], now: Moment) -> Optional[int]:
    if start_date is None:
        return None
    return max(days_between(start_date, now), 0)


def countdown_text(start_date: Optional[date], now: Moment) -> str:
    days = days_until_trip(start_date, now)
    if days is None:
        return ""
    if days == 0:
        return "Today!"
    if days == 1:
        return "1 day"
    return f"{days} days"
