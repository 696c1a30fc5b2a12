# services/finance/money.py
from typing import Iterable

from travelbudget.schemas.trip.trip_schema import DEFAULT_CURRENCY, TripLike, as_trip
from travelbudget.schemas.finance.finance_schema import TripFinancials, BudgetOverview
from travelbudget.services.finance.schedule import next_payment_due


def _present(amount) -> float:
    return amount if amount is not None else 0.0


def compute_total_cost(trip: TripLike) -> float:
    """Base cost plus flights, hotels (unless bundled into the base) and additional expenses."""
    trip = as_trip(trip)
    total = _present(trip.base_cost)

    for flight in trip.flights:
        total += _present(flight.cost)

    if not trip.includes_accommodation:
        for hotel in trip.hotels:
            total += _present(hotel.cost)

    for expense in trip.additional_expenses:
        total += _present(expense.amount)

    return total


def compute_total_paid(trip: TripLike) -> float:
    """Only items whose own paid flag is set count towards what has been paid."""
    trip = as_trip(trip)
    paid = 0.0

    if trip.deposit_paid:
        paid += _present(trip.deposit)

    for payment in trip.monthly_payments:
        if payment.paid:
            paid += _present(payment.amount)

    for payment in trip.payments:
        if payment.paid:
            paid += _present(payment.amount)

    return paid


def compute_remaining(trip: TripLike) -> float:
    # Negative when overpaid
    trip = as_trip(trip)
    return compute_total_cost(trip) - compute_total_paid(trip)


def compute_fleet_total(trips: Iterable[TripLike]) -> float:
    return sum((compute_total_cost(trip) for trip in trips), 0.0)


def compute_fleet_paid(trips: Iterable[TripLike]) -> float:
    return sum((compute_total_paid(trip) for trip in trips), 0.0)


def percent_of(part: float, whole: float) -> float:
    return (part / whole) * 100 if whole > 0 else 0.0


def trip_financials(trip: TripLike) -> TripFinancials:
    trip = as_trip(trip)
    total = compute_total_cost(trip)
    paid = compute_total_paid(trip)
    return TripFinancials(
        total_cost=total,
        total_paid=paid,
        remaining=total - paid,
        percent_paid=percent_of(paid, total),
        currency=trip.currency or DEFAULT_CURRENCY,
        next_payment_due=next_payment_due(trip),
    )


def budget_overview(trips: Iterable[TripLike]) -> BudgetOverview:
    trips = [as_trip(trip) for trip in trips]
    total = compute_fleet_total(trips)
    paid = compute_fleet_paid(trips)
    return BudgetOverview(
        total_cost=total,
        total_paid=paid,
        remaining=total - paid,
        percent_paid=percent_of(paid, total),
    )
