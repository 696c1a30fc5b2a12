"""Tests for trip cost and payment totals."""

from decimal import Decimal
from fractions import Fraction

import pytest

from travelbudget.schemas.trip.trip_schema import Trip
from travelbudget.services.finance.money import (
    budget_overview,
    compute_fleet_paid,
    compute_fleet_total,
    compute_remaining,
    compute_total_cost,
    compute_total_paid,
    trip_financials,
)


class TestTotalCost:
    def test_reference_example(self):
        trip = {
            "baseCost": 1000,
            "flights": [{"cost": 200}],
            "hotels": [{"cost": 300}],
            "includesAccommodation": False,
            "deposit": 200,
            "depositPaid": True,
        }
        assert compute_total_cost(trip) == 1500
        assert compute_total_paid(trip) == 200
        assert compute_remaining(trip) == 1300

    @pytest.mark.parametrize(
        "base_cost, expected",
        [(750, 750.0), ("420.5", 420.5), (None, 0.0), (Decimal("1000.50"), 1000.5), (Fraction(3, 2), 1.5)],
    )
    def test_base_cost_only(self, base_cost, expected):
        assert compute_total_cost({"baseCost": base_cost}) == expected

    def test_empty_trip_costs_nothing(self):
        assert compute_total_cost({}) == 0.0
        assert compute_total_paid({}) == 0.0
        assert compute_remaining({}) == 0.0

    def test_hotels_skipped_when_accommodation_included(self):
        trip = {"baseCost": 1000, "hotels": [{"cost": 300}, {"cost": 150}], "includesAccommodation": True}
        assert compute_total_cost(trip) == 1000

    def test_additional_expenses_are_added(self):
        trip = {"additionalExpenses": [{"description": "Visa", "amount": "60"}, {"amount": 15.5}]}
        assert compute_total_cost(trip) == 75.5

    def test_malformed_amounts_count_as_zero_without_losing_siblings(self):
        trip = {
            "baseCost": "not a number",
            "flights": [{"cost": "abc"}, {"cost": "120 GBP"}, {"cost": None}, "garbage"],
            "hotels": "not a list",
            "additionalExpenses": [{"amount": True}, {"amount": 30}],
        }
        assert compute_total_cost(trip) == 150.0

    def test_decimal_amounts(self):
        trip = {"baseCost": Decimal("1000.50"), "flights": [{"cost": Decimal("200")}]}
        assert compute_total_cost(trip) == 1200.5

    def test_amount_too_large_for_float_counts_as_zero(self):
        trip = {"baseCost": 10**400, "flights": [{"cost": 200}], "deposit": 10**400, "depositPaid": True}
        assert compute_total_cost(trip) == 200
        assert compute_total_paid(trip) == 0.0

    def test_accepts_typed_trip(self):
        trip = Trip(base_cost=500, flights=[{"cost": 100}])
        assert compute_total_cost(trip) == 600


class TestTotalPaid:
    def test_only_flagged_items_count(self):
        trip = {
            "deposit": 500,
            "depositPaid": False,
            "monthlyPayments": [
                {"amount": 100, "paid": True},
                {"amount": 999, "paid": False},
            ],
            "payments": [
                {"amount": "25", "paid": True},
                {"amount": 1000},
            ],
        }
        assert compute_total_paid(trip) == 125.0

    def test_paid_deposit_counts(self):
        assert compute_total_paid({"deposit": "300", "depositPaid": True}) == 300.0

    def test_paid_flag_strings(self):
        trip = {"monthlyPayments": [{"amount": 10, "paid": "true"}, {"amount": 20, "paid": "false"}]}
        assert compute_total_paid(trip) == 10.0


class TestRemaining:
    def test_overpaid_trip_goes_negative(self):
        trip = {"baseCost": 100, "payments": [{"amount": 150, "paid": True}]}
        assert compute_remaining(trip) == -50.0

    def test_remaining_is_exact_difference(self, sample_trip):
        assert compute_remaining(sample_trip) == compute_total_cost(sample_trip) - compute_total_paid(sample_trip)


class TestFleet:
    def test_fleet_sums(self, sample_trip):
        trips = [sample_trip, {"baseCost": 60, "depositPaid": True, "deposit": 10}]
        assert compute_fleet_total(trips) == 1540 + 60
        assert compute_fleet_paid(trips) == 200 + 10

    def test_empty_fleet(self):
        assert compute_fleet_total([]) == 0.0
        assert compute_fleet_paid([]) == 0.0

    def test_budget_overview(self, sample_trip):
        overview = budget_overview([sample_trip])
        assert overview.total_cost == 1540
        assert overview.total_paid == 200
        assert overview.remaining == 1340
        assert overview.percent_paid == pytest.approx(200 / 1540 * 100)

    def test_budget_overview_without_costs(self):
        assert budget_overview([{}]).percent_paid == 0.0


def test_trip_financials(sample_trip):
    financials = trip_financials(sample_trip)
    assert financials.total_cost == 1540
    assert financials.remaining == 1340
    assert financials.currency == "EUR"
    assert financials.next_payment_due.description == "January"
