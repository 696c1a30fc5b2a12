"""Tests for lenient trip parsing at the storage boundary."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from travelbudget.core.config import settings
from travelbudget.schemas.trip.trip_schema import DEFAULT_CURRENCY, Trip, TripCreate, as_trip
from travelbudget.services.finance.money import trip_financials
from travelbudget.utils.parsing import parse_amount, parse_calendar_date


@pytest.mark.parametrize(
    "raw, expected",
    [
        (12, 12.0),
        (12.5, 12.5),
        ("12.50", 12.5),
        ("  300 ", 300.0),
        ("120 EUR", 120.0),
        ("1,200", 1.0),
        (".5", 0.5),
        ("-40", -40.0),
        ("abc", None),
        ("", None),
        (None, None),
        (True, None),
        (float("nan"), None),
        ([], None),
        (Decimal("19.99"), 19.99),
        (Decimal("NaN"), None),
        (Decimal("sNaN"), None),
        (10**400, None),
        ("1e999", None),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2025-03-01", date(2025, 3, 1)),
        ("2025-03-01T10:00:00Z", date(2025, 3, 1)),
        (date(2025, 3, 1), date(2025, 3, 1)),
        (datetime(2025, 3, 1, 23, 59), date(2025, 3, 1)),
        ("03/01/2025", None),
        ("", None),
        (20250301, None),
    ],
)
def test_parse_calendar_date(raw, expected):
    assert parse_calendar_date(raw) == expected


def test_camel_case_document(sample_trip):
    trip = as_trip(sample_trip)
    assert trip.base_cost == 1000.0
    assert trip.deposit_paid is True
    assert trip.deposit_due_date == date(2024, 12, 1)
    assert trip.flights[0].from_ == "LHR"
    assert trip.monthly_payments[1].due_date == date(2025, 1, 5)
    assert trip.currency == "EUR"


def test_snake_case_fields_are_accepted():
    trip = Trip(base_cost="10", monthly_payments=[{"amount": 5, "due_date": "2025-01-01"}])
    assert trip.base_cost == 10.0
    assert trip.monthly_payments[0].due_date == date(2025, 1, 1)


def test_garbage_never_fails_validation():
    trip = as_trip({
        "name": 42,
        "tags": "solo",
        "currency": "",
        "documents": "lost",
        "monthlyPayments": [None, 3, {"amount": "?", "paid": "yes"}],
        "createdAt": "yesterday",
        "userId": "u-9",
    })
    assert trip.name == "42"
    assert trip.tags == []
    assert trip.currency == DEFAULT_CURRENCY
    assert trip.documents is None
    assert len(trip.monthly_payments) == 1
    assert trip.monthly_payments[0].amount is None
    assert trip.monthly_payments[0].paid is True
    assert trip.created_at is None
    assert trip.owner_id == "u-9"


def test_nested_documents():
    trip = as_trip({"documents": {"passportExpiry": "2030-05-01", "visaRequired": "true", "visaStatus": "pending"}})
    assert trip.documents.passport_expiry == date(2030, 5, 1)
    assert trip.documents.visa_required is True


def test_non_mapping_reads_as_empty_trip():
    assert as_trip(None) == Trip()


def test_create_requires_name():
    with pytest.raises(ValueError):
        TripCreate(destination="Nowhere")


def test_default_currency_comes_from_settings():
    assert DEFAULT_CURRENCY == settings.DEFAULT_CURRENCY.upper()
    assert Trip().currency == DEFAULT_CURRENCY
    assert as_trip({"currency": "  "}).currency == DEFAULT_CURRENCY
    assert trip_financials({}).currency == DEFAULT_CURRENCY
