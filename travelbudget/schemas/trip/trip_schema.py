from pydantic import BaseModel, Field, AliasChoices, AliasGenerator, BeforeValidator, field_validator
from pydantic.alias_generators import to_camel
from typing import Annotated, Any, List, Literal, Optional, Union
from collections.abc import Mapping
from datetime import date, datetime

from travelbudget.core.config import settings
from travelbudget.utils.parsing import parse_amount, parse_calendar_date

DEFAULT_CURRENCY = settings.DEFAULT_CURRENCY.upper()

_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0", ""}


def _as_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _as_flag(value: Any) -> bool:
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return bool(value)


def _as_tags(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple, set)):
        return []
    return [tag for tag in value if isinstance(tag, str) and tag.strip()]


# Lenient field types: malformed input becomes "absent" instead of a validation error
Amount = Annotated[Optional[float], BeforeValidator(parse_amount)]
CalendarDate = Annotated[Optional[date], BeforeValidator(parse_calendar_date)]
Text = Annotated[Optional[str], BeforeValidator(_as_text)]
Flag = Annotated[bool, BeforeValidator(_as_flag)]
Tags = Annotated[List[str], BeforeValidator(_as_tags)]


class TripDocumentModel(BaseModel):
    """Accepts the camelCase keys of stored trip documents as well as field names."""

    class Config:
        populate_by_name = True
        alias_generator = AliasGenerator(validation_alias=to_camel)
        extra = "ignore"


class Flight(TripDocumentModel):
    from_: Text = Field(default=None, validation_alias=AliasChoices("from", "from_"), serialization_alias="from")
    to: Text = None
    departure_date: CalendarDate = None
    airline: Text = None
    flight_number: Text = None
    cost: Amount = None
    confirmation_number: Text = None
    seat_assignment: Text = None


class Hotel(TripDocumentModel):
    name: Text = None
    location: Text = None
    check_in: CalendarDate = None
    check_out: CalendarDate = None
    cost: Amount = None
    confirmation_number: Text = None


class AdditionalExpense(TripDocumentModel):
    description: Text = None
    amount: Amount = None


class Payment(TripDocumentModel):
    description: Text = None
    amount: Amount = None
    due_date: CalendarDate = None
    paid: Flag = False


class ItineraryEntry(TripDocumentModel):
    date: CalendarDate = None
    title: Text = None
    description: Text = None


class ChecklistItem(TripDocumentModel):
    task: Text = None
    completed: Flag = False
    link: Text = None


class PackingItem(TripDocumentModel):
    item: Text = None
    packed: Flag = False
    link: Text = None


class TravelDocuments(TripDocumentModel):
    passport_expiry: CalendarDate = None
    visa_required: Flag = False
    visa_status: Text = None
    travel_insurance: Text = None
    insurance_provider: Text = None


class Photo(TripDocumentModel):
    url: Text = None
    caption: Text = None


class TripBase(TripDocumentModel):
    name: Text = None
    destination: Text = None
    description: Text = None
    notes: Text = None
    start_date: CalendarDate = None
    end_date: CalendarDate = None
    currency: Text = DEFAULT_CURRENCY
    tags: Tags = []

    is_booked: Flag = False
    is_group_trip: Flag = False
    group_trip_organizer: Text = None

    # Costs
    base_cost: Amount = None
    includes_accommodation: Flag = False
    flights: List[Flight] = []
    hotels: List[Hotel] = []
    additional_expenses: List[AdditionalExpense] = []

    # Payments
    deposit: Amount = None
    deposit_due_date: CalendarDate = None
    deposit_paid: Flag = False
    monthly_payments: List[Payment] = []
    payments: List[Payment] = []

    itinerary: List[ItineraryEntry] = []
    travel_checklist: List[ChecklistItem] = []
    packing_list: List[PackingItem] = []
    documents: Optional[TravelDocuments] = None
    photos: List[Photo] = []

    @field_validator(
        "flights", "hotels", "additional_expenses", "monthly_payments", "payments",
        "itinerary", "travel_checklist", "packing_list", "photos",
        mode="before",
    )
    @classmethod
    def keep_mapping_entries(cls, value: Any) -> list:
        # Absent or malformed lists read as empty; stray non-object entries are dropped
        if not isinstance(value, (list, tuple)):
            return []
        return [entry for entry in value if isinstance(entry, (Mapping, BaseModel))]

    @field_validator("documents", mode="before")
    @classmethod
    def documents_or_none(cls, value: Any) -> Any:
        return value if isinstance(value, (Mapping, BaseModel)) else None

    @field_validator("currency", mode="before")
    @classmethod
    def normalize_currency(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip().upper()
        return DEFAULT_CURRENCY


class TripCreate(TripBase):
    name: str = Field(..., min_length=1, max_length=200)


class TripUpdate(TripBase):
    pass


class Trip(TripBase):
    """A stored trip: the shape every finance calculation reads."""

    id: Text = None
    owner_id: Text = Field(default=None, validation_alias=AliasChoices("owner_id", "ownerId", "userId"))
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def timestamp_or_none(cls, value: Any) -> Any:
        if value is None or isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value)
            except ValueError:
                return None
        return None


PaymentKind = Literal["deposit", "monthly", "payment"]

TripLike = Union[Trip, Mapping[str, Any]]


def as_trip(trip: TripLike) -> Trip:
    """Read plain trip data (or any trip schema) as a Trip without ever rejecting it."""
    if isinstance(trip, Trip):
        return trip
    if isinstance(trip, BaseModel):
        return Trip.model_validate(trip.model_dump())
    if isinstance(trip, Mapping):
        return Trip.model_validate(dict(trip))
    return Trip()
