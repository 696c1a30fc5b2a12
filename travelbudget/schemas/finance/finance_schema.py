from pydantic import BaseModel
from typing import Dict, List, Optional
from datetime import date
import enum

from travelbudget.schemas.trip.trip_schema import DEFAULT_CURRENCY, Payment, Trip


class TripStatus(str, enum.Enum):
    upcoming = "upcoming"
    active = "active"
    completed = "completed"


class AlertType(str, enum.Enum):
    urgent = "urgent"
    upcoming = "upcoming"


class TripFinancials(BaseModel):
    total_cost: float
    total_paid: float
    remaining: float
    percent_paid: float
    currency: str
    next_payment_due: Optional[Payment] = None


class BudgetOverview(BaseModel):
    total_cost: float
    total_paid: float
    remaining: float
    percent_paid: float


class TripsByStatus(BaseModel):
    upcoming: List[Trip] = []
    active: List[Trip] = []
    completed: List[Trip] = []


class PaymentAlert(BaseModel):
    type: AlertType
    trip_id: Optional[str] = None
    trip_name: Optional[str] = None
    amount: float
    due_date: date
    description: str
    currency: str = DEFAULT_CURRENCY
    days_until: int


class ScheduledPayment(BaseModel):
    trip_id: Optional[str] = None
    trip_name: Optional[str] = None
    amount: float
    description: str
    kind: str  # deposit, monthly or payment
    due_date: date
    currency: str = DEFAULT_CURRENCY


class MonthlyBucket(BaseModel):
    total: float = 0.0
    first_due_date: date
    payments: List[ScheduledPayment] = []


class NextTrip(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    destination: Optional[str] = None
    start_date: date
    days_until: int


class TravelStats(BaseModel):
    total_trips: int
    total_budget: float
    total_spent: float
    average_trip_cost: float
    destination_count: int
    upcoming_count: int
    active_count: int
    completed_count: int
    pending_booking_count: int
    budget_used_percent: float
    next_trip: Optional[NextTrip] = None


class CalendarDay(BaseModel):
    day: date
    trips: List[Trip] = []
    payments: List[ScheduledPayment] = []


MonthlySchedule = Dict[str, MonthlyBucket]
