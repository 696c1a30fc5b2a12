from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Literal, Optional
from datetime import date

from travelbudget.core.config import settings
from travelbudget.core.database import get_db
from travelbudget.dependencies.owner import Clock, get_clock, get_owner_id
from travelbudget.schemas.finance.finance_schema import (
    BudgetOverview, CalendarDay, MonthlySchedule, PaymentAlert, TravelStats, TripsByStatus,
)
from travelbudget.schemas.trip.trip_schema import Trip
from travelbudget.services.trips.trip_service import TripService
from travelbudget.services.finance.money import budget_overview
from travelbudget.services.finance.status import classify_all
from travelbudget.services.finance.schedule import (
    monthly_payment_schedule, payments_due_on, trips_on_date, upcoming_payment_alerts,
)
from travelbudget.services.finance.stats import all_tags, filter_trips, sort_trips, travel_stats

router = APIRouter(prefix="/finance", tags=["Finance Dashboard"])


async def load_trips(
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
) -> List[Trip]:
    return await TripService().get_user_trips(session, owner_id)


@router.get("/overview", response_model=BudgetOverview)
async def get_budget_overview(trips: List[Trip] = Depends(load_trips)):
    return budget_overview(trips)


@router.get("/alerts", response_model=List[PaymentAlert])
async def get_payment_alerts(
    trips: List[Trip] = Depends(load_trips),
    clock: Clock = Depends(get_clock),
):
    return upcoming_payment_alerts(trips, clock(), window_days=settings.URGENT_WINDOW_DAYS)


@router.get("/schedule", response_model=MonthlySchedule)
async def get_monthly_schedule(trips: List[Trip] = Depends(load_trips)):
    return monthly_payment_schedule(trips)


@router.get("/status", response_model=TripsByStatus)
async def get_trips_by_status(
    trips: List[Trip] = Depends(load_trips),
    clock: Clock = Depends(get_clock),
):
    return classify_all(trips, clock())


@router.get("/stats", response_model=TravelStats)
async def get_travel_stats(
    trips: List[Trip] = Depends(load_trips),
    clock: Clock = Depends(get_clock),
):
    return travel_stats(trips, clock())


@router.get("/calendar", response_model=CalendarDay)
async def get_calendar_day(
    day: date = Query(...),
    trips: List[Trip] = Depends(load_trips),
):
    return CalendarDay(day=day, trips=trips_on_date(trips, day), payments=payments_due_on(trips, day))


@router.get("/trips", response_model=List[Trip])
async def get_dashboard_trips(
    status: Literal["all", "upcoming", "active", "completed"] = "all",
    tag: Optional[str] = None,
    q: Optional[str] = None,
    sort_by: Literal["date", "name", "cost"] = "date",
    trips: List[Trip] = Depends(load_trips),
    clock: Clock = Depends(get_clock),
):
    filtered = filter_trips(trips, clock(), status=status, tag=tag, query=q)
    return sort_trips(filtered, sort_by)


@router.get("/tags", response_model=List[str])
async def get_tags(trips: List[Trip] = Depends(load_trips)):
    return all_tags(trips)
