from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from travelbudget.schemas.trip.trip_schema import Trip, TripCreate, TripUpdate, PaymentKind
from travelbudget.schemas.finance.finance_schema import TripFinancials, TripStatus
from travelbudget.core.database import get_db
from travelbudget.dependencies.owner import Clock, get_clock, get_owner_id
from travelbudget.services.trips.trip_service import TripService
from travelbudget.services.finance.money import trip_financials
from travelbudget.services.finance.status import classify, countdown_text

router = APIRouter(prefix="/trips", tags=['Trips'])


class TripResponse(Trip):
    status: TripStatus
    countdown: str
    financials: TripFinancials


def get_trip_service() -> TripService:
    return TripService()


def to_response(trip: Trip, clock: Clock) -> TripResponse:
    # Derived fields are recomputed on every read
    now = clock()
    return TripResponse(
        **trip.model_dump(),
        status=classify(trip, now),
        countdown=countdown_text(trip.start_date, now),
        financials=trip_financials(trip),
    )


@router.post("", response_model=TripResponse, status_code=201)
async def create_trip_route(
    trip: TripCreate,
    db: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
    clock: Clock = Depends(get_clock),
    trip_service: TripService = Depends(get_trip_service)
):
    created = await trip_service.create_trip(db, trip, owner_id)
    return to_response(created, clock)


@router.get("", response_model=list[TripResponse])
async def get_my_trips(
    skip: int = 0,
    limit: Optional[int] = Query(None, gt=0),
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
    clock: Clock = Depends(get_clock),
    trip_service: TripService = Depends(get_trip_service)
):
    trips = await trip_service.get_user_trips(session, owner_id, skip, limit)
    return [to_response(trip, clock) for trip in trips]


@router.get("/export")
async def export_trips_route(
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
    clock: Clock = Depends(get_clock),
    trip_service: TripService = Depends(get_trip_service)
):
    return await trip_service.export_trips(session, owner_id, clock().date())


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(
    trip_id: str,
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
    clock: Clock = Depends(get_clock),
    trip_service: TripService = Depends(get_trip_service)
):
    trip = await trip_service.get_trip_by_id(session, owner_id, trip_id)
    return to_response(trip, clock)


@router.patch("/{trip_id}", response_model=TripResponse)
async def update_trip_route(
    trip_id: str,
    trip_update: TripUpdate,
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
    clock: Clock = Depends(get_clock),
    trip_service: TripService = Depends(get_trip_service)
):
    trip = await trip_service.update_trip(session, trip_id, trip_update, owner_id)
    return to_response(trip, clock)


@router.post("/{trip_id}/payments/{kind}/toggle", response_model=TripResponse)
async def toggle_payment_route(
    trip_id: str,
    kind: PaymentKind,
    index: Optional[int] = Query(None, ge=0),
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
    clock: Clock = Depends(get_clock),
    trip_service: TripService = Depends(get_trip_service)
):
    trip = await trip_service.toggle_payment(session, trip_id, owner_id, kind, index)
    return to_response(trip, clock)


@router.delete("/{trip_id}")
async def delete_trip_route(
    trip_id: str,
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
    trip_service: TripService = Depends(get_trip_service)
):
    return await trip_service.delete_trip(session, trip_id, owner_id)
