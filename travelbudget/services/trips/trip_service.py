from datetime import date, datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from fastapi import HTTPException, status
from uuid import uuid4
from travelbudget.core.logger import logger
from travelbudget.models.trips.trip_model import TripRecord
from travelbudget.schemas.trip.trip_schema import Trip, TripBase, TripCreate, TripUpdate
from typing import Optional, List

_IDENTITY_FIELDS = {"id", "owner_id", "created_at", "updated_at"}


class TripService:
    """Owner-scoped trip storage. Records are validated through the Trip schema in both directions."""

    @staticmethod
    def _document(trip: TripBase) -> dict:
        return trip.model_dump(mode="json", exclude=_IDENTITY_FIELDS)

    @staticmethod
    def _sync_columns(record: TripRecord, trip: TripBase) -> None:
        record.name = trip.name
        record.destination = trip.destination
        record.start_date = trip.start_date
        record.end_date = trip.end_date

    @staticmethod
    def to_trip(record: TripRecord) -> Trip:
        return Trip.model_validate(record.to_dict())

    async def _get_record(self, db: AsyncSession, owner_id: str, trip_id: str) -> TripRecord:
        result = await db.execute(
            select(TripRecord).where(TripRecord.id == trip_id, TripRecord.owner_id == owner_id)
        )
        record = result.scalar_one_or_none()

        if not record:
            logger.warning(f"Trip not found: ID {trip_id} for user {owner_id}")
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")
        return record

    async def create_trip(self, db: AsyncSession, trip_data: TripCreate, owner_id: str) -> Trip:
        now = datetime.utcnow()
        record = TripRecord(
            id=str(uuid4()),
            owner_id=owner_id,
            document=self._document(trip_data),
            created_at=now,
            updated_at=now,
        )
        self._sync_columns(record, trip_data)
        db.add(record)
        await db.commit()
        await db.refresh(record)

        logger.info(f"Trip {record.id} created by user {owner_id}")
        return self.to_trip(record)

    async def get_user_trips(self, db: AsyncSession, owner_id: str, skip: int = 0, limit: Optional[int] = None) -> List[Trip]:
        query = (
            select(TripRecord)
            .where(TripRecord.owner_id == owner_id)
            .order_by(TripRecord.created_at.desc(), TripRecord.id)
            .offset(skip)
        )
        if limit is not None:
            query = query.limit(limit)

        result = await db.execute(query)
        trips = [self.to_trip(record) for record in result.scalars().all()]

        logger.info(f"Retrieved {len(trips)} trips for user {owner_id}")
        return trips

    async def get_trip_by_id(self, db: AsyncSession, owner_id: str, trip_id: str) -> Trip:
        record = await self._get_record(db, owner_id, trip_id)
        return self.to_trip(record)

    async def _save(self, db: AsyncSession, record: TripRecord, trip: TripBase) -> Trip:
        record.document = self._document(trip)
        self._sync_columns(record, trip)
        record.updated_at = datetime.utcnow()
        await db.commit()
        await db.refresh(record)
        return self.to_trip(record)

    async def update_trip(self, db: AsyncSession, trip_id: str, trip_data: TripUpdate, owner_id: str) -> Trip:
        record = await self._get_record(db, owner_id, trip_id)

        # Only fields present in the request replace stored ones
        update_data = trip_data.model_dump(exclude_unset=True)
        current = self.to_trip(record).model_dump()
        merged = Trip.model_validate({**current, **update_data})

        trip = await self._save(db, record, merged)
        logger.info(f"Trip ID {trip_id} updated by user {owner_id}")
        return trip

    async def toggle_payment(
        self,
        db: AsyncSession,
        trip_id: str,
        owner_id: str,
        kind: str,
        index: Optional[int] = None,
    ) -> Trip:
        """Flip the paid flag of the deposit, a monthly payment or an ad hoc payment."""
        record = await self._get_record(db, owner_id, trip_id)
        trip = self.to_trip(record)

        if kind == "deposit":
            trip.deposit_paid = not trip.deposit_paid
        elif kind in ("monthly", "payment"):
            entries = trip.monthly_payments if kind == "monthly" else trip.payments
            if index is None or not 0 <= index < len(entries):
                logger.warning(f"Payment {kind}[{index}] not found on trip {trip_id}")
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payment not found")
            entries[index].paid = not entries[index].paid
        else:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Unknown payment kind: {kind}"
            )

        trip = await self._save(db, record, trip)
        logger.info(f"Toggled {kind} payment on trip {trip_id} for user {owner_id}")
        return trip

    async def delete_trip(self, db: AsyncSession, trip_id: str, owner_id: str) -> dict:
        record = await self._get_record(db, owner_id, trip_id)
        await db.delete(record)
        await db.commit()

        logger.info(f"Trip ID {trip_id} deleted by user {owner_id}")
        return {"msg": "Trip deleted successfully"}

    async def export_trips(self, db: AsyncSession, owner_id: str, today: date) -> dict:
        """Backup payload of every trip the user owns."""
        trips = await self.get_user_trips(db, owner_id)
        logger.info(f"Exported {len(trips)} trips for user {owner_id}")
        return {
            "filename": f"travel-planner-backup-{today.isoformat()}.json",
            "exported_at": datetime.utcnow().isoformat(),
            "trips": [trip.model_dump(mode="json") for trip in trips],
        }
