from sqlalchemy import Column, String, Date, DateTime, JSON, Index
from travelbudget.core.database import Base
from datetime import datetime
import uuid


class TripRecord(Base):
    """
    One stored trip.

    The full trip document lives in `document`; the scalar columns mirror the
    fields used for ownership checks and ordering.
    """
    __tablename__ = "trips"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(String(128), nullable=False, index=True)
    name = Column(String(200), nullable=True)
    destination = Column(String(255), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    document = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_trips_owner_created", "owner_id", "created_at"),
    )

    def to_dict(self):
        """Trip document merged with the identity and timestamp columns"""
        return {
            **(self.document or {}),
            "id": self.id,
            "owner_id": self.owner_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
