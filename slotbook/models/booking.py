# slotbook/models/booking.py
"""
Booking Model
A customer's reservation of one day-part on one calendar date.
"""
from sqlalchemy import (
    Column, String, Text, Date, DateTime, ForeignKey, Index, CheckConstraint, Uuid, text
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
import enum
from slotbook.models.base import Base


class TimeSlot(str, enum.Enum):
    """Bookable day-parts, in calendar order"""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class BookingStatus(str, enum.Enum):
    """Booking lifecycle states"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


SLOT_VALUES = [slot.value for slot in TimeSlot]
STATUS_VALUES = [status.value for status in BookingStatus]

# Only active bookings hold a slot
_ACTIVE_ONLY = text("status <> 'cancelled'")


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint(
            "time_slot IN ('morning', 'afternoon', 'evening')",
            name="ck_bookings_time_slot"
        ),
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'completed', 'cancelled')",
            name="ck_bookings_status"
        ),
        # At most one non-cancelled booking per (business, date, slot).
        # The store arbitrates concurrent reservations through this index.
        Index(
            "uq_bookings_active_slot",
            "business_id", "booking_date", "time_slot",
            unique=True,
            postgresql_where=_ACTIVE_ONLY,
            sqlite_where=_ACTIVE_ONLY,
        ),
        Index("ix_bookings_business_date", "business_id", "booking_date"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    business_id = Column(
        Uuid,
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False
    )

    # Customer info
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(20), nullable=True)
    customer_address = Column(Text, nullable=True)

    # Booking details
    service_type = Column(String(255), nullable=False)  # free text, not checked against business.service_types
    booking_date = Column(Date, nullable=False)
    time_slot = Column(String(20), nullable=False)
    service_description = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    business = relationship("Business", back_populates="bookings")

    def __repr__(self):
        return (
            f"<Booking(id={self.id}, business_id={self.business_id}, "
            f"date={self.booking_date}, slot={self.time_slot}, status={self.status})>"
        )

    @property
    def is_active(self) -> bool:
        return self.status != BookingStatus.CANCELLED.value

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "business_id": str(self.business_id),
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "customer_address": self.customer_address,
            "service_type": self.service_type,
            "booking_date": self.booking_date.isoformat() if self.booking_date else None,
            "time_slot": self.time_slot,
            "service_description": self.service_description,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
