# slotbook/models/business.py
"""
Business Model
A service business that publishes weekly availability and receives bookings.
"""
from sqlalchemy import Column, String, DateTime, JSON, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from slotbook.models.base import Base


class Business(Base):
    __tablename__ = "businesses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    business_name = Column(String(255), nullable=False)
    owner_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(20), nullable=True)

    # Ordered, de-duplicated service labels
    service_types = Column(JSON, default=list, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Children go away with the business
    availability_days = relationship(
        "AvailabilityDay",
        back_populates="business",
        cascade="all, delete-orphan",
        order_by="AvailabilityDay.day_of_week",
    )
    bookings = relationship(
        "Booking",
        back_populates="business",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Business(id={self.id}, business_name={self.business_name})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "business_name": self.business_name,
            "owner_name": self.owner_name,
            "email": self.email,
            "phone": self.phone,
            "service_types": list(self.service_types or []),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def contact_card(self):
        """Public contact details only"""
        return {
            "business_name": self.business_name,
            "phone": self.phone,
            "email": self.email,
        }
