# slotbook/models/availability.py
from sqlalchemy import (
    Column, Integer, Boolean, ForeignKey, UniqueConstraint, CheckConstraint, Uuid
)
from sqlalchemy.orm import relationship
from slotbook.models.base import Base


class AvailabilityDay(Base):
    """
    Weekly availability template row: which day-parts a business is open on
    one weekday. At most one row per (business, weekday); a missing row means
    "not configured", which is different from a row with every flag off.
    """
    __tablename__ = "availability"
    __table_args__ = (
        UniqueConstraint("business_id", "day_of_week", name="uq_availability_business_day"),
        CheckConstraint("day_of_week >= 0 AND day_of_week <= 6", name="ck_availability_day_of_week"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    business_id = Column(
        Uuid,
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    morning_available = Column(Boolean, nullable=False, default=False)
    afternoon_available = Column(Boolean, nullable=False, default=False)
    evening_available = Column(Boolean, nullable=False, default=False)

    business = relationship("Business", back_populates="availability_days")

    def __repr__(self):
        return f"<AvailabilityDay(business_id={self.business_id}, day={self.day_of_week})>"

    @property
    def is_open(self) -> bool:
        return self.morning_available or self.afternoon_available or self.evening_available

    def to_dict(self):
        return {
            "id": self.id,
            "business_id": str(self.business_id),
            "day_of_week": self.day_of_week,
            "morning_available": self.morning_available,
            "afternoon_available": self.afternoon_available,
            "evening_available": self.evening_available,
        }
