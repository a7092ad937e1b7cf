# slotbook/models/__init__.py
from .base import Base
from .business import Business
from .availability import AvailabilityDay
from .booking import Booking, BookingStatus, TimeSlot, SLOT_VALUES, STATUS_VALUES

__all__ = [
    "Base",
    "Business",
    "AvailabilityDay",
    "Booking",
    "BookingStatus",
    "TimeSlot",
    "SLOT_VALUES",
    "STATUS_VALUES",
]
