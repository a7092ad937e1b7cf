# ============================================================================
# slotbook/services/booking/booking_service.py
# Reservation: validate, check availability, insert under the store's guard
# ============================================================================
"""
Turns a reservation request into a pending booking.

The availability and conflict checks below exist to give callers precise
errors; they do not by themselves make the insert safe. Two requests can
both pass them at the same moment. What makes the outcome correct is the
partial unique index on (business_id, booking_date, time_slot) for
non-cancelled rows: the store accepts exactly one of the inserts and the
other fails with an IntegrityError, which is reported as SlotConflict.
"""
from datetime import date
from typing import Any, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from slotbook.config.database import commit_or_rollback, store_call
from slotbook.core.exceptions import InvalidSlot, NotFound, SlotConflict, SlotNotOffered
from slotbook.models.availability import AvailabilityDay
from slotbook.models.booking import Booking, BookingStatus, SLOT_VALUES
from slotbook.services.availability.slot_calculator import open_slots, subtract_taken, weekday_index
from slotbook.services.booking.conflict_checker import is_slot_taken, taken_slots
from slotbook.services.business.business_service import BusinessService
from slotbook.utils.validation import (
    ensure_not_past,
    parse_calendar_date,
    require_fields,
    validate_email,
)

logger = logging.getLogger(__name__)

BOOKING_REQUIRED_FIELDS = [
    "business_id",
    "customer_name",
    "customer_email",
    "service_type",
    "booking_date",
    "time_slot",
]


def _strip_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class BookingService:
    """Handles reservation of day-part slots"""

    @staticmethod
    @store_call
    def reserve(
            db: Session,
            business_id: Any,
            booking_date: Any,
            time_slot: Optional[str],
            customer_name: Optional[str],
            customer_email: Optional[str],
            service_type: Optional[str],
            customer_phone: Optional[str] = None,
            customer_address: Optional[str] = None,
            service_description: Optional[str] = None,
            today: Optional[date] = None
    ) -> Booking:
        """
        Create a pending booking for one (business, date, slot).

        Checks run in a fixed order and the first failure wins:
        MissingField, InvalidEmail, InvalidSlot, InvalidDate/PastDate,
        NotFound (unknown business), SlotNotOffered, SlotConflict.
        """
        require_fields(
            {
                "business_id": business_id,
                "customer_name": customer_name,
                "customer_email": customer_email,
                "service_type": service_type,
                "booking_date": booking_date,
                "time_slot": time_slot,
            },
            BOOKING_REQUIRED_FIELDS,
            text_fields=("customer_name", "service_type"),
        )
        customer_email = validate_email(customer_email)

        if time_slot not in SLOT_VALUES:
            raise InvalidSlot(time_slot, SLOT_VALUES)

        day = ensure_not_past(parse_calendar_date(booking_date), today)
        business = BusinessService.require_business(db, business_id)
        day_label = day.isoformat()

        template = db.query(AvailabilityDay).filter(
            AvailabilityDay.business_id == business.id,
            AvailabilityDay.day_of_week == weekday_index(day)
        ).first()
        offered = open_slots(template)
        if time_slot not in offered:
            still_open = subtract_taken(offered, taken_slots(db, business.id, day))
            raise SlotNotOffered(time_slot, day_label, still_open)

        if is_slot_taken(db, business.id, day, time_slot):
            logger.info(f"Slot {time_slot} on {day_label} already taken for business {business.id}")
            raise SlotConflict(time_slot, day_label)

        booking = Booking(
            business_id=business.id,
            customer_name=customer_name.strip(),
            customer_email=customer_email,
            customer_phone=_strip_or_none(customer_phone),
            customer_address=_strip_or_none(customer_address),
            service_type=service_type.strip(),
            booking_date=day,
            time_slot=time_slot,
            service_description=_strip_or_none(service_description),
            status=BookingStatus.PENDING.value,
        )
        db.add(booking)

        try:
            commit_or_rollback(db, "create booking")
        except IntegrityError:
            # Another reservation for the same slot committed first
            if BusinessService.get_business(db, business.id) is None:
                raise NotFound("Business not found", business_id=str(business_id))
            logger.info(f"Lost race for {time_slot} on {day_label} at business {business.id}")
            raise SlotConflict(time_slot, day_label)

        db.refresh(booking)
        logger.info(
            f"Booking {booking.id} created for business {business.id}: "
            f"{day_label} {time_slot}"
        )
        return booking
