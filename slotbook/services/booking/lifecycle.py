# slotbook/services/booking/lifecycle.py
"""
Booking status changes.

The intended flow is pending -> confirmed -> completed, with cancelled
reachable from any non-terminal state. Nothing moves on its own and the
update below does not enforce that flow: any known status may replace any
other. Off-flow changes are only logged.
"""
from typing import Any, Dict, FrozenSet
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from slotbook.config.database import commit_or_rollback, store_call
from slotbook.core.exceptions import InvalidStatus, SlotConflict
from slotbook.models.booking import Booking, BookingStatus, STATUS_VALUES
from slotbook.services.booking.booking_query_service import BookingQueryService

logger = logging.getLogger(__name__)

DOCUMENTED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    BookingStatus.PENDING.value: frozenset({BookingStatus.CONFIRMED.value, BookingStatus.CANCELLED.value}),
    BookingStatus.CONFIRMED.value: frozenset({BookingStatus.COMPLETED.value, BookingStatus.CANCELLED.value}),
    BookingStatus.COMPLETED.value: frozenset(),
    BookingStatus.CANCELLED.value: frozenset(),
}


def is_documented_transition(current: str, new: str) -> bool:
    return current == new or new in DOCUMENTED_TRANSITIONS.get(current, frozenset())


@store_call
def update_status(db: Session, booking_id: Any, new_status: Any) -> Booking:
    """
    Overwrite a booking's status.

    Raises InvalidStatus for unknown values and NotFound for missing
    bookings. Moving a cancelled booking back to an active status fails
    with SlotConflict if its slot has since been taken by someone else.
    """
    if new_status not in STATUS_VALUES:
        raise InvalidStatus(new_status, STATUS_VALUES)

    booking = BookingQueryService.get_booking(db, booking_id)

    previous = booking.status
    if not is_documented_transition(previous, new_status):
        logger.warning(f"Booking {booking.id} moved off the usual flow: {previous} -> {new_status}")

    booking.status = new_status
    try:
        commit_or_rollback(db, "update booking status")
    except IntegrityError:
        raise SlotConflict(booking.time_slot, booking.booking_date.isoformat())

    db.refresh(booking)
    logger.info(f"Booking {booking.id} status {previous} -> {new_status}")
    return booking
