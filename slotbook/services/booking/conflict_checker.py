# slotbook/services/booking/conflict_checker.py
"""Lookups for active bookings that already hold a slot"""
from datetime import date
from typing import Set
from uuid import UUID

from sqlalchemy.orm import Session

from slotbook.config.database import store_call
from slotbook.models.booking import Booking, BookingStatus


def _active_bookings(db: Session, business_id: UUID, booking_date: date):
    return db.query(Booking).filter(
        Booking.business_id == business_id,
        Booking.booking_date == booking_date,
        Booking.status != BookingStatus.CANCELLED.value
    )


@store_call
def taken_slots(db: Session, business_id: UUID, booking_date: date) -> Set[str]:
    """All slots occupied by non-cancelled bookings on one calendar day"""
    rows = _active_bookings(db, business_id, booking_date).with_entities(Booking.time_slot).all()
    return {row.time_slot for row in rows}


@store_call
def is_slot_taken(db: Session, business_id: UUID, booking_date: date, slot: str) -> bool:
    """True when an active booking already occupies (business, date, slot)"""
    count = _active_bookings(db, business_id, booking_date).filter(
        Booking.time_slot == slot
    ).count()
    return count > 0
