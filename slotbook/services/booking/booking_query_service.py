# ============================================================================
# slotbook/services/booking/booking_query_service.py
# Read side of bookings - no FastAPI dependencies
# ============================================================================
from datetime import date, timedelta
from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import case
from sqlalchemy.orm import Session

from slotbook.config.database import commit_or_rollback, store_call
from slotbook.core.exceptions import InvalidStatus, NotFound
from slotbook.models.booking import Booking, BookingStatus, SLOT_VALUES, STATUS_VALUES
from slotbook.services.business.business_service import BusinessService
from slotbook.utils.validation import coerce_uuid, parse_calendar_date

logger = logging.getLogger(__name__)

# morning, afternoon, evening rather than alphabetical
_SLOT_ORDER = case(
    {slot: position for position, slot in enumerate(SLOT_VALUES)},
    value=Booking.time_slot,
)


class BookingQueryService:
    """Listing, lookup and removal of bookings"""

    @staticmethod
    @store_call
    def list_bookings(
            db: Session,
            business_id: Any,
            booking_date: Optional[Any] = None,
            status: Optional[str] = None
    ) -> List[Booking]:
        """All bookings for a business, optionally filtered by date and status"""
        business = BusinessService.require_business(db, business_id)
        query = db.query(Booking).filter(Booking.business_id == business.id)

        if booking_date:
            query = query.filter(Booking.booking_date == parse_calendar_date(booking_date))
        if status:
            if status not in STATUS_VALUES:
                raise InvalidStatus(status, STATUS_VALUES)
            query = query.filter(Booking.status == status)

        return query.order_by(Booking.booking_date.asc(), _SLOT_ORDER).all()

    @staticmethod
    @store_call
    def get_todays_bookings(
            db: Session,
            business_id: Any,
            today: Optional[date] = None
    ) -> List[Booking]:
        today = today or date.today()
        return BookingQueryService.list_bookings(db, business_id, booking_date=today)

    @staticmethod
    @store_call
    def get_upcoming_bookings(
            db: Session,
            business_id: Any,
            days: int = 7,
            today: Optional[date] = None
    ) -> List[Booking]:
        """Active, not yet completed bookings from today through today + days"""
        business = BusinessService.require_business(db, business_id)
        today = today or date.today()

        return db.query(Booking).filter(
            Booking.business_id == business.id,
            Booking.booking_date >= today,
            Booking.booking_date <= today + timedelta(days=days),
            Booking.status.notin_([BookingStatus.CANCELLED.value, BookingStatus.COMPLETED.value])
        ).order_by(Booking.booking_date.asc(), _SLOT_ORDER).all()

    @staticmethod
    @store_call
    def get_booking(db: Session, booking_id: Any) -> Booking:
        """Get a booking by id or raise NotFound"""
        try:
            booking_uuid = coerce_uuid(booking_id)
        except NotFound:
            raise NotFound("Booking not found", booking_id=str(booking_id))

        booking = db.query(Booking).filter(Booking.id == booking_uuid).first()
        if not booking:
            raise NotFound("Booking not found", booking_id=str(booking_id))
        return booking

    @staticmethod
    @store_call
    def delete_booking(db: Session, booking_id: Any) -> Dict[str, Any]:
        """Remove a booking regardless of its status"""
        booking = BookingQueryService.get_booking(db, booking_id)
        snapshot = booking.to_dict()

        db.delete(booking)
        commit_or_rollback(db, "delete booking")

        logger.info(f"Deleted booking {snapshot['id']} ({snapshot['status']})")
        return snapshot
