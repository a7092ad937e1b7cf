# ============================================================================
# slotbook/api/v1/bookings.py
# Reservation and booking management endpoints - thin HTTP layer
# ============================================================================
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from slotbook.config.database import get_db
from slotbook.config.settings import settings
from slotbook.schemas.booking import (
    BookingCreateRequest,
    BookingEnvelope,
    BookingListResponse,
    BookingStatusRequest,
)
from slotbook.services.booking import lifecycle
from slotbook.services.booking.booking_query_service import BookingQueryService
from slotbook.services.booking.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


def _listing(bookings):
    return {
        "success": True,
        "count": len(bookings),
        "bookings": [booking.to_dict() for booking in bookings],
    }


@router.post("", response_model=BookingEnvelope, status_code=201)
def create_booking(payload: BookingCreateRequest, db: Session = Depends(get_db)):
    """
    Reserve one slot. Fails with a typed error (400/404/409/503) when the
    request is invalid, the slot is not offered, or it is already taken.
    """
    booking = BookingService.reserve(
        db,
        business_id=payload.business_id,
        booking_date=payload.booking_date,
        time_slot=payload.time_slot,
        customer_name=payload.customer_name,
        customer_email=payload.customer_email,
        service_type=payload.service_type,
        customer_phone=payload.customer_phone,
        customer_address=payload.customer_address,
        service_description=payload.service_description,
    )
    return {
        "success": True,
        "message": "Booking created successfully",
        "booking": booking.to_dict(),
    }


@router.get("/business/{business_id}", response_model=BookingListResponse)
def list_bookings(
        business_id: str,
        date: Optional[str] = Query(None, description="Only bookings on this date (YYYY-MM-DD)"),
        status: Optional[str] = Query(None, description="Filter by status"),
        db: Session = Depends(get_db)
):
    bookings = BookingQueryService.list_bookings(db, business_id, booking_date=date, status=status)
    return _listing(bookings)


@router.get("/business/{business_id}/today", response_model=BookingListResponse)
def get_todays_bookings(business_id: str, db: Session = Depends(get_db)):
    return _listing(BookingQueryService.get_todays_bookings(db, business_id))


@router.get("/business/{business_id}/upcoming", response_model=BookingListResponse)
def get_upcoming_bookings(
        business_id: str,
        days: int = Query(settings.UPCOMING_BOOKINGS_DAYS, ge=1, le=settings.MAX_HORIZON_DAYS),
        db: Session = Depends(get_db)
):
    """Active bookings from today through the next `days` days"""
    return _listing(BookingQueryService.get_upcoming_bookings(db, business_id, days=days))


@router.get("/{booking_id}", response_model=BookingEnvelope)
def get_booking(booking_id: str, db: Session = Depends(get_db)):
    booking = BookingQueryService.get_booking(db, booking_id)
    return {"success": True, "booking": booking.to_dict()}


@router.put("/{booking_id}/status", response_model=BookingEnvelope)
def update_booking_status(
        booking_id: str,
        payload: BookingStatusRequest,
        db: Session = Depends(get_db)
):
    booking = lifecycle.update_status(db, booking_id, payload.status)
    return {
        "success": True,
        "message": f"Booking status updated to {booking.status}",
        "booking": booking.to_dict(),
    }


@router.delete("/{booking_id}", response_model=BookingEnvelope)
def delete_booking(booking_id: str, db: Session = Depends(get_db)):
    deleted = BookingQueryService.delete_booking(db, booking_id)
    return {
        "success": True,
        "message": "Booking deleted successfully",
        "booking": deleted,
    }
