# ============================================================================
# slotbook/api/v1/availability.py
# Weekly templates and bookable-date queries - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from slotbook.config.database import get_db
from slotbook.config.settings import settings
from slotbook.core.exceptions import NotFound
from slotbook.schemas.availability import (
    AvailableDatesResponse,
    NextAvailableResponse,
    OpenSlotsResponse,
    TemplateResponse,
    WeekdayAvailabilityRequest,
    WeekdayResponse,
)
from slotbook.services.availability.availability_service import AvailabilityService
from slotbook.services.availability.slot_calculator import weekday_index
from slotbook.utils.validation import parse_calendar_date

router = APIRouter(prefix="/availability", tags=["availability"])

HORIZON_QUERY = dict(ge=1, le=settings.MAX_HORIZON_DAYS, description="Number of days after today to scan")


@router.get("/{business_id}", response_model=TemplateResponse)
def get_availability(business_id: str, db: Session = Depends(get_db)):
    """Full weekly template. 404 when no weekday has been configured yet."""
    rows = AvailabilityService.get_template(db, business_id)
    if not rows:
        raise NotFound("No availability settings for this business", business_id=business_id)

    return {
        "success": True,
        "business_id": business_id,
        "availability": [row.to_dict() for row in rows],
    }


@router.get("/{business_id}/dates", response_model=AvailableDatesResponse)
def get_available_dates(
        business_id: str,
        days: int = Query(settings.DEFAULT_HORIZON_DAYS, **HORIZON_QUERY),
        db: Session = Depends(get_db)
):
    """Dates in the next `days` days that still have at least one open slot"""
    available_dates = AvailabilityService.get_available_dates(db, business_id, days)
    return {
        "success": True,
        "business_id": business_id,
        "days_checked": days,
        "count": len(available_dates),
        "available_dates": available_dates,
    }


@router.get("/{business_id}/slots/{booking_date}", response_model=OpenSlotsResponse)
def get_open_slots(business_id: str, booking_date: str, db: Session = Depends(get_db)):
    """Open slots for one date; malformed or past dates are rejected"""
    open_slots = AvailabilityService.get_open_slots(db, business_id, booking_date)
    day = parse_calendar_date(booking_date)
    return {
        "success": True,
        "business_id": business_id,
        "date": day.isoformat(),
        "weekday": weekday_index(day),
        "open_slots": open_slots,
    }


@router.get("/{business_id}/day/{day_of_week}", response_model=WeekdayResponse)
def get_day_availability(
        business_id: str,
        day_of_week: int = Path(..., description="0=Sunday ... 6=Saturday"),
        db: Session = Depends(get_db)
):
    row = AvailabilityService.get_weekday(db, business_id, day_of_week)
    if row is None:
        raise NotFound("No availability settings found for this day", day_of_week=day_of_week)

    return {
        "success": True,
        "business_id": business_id,
        "day_of_week": day_of_week,
        "availability": row.to_dict(),
    }


@router.put("/{business_id}/day/{day_of_week}", response_model=WeekdayResponse)
def set_day_availability(
        payload: WeekdayAvailabilityRequest,
        business_id: str,
        day_of_week: int = Path(..., description="0=Sunday ... 6=Saturday"),
        db: Session = Depends(get_db)
):
    """Upsert one weekday's flags (idempotent)"""
    row = AvailabilityService.set_weekday_availability(
        db,
        business_id,
        day_of_week,
        morning=payload.morning_available,
        afternoon=payload.afternoon_available,
        evening=payload.evening_available,
    )
    return {
        "success": True,
        "business_id": business_id,
        "day_of_week": day_of_week,
        "message": f"Availability updated for day {day_of_week}",
        "availability": row.to_dict(),
    }


@router.post("/{business_id}/reset", response_model=TemplateResponse)
def reset_availability(business_id: str, db: Session = Depends(get_db)):
    """Reset every weekday to closed"""
    rows = AvailabilityService.reset_availability(db, business_id)
    return {
        "success": True,
        "business_id": business_id,
        "availability": [row.to_dict() for row in rows],
    }


@router.get("/{business_id}/next-available", response_model=NextAvailableResponse)
def get_next_available(
        business_id: str,
        days: int = Query(settings.DEFAULT_HORIZON_DAYS, **HORIZON_QUERY),
        db: Session = Depends(get_db)
):
    next_available = AvailabilityService.get_next_available(db, business_id, days)
    if next_available is None:
        return {
            "success": True,
            "business_id": business_id,
            "next_available": None,
            "message": f"No available slots found in the next {days} days",
        }

    return {
        "success": True,
        "business_id": business_id,
        "next_available": next_available,
    }
