"""
Pydantic schemas for booking requests and responses
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime


# ============================================================================
# Request Schemas (for incoming data)
# ============================================================================

class BookingCreateRequest(BaseModel):
    """
    Reservation request.
    Every field is optional at the schema level so the booking service can
    report missing fields in its own order and format.
    """
    business_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = Field(None, max_length=20)
    customer_address: Optional[str] = None
    service_type: Optional[str] = None
    booking_date: Optional[str] = Field(None, description="Calendar date, YYYY-MM-DD")
    time_slot: Optional[str] = Field(None, description="morning, afternoon or evening")
    service_description: Optional[str] = None


class BookingStatusRequest(BaseModel):
    """Status change command"""
    status: Optional[str] = Field(None, description="pending, confirmed, completed or cancelled")


# ============================================================================
# Response Schemas (for outgoing data)
# ============================================================================

class BookingResponse(BaseModel):
    """Schema for booking data in responses"""
    id: str
    business_id: str
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = None
    service_type: str
    booking_date: date
    time_slot: str
    service_description: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None


class BookingEnvelope(BaseModel):
    success: bool
    message: Optional[str] = None
    booking: BookingResponse


class BookingListResponse(BaseModel):
    success: bool
    count: int
    bookings: List[BookingResponse]
