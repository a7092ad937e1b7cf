"""
Pydantic schemas for weekly availability and date scans
"""
from pydantic import BaseModel, StrictBool
from typing import Optional, List


class WeekdayAvailabilityRequest(BaseModel):
    """Flags for one weekday; all three are required and must be booleans"""
    morning_available: StrictBool
    afternoon_available: StrictBool
    evening_available: StrictBool


class AvailabilityDayResponse(BaseModel):
    id: int
    business_id: str
    day_of_week: int
    morning_available: bool
    afternoon_available: bool
    evening_available: bool


class AvailableDate(BaseModel):
    """One bookable date produced by the forward scan"""
    date: str
    weekday: int
    open_slots: List[str]


class AvailableDatesResponse(BaseModel):
    success: bool
    business_id: str
    days_checked: int
    count: int
    available_dates: List[AvailableDate]


class OpenSlotsResponse(BaseModel):
    success: bool
    business_id: str
    date: str
    weekday: int
    open_slots: List[str]


class NextAvailableResponse(BaseModel):
    success: bool
    business_id: str
    next_available: Optional[AvailableDate] = None
    message: Optional[str] = None


class TemplateResponse(BaseModel):
    success: bool
    business_id: str
    availability: List[AvailabilityDayResponse]


class WeekdayResponse(BaseModel):
    success: bool
    business_id: str
    day_of_week: int
    message: Optional[str] = None
    availability: AvailabilityDayResponse
