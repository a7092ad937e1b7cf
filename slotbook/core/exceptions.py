# slotbook/core/exceptions.py
"""
Typed failures raised by the scheduling engine.

Each error carries a stable ``code`` and the HTTP status the API layer maps
it to. Validation errors are raised before any write, so they never leave
partial state behind. ``SlotConflict`` is a normal outcome of two customers
racing for one slot; ``StoreUnavailable`` is an infrastructure failure and
the only one marked retryable.
"""
from typing import Any, Dict, Iterable, Optional


class SchedulingError(Exception):
    """Base class for all engine failures"""

    code = "scheduling_error"
    status_code = 400
    retryable = False
    default_message = "Scheduling request failed"

    def __init__(self, message: Optional[str] = None, **details: Any):
        self.message = message or self.default_message
        self.details: Dict[str, Any] = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "success": False,
            "error": self.code,
            "message": self.message,
        }
        payload.update(self.details)
        return payload


class MissingField(SchedulingError):
    code = "missing_field"
    default_message = "Missing required fields"

    def __init__(self, missing: Iterable[str], required: Iterable[str]):
        super().__init__(missing=list(missing), required=list(required))


class InvalidEmail(SchedulingError):
    code = "invalid_email"
    default_message = "Invalid email format"


class InvalidSlot(SchedulingError):
    code = "invalid_slot"
    default_message = "Invalid time slot"

    def __init__(self, slot: Any, valid_options: Iterable[str]):
        super().__init__(slot=slot, valid_options=list(valid_options))


class InvalidDate(SchedulingError):
    code = "invalid_date"
    default_message = "Invalid date format. Use YYYY-MM-DD"


class PastDate(SchedulingError):
    code = "past_date"
    default_message = "Dates in the past cannot be booked or queried"


class SlotNotOffered(SchedulingError):
    code = "slot_not_offered"
    default_message = "Business is not available at this time"

    def __init__(self, slot: str, booking_date: str, open_slots: Iterable[str]):
        super().__init__(
            f"{slot} slot on {booking_date} is not offered",
            open_slots=list(open_slots),
        )


class SlotConflict(SchedulingError):
    code = "slot_conflict"
    status_code = 409
    default_message = "Time slot is already booked"

    def __init__(self, slot: str, booking_date: str):
        super().__init__(f"{slot} slot on {booking_date} is not available")


class NotFound(SchedulingError):
    code = "not_found"
    status_code = 404
    default_message = "Resource not found"


class InvalidStatus(SchedulingError):
    code = "invalid_status"
    default_message = "Invalid status"

    def __init__(self, status: Any, valid_statuses: Iterable[str]):
        super().__init__(status=status, valid_statuses=list(valid_statuses))


class InvalidWeekday(SchedulingError):
    code = "invalid_weekday"
    default_message = "Invalid day of week. Use 0 - 6 (Sunday=0, Monday=1, etc.)"


class InvalidServiceTypes(SchedulingError):
    code = "invalid_service_types"
    default_message = "Service types must be a non-empty list of non-empty strings"


class EmailTaken(SchedulingError):
    code = "email_taken"
    status_code = 409
    default_message = "Business with this email already exists"


class StoreUnavailable(SchedulingError):
    code = "store_unavailable"
    status_code = 503
    retryable = True
    default_message = "Booking store is temporarily unavailable, please retry"
