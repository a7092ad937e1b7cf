# slotbook/services/availability/slot_calculator.py
"""
Pure projection of a weekly availability row onto day-part slot names.
No database access here; callers pass in whatever row they loaded.
"""
from datetime import date
from typing import Iterable, List, Optional

from slotbook.models.availability import AvailabilityDay
from slotbook.models.booking import TimeSlot

_SLOT_FLAGS = (
    (TimeSlot.MORNING, "morning_available"),
    (TimeSlot.AFTERNOON, "afternoon_available"),
    (TimeSlot.EVENING, "evening_available"),
)


def weekday_index(day: date) -> int:
    """Weekday number used by availability rows: 0=Sunday ... 6=Saturday"""
    return (day.weekday() + 1) % 7


def open_slots(template: Optional[AvailabilityDay]) -> List[str]:
    """
    Slots the business is open for by policy on the template's weekday.

    A missing row is treated as closed (no slots), never as an error.
    The result is in calendar order: morning, afternoon, evening.
    """
    if template is None:
        return []
    return [slot.value for slot, flag in _SLOT_FLAGS if getattr(template, flag)]


def subtract_taken(offered: Iterable[str], taken: Iterable[str]) -> List[str]:
    taken = set(taken)
    return [slot for slot in offered if slot not in taken]
