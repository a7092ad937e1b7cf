from datetime import date

from slotbook.models.availability import AvailabilityDay
from slotbook.services.availability.slot_calculator import open_slots, subtract_taken, weekday_index


def _row(morning=False, afternoon=False, evening=False):
    return AvailabilityDay(
        day_of_week=1,
        morning_available=morning,
        afternoon_available=afternoon,
        evening_available=evening,
    )


def test_missing_template_means_no_slots():
    assert open_slots(None) == []


def test_all_closed_row_has_no_slots():
    assert open_slots(_row()) == []


def test_flags_project_onto_slot_names_in_calendar_order():
    assert open_slots(_row(morning=True, evening=True)) == ["morning", "evening"]
    assert open_slots(_row(True, True, True)) == ["morning", "afternoon", "evening"]


def test_subtract_taken_keeps_order():
    assert subtract_taken(["morning", "afternoon", "evening"], {"afternoon"}) == ["morning", "evening"]
    assert subtract_taken(["evening"], ["evening"]) == []


def test_weekday_index_counts_from_sunday():
    assert weekday_index(date(2026, 10, 18)) == 0  # Sunday
    assert weekday_index(date(2026, 10, 19)) == 1  # Monday
    assert weekday_index(date(2026, 10, 24)) == 6  # Saturday
