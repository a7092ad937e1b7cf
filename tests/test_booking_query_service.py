from datetime import date, timedelta

import pytest

from conftest import MONDAY, next_date_for
from slotbook.core.exceptions import InvalidStatus, NotFound
from slotbook.services.booking import lifecycle
from slotbook.services.booking.booking_query_service import BookingQueryService
from slotbook.services.booking.booking_service import BookingService


@pytest.fixture
def monday_bookings(db, open_week, customer):
    monday = next_date_for(MONDAY)
    return [
        BookingService.reserve(db, open_week.id, monday, slot, **customer)
        for slot in ("evening", "morning", "afternoon")
    ]


def test_list_orders_by_date_then_day_part(db, open_week, monday_bookings):
    listed = BookingQueryService.list_bookings(db, open_week.id)
    assert [b.time_slot for b in listed] == ["morning", "afternoon", "evening"]


def test_list_filters(db, open_week, monday_bookings):
    lifecycle.update_status(db, monday_bookings[0].id, "confirmed")

    confirmed = BookingQueryService.list_bookings(db, open_week.id, status="confirmed")
    assert [b.id for b in confirmed] == [monday_bookings[0].id]

    other_day = (next_date_for(MONDAY) + timedelta(days=1)).isoformat()
    assert BookingQueryService.list_bookings(db, open_week.id, booking_date=other_day) == []

    with pytest.raises(InvalidStatus):
        BookingQueryService.list_bookings(db, open_week.id, status="archived")


def test_upcoming_skips_cancelled_and_completed(db, open_week, monday_bookings):
    evening, morning, afternoon = monday_bookings
    lifecycle.update_status(db, evening.id, "cancelled")
    lifecycle.update_status(db, afternoon.id, "completed")

    upcoming = BookingQueryService.get_upcoming_bookings(db, open_week.id, days=7)
    assert [b.id for b in upcoming] == [morning.id]

    assert BookingQueryService.get_upcoming_bookings(
        db, open_week.id, days=7, today=date.today() + timedelta(days=8)
    ) == []


def test_todays_bookings(db, open_week, customer):
    booking = BookingService.reserve(db, open_week.id, date.today(), "evening", **customer)
    assert [b.id for b in BookingQueryService.get_todays_bookings(db, open_week.id)] == [booking.id]


def test_delete_returns_snapshot(db, monday_bookings):
    booking_id = monday_bookings[0].id
    snapshot = BookingQueryService.delete_booking(db, booking_id)
    assert snapshot["time_slot"] == "evening"

    with pytest.raises(NotFound):
        BookingQueryService.get_booking(db, booking_id)
