import pytest
from sqlalchemy.exc import OperationalError

from conftest import MONDAY, next_date_for
from slotbook.core.exceptions import StoreUnavailable
from slotbook.models.booking import Booking
from slotbook.scripts.seed_business import seed_default_business
from slotbook.services.availability import availability_service
from slotbook.services.availability.availability_service import AvailabilityService
from slotbook.services.booking import booking_service
from slotbook.services.booking.booking_service import BookingService


def database_locked(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("database is locked"))


def test_open_slots_lookup_failure(db, open_week, monkeypatch):
    monkeypatch.setattr(availability_service, "taken_slots", database_locked)
    with pytest.raises(StoreUnavailable) as exc:
        AvailabilityService.get_open_slots(db, open_week.id, next_date_for(MONDAY))
    assert exc.value.retryable


def test_scan_failure_surfaces_while_iterating(db, open_week, monkeypatch):
    monkeypatch.setattr(availability_service, "taken_slots", database_locked)
    scan = AvailabilityService.iter_available_dates(db, open_week.id, 7)
    with pytest.raises(StoreUnavailable):
        next(scan)


def test_reserve_lookup_failure_writes_nothing(db, open_week, customer, monkeypatch):
    monkeypatch.setattr(booking_service, "is_slot_taken", database_locked)
    with pytest.raises(StoreUnavailable):
        BookingService.reserve(db, open_week.id, next_date_for(MONDAY), "morning", **customer)
    assert db.query(Booking).count() == 0


def test_seed_script_gets_a_typed_failure(db, monkeypatch):
    monkeypatch.setattr(db, "query", database_locked)
    with pytest.raises(StoreUnavailable):
        seed_default_business(db)
