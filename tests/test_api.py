from datetime import date, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from conftest import MONDAY, SATURDAY, next_date_for
from slotbook.services.availability.availability_service import AvailabilityService


@pytest.fixture
def business_id(client):
    response = client.post("/api/v1/businesses", json={
        "business_name": "Soft Water Services",
        "owner_name": "Garrett",
        "email": "garrett@example.com",
        "service_types": ["Salt Delivery"],
    })
    assert response.status_code == 201
    return response.json()["business"]["id"]


@pytest.fixture
def saturday_evenings(client, business_id):
    response = client.put(f"/api/v1/availability/{business_id}/day/{SATURDAY}", json={
        "morning_available": False,
        "afternoon_available": False,
        "evening_available": True,
    })
    assert response.status_code == 200
    return business_id


def _reservation(business_id, booking_date, slot, **overrides):
    body = {
        "business_id": business_id,
        "customer_name": "Dana Whitfield",
        "customer_email": "dana@example.com",
        "service_type": "Salt Delivery",
        "booking_date": booking_date,
        "time_slot": slot,
    }
    body.update(overrides)
    return body


def test_saturday_evening_end_to_end(client, saturday_evenings):
    business_id = saturday_evenings
    saturday = next_date_for(SATURDAY).isoformat()

    dates = client.get(f"/api/v1/availability/{business_id}/dates", params={"days": 7}).json()
    assert {"date": saturday, "weekday": SATURDAY, "open_slots": ["evening"]} in dates["available_dates"]

    refused = client.post("/api/v1/bookings", json=_reservation(business_id, saturday, "morning"))
    assert refused.status_code == 400
    assert refused.json()["error"] == "slot_not_offered"
    assert refused.json()["open_slots"] == ["evening"]

    created = client.post("/api/v1/bookings", json=_reservation(business_id, saturday, "evening"))
    assert created.status_code == 201
    assert created.json()["booking"]["status"] == "pending"

    dates = client.get(f"/api/v1/availability/{business_id}/dates", params={"days": 7}).json()
    assert saturday not in [entry["date"] for entry in dates["available_dates"]]

    again = client.post("/api/v1/bookings", json=_reservation(business_id, saturday, "evening"))
    assert again.status_code == 409
    assert again.json()["error"] == "slot_conflict"


def test_cancel_then_rebook(client, saturday_evenings):
    saturday = next_date_for(SATURDAY).isoformat()
    booking = client.post("/api/v1/bookings", json=_reservation(saturday_evenings, saturday, "evening")).json()

    cancelled = client.put(f"/api/v1/bookings/{booking['booking']['id']}/status", json={"status": "cancelled"})
    assert cancelled.status_code == 200
    assert cancelled.json()["booking"]["status"] == "cancelled"

    rebooked = client.post("/api/v1/bookings", json=_reservation(saturday_evenings, saturday, "evening"))
    assert rebooked.status_code == 201


def test_missing_fields_response_lists_them(client, business_id):
    response = client.post("/api/v1/bookings", json={"business_id": business_id})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "missing_field"
    assert body["missing"] == ["customer_name", "customer_email", "service_type", "booking_date", "time_slot"]


def test_open_slots_endpoint(client, saturday_evenings):
    saturday = next_date_for(SATURDAY)
    ok = client.get(f"/api/v1/availability/{saturday_evenings}/slots/{saturday.isoformat()}")
    assert ok.status_code == 200
    assert ok.json()["open_slots"] == ["evening"]
    assert ok.json()["weekday"] == SATURDAY

    invalid = client.get(f"/api/v1/availability/{saturday_evenings}/slots/2099-02-30")
    assert invalid.status_code == 400
    assert invalid.json()["error"] == "invalid_date"

    yesterday = (date.today() - timedelta(days=1)).isoformat()
    past = client.get(f"/api/v1/availability/{saturday_evenings}/slots/{yesterday}")
    assert past.status_code == 400
    assert past.json()["error"] == "past_date"


def test_template_endpoints(client, business_id):
    assert client.get(f"/api/v1/availability/{business_id}").status_code == 404
    assert client.get(f"/api/v1/availability/{business_id}/day/{MONDAY}").status_code == 404

    reset = client.post(f"/api/v1/availability/{business_id}/reset")
    assert reset.status_code == 200
    assert len(reset.json()["availability"]) == 7

    template = client.get(f"/api/v1/availability/{business_id}").json()
    assert [row["day_of_week"] for row in template["availability"]] == list(range(7))

    bad_flags = client.put(f"/api/v1/availability/{business_id}/day/{MONDAY}", json={
        "morning_available": "yes", "afternoon_available": False, "evening_available": False,
    })
    assert bad_flags.status_code == 422

    bad_day = client.put(f"/api/v1/availability/{business_id}/day/9", json={
        "morning_available": True, "afternoon_available": False, "evening_available": False,
    })
    assert bad_day.status_code == 400
    assert bad_day.json()["error"] == "invalid_weekday"


def test_next_available(client, business_id):
    empty = client.get(f"/api/v1/availability/{business_id}/next-available").json()
    assert empty["next_available"] is None

    client.put(f"/api/v1/availability/{business_id}/day/{MONDAY}", json={
        "morning_available": True, "afternoon_available": False, "evening_available": False,
    })
    found = client.get(f"/api/v1/availability/{business_id}/next-available").json()
    assert found["next_available"]["date"] == next_date_for(MONDAY).isoformat()


def test_booking_listing_and_removal(client, saturday_evenings):
    saturday = next_date_for(SATURDAY).isoformat()
    created = client.post("/api/v1/bookings", json=_reservation(saturday_evenings, saturday, "evening")).json()
    booking_id = created["booking"]["id"]

    listed = client.get(f"/api/v1/bookings/business/{saturday_evenings}", params={"date": saturday}).json()
    assert listed["count"] == 1

    upcoming = client.get(f"/api/v1/bookings/business/{saturday_evenings}/upcoming").json()
    assert [b["id"] for b in upcoming["bookings"]] == [booking_id]

    bad_status = client.get(f"/api/v1/bookings/business/{saturday_evenings}", params={"status": "archived"})
    assert bad_status.status_code == 400

    assert client.get(f"/api/v1/bookings/{booking_id}").status_code == 200
    assert client.delete(f"/api/v1/bookings/{booking_id}").status_code == 200
    assert client.get(f"/api/v1/bookings/{booking_id}").status_code == 404


def test_status_update_errors(client):
    invalid = client.put("/api/v1/bookings/whatever/status", json={"status": "archived"})
    assert invalid.status_code == 400
    assert invalid.json()["error"] == "invalid_status"

    missing = client.put(
        "/api/v1/bookings/00000000-0000-0000-0000-000000000000/status", json={"status": "confirmed"}
    )
    assert missing.status_code == 404
    assert missing.json()["error"] == "not_found"


def test_store_failures_are_retryable(client, business_id, monkeypatch):
    def locked(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(AvailabilityService, "get_available_dates", staticmethod(locked))

    response = client.get(f"/api/v1/availability/{business_id}/dates")
    assert response.status_code == 503
    assert response.json()["error"] == "store_unavailable"
    assert response.headers["Retry-After"] == "1"


def test_business_routes(client, business_id):
    duplicate = client.post("/api/v1/businesses", json={
        "business_name": "Copy", "owner_name": "Cat", "email": "garrett@example.com",
    })
    assert duplicate.status_code == 409

    services = client.put(f"/api/v1/businesses/{business_id}/services", json={
        "service_types": ["Repair", " Repair ", "Testing"],
    })
    assert services.json()["service_types"] == ["Repair", "Testing"]

    contact = client.get(f"/api/v1/businesses/{business_id}/contact").json()
    assert contact["contact"] == {
        "business_name": "Soft Water Services",
        "phone": None,
        "email": "garrett@example.com",
    }

    assert client.delete(f"/api/v1/businesses/{business_id}").status_code == 200
    assert client.get(f"/api/v1/businesses/{business_id}").status_code == 404


def test_correlation_id_is_echoed(client):
    response = client.get("/health/", headers={"X-Correlation-ID": "abc-123"})
    assert response.status_code == 200
    assert response.headers["X-Correlation-ID"] == "abc-123"
