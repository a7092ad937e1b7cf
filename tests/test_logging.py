import io
import logging

import pytest

from conftest import MONDAY, next_date_for
from slotbook.utils.my_logging import build_handler


@pytest.fixture
def slotbook_log():
    stream = io.StringIO()
    handler = build_handler(stream)
    logger = logging.getLogger("slotbook")
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        yield stream
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)


def test_service_lines_carry_the_request_correlation_id(client, slotbook_log):
    business = client.post("/api/v1/businesses", json={
        "business_name": "Soft Water Services",
        "owner_name": "Garrett",
        "email": "garrett@example.com",
    }).json()["business"]
    client.put(f"/api/v1/availability/{business['id']}/day/{MONDAY}", json={
        "morning_available": True, "afternoon_available": False, "evening_available": False,
    })

    response = client.post(
        "/api/v1/bookings",
        json={
            "business_id": business["id"],
            "customer_name": "Dana Whitfield",
            "customer_email": "dana@example.com",
            "service_type": "Salt Delivery",
            "booking_date": next_date_for(MONDAY).isoformat(),
            "time_slot": "morning",
        },
        headers={"X-Correlation-ID": "trace-42"},
    )
    assert response.status_code == 201
    assert response.headers["X-Correlation-ID"] == "trace-42"

    booking_lines = [
        line for line in slotbook_log.getvalue().splitlines()
        if "slotbook.services.booking.booking_service" in line and "created" in line
    ]
    assert len(booking_lines) == 1
    assert "[trace-42]" in booking_lines[0]


def test_lines_outside_a_request_use_a_placeholder(slotbook_log):
    logging.getLogger("slotbook.scripts.seed_business").info("seeding")
    assert "[-] seeding" in slotbook_log.getvalue()
