import os

# Throwaway database and no rate limiting for the shared app, set before slotbook is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from slotbook.config.database import build_engine, create_tables, get_db
from slotbook.main import app
from slotbook.services.availability.availability_service import AvailabilityService
from slotbook.services.availability.slot_calculator import weekday_index
from slotbook.services.business.business_service import BusinessService

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)


def next_date_for(weekday: int, today: date = None) -> date:
    """First date strictly after today falling on the given weekday (0=Sunday)"""
    today = today or date.today()
    for offset in range(1, 8):
        candidate = today + timedelta(days=offset)
        if weekday_index(candidate) == weekday:
            return candidate
    raise AssertionError("unreachable")


@pytest.fixture
def engine(tmp_path):
    # File-backed so several threads can share it through separate connections
    engine = build_engine(f"sqlite:///{tmp_path / 'slotbook.db'}")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def business(db):
    return BusinessService.create_business(
        db,
        business_name="Soft Water Services",
        owner_name="Garrett",
        email="garrett@example.com",
        phone="555-0123",
        service_types=["Water Softener Repair", "Salt Delivery"],
    )


@pytest.fixture
def open_week(db, business):
    """Every weekday open for every day-part"""
    for weekday in range(7):
        AvailabilityService.set_weekday_availability(
            db, business.id, weekday, morning=True, afternoon=True, evening=True
        )
    return business


@pytest.fixture
def customer():
    return {
        "customer_name": "Dana Whitfield",
        "customer_email": "dana@example.com",
        "service_type": "Water Softener Repair",
    }


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
