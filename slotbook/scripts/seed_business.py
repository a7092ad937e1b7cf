#!/usr/bin/env python3
"""
Script to create the default business with its weekly availability
Usage: python -m slotbook.scripts.seed_business
"""
import logging
import sys
from sqlalchemy.orm import Session

from slotbook.config.database import SessionLocal, create_tables
from slotbook.config.settings import get_settings
from slotbook.services.availability.availability_service import AvailabilityService
from slotbook.services.business.business_service import BusinessService

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_TYPES = [
    "Water Softener Installation",
    "Water Softener Repair",
    "Water Softener Maintenance",
    "Water Quality Testing",
    "Salt Delivery",
]

# (weekday, morning, afternoon, evening), 0=Sunday
DEFAULT_WEEK = [
    (0, False, True, True),
    (1, True, True, False),
    (2, True, True, False),
    (3, True, True, False),
    (4, True, True, False),
    (5, True, True, False),
    (6, True, True, True),
]


def seed_default_business(db: Session = None):
    """Create the default business unless one with its email already exists"""
    settings = get_settings()
    owns_session = db is None
    db = db or SessionLocal()

    try:
        existing = BusinessService.get_business_by_email(db, settings.DEFAULT_BUSINESS_EMAIL)
        if existing:
            logger.info(f"Default business already exists: {existing.id}")
            return existing

        business = BusinessService.create_business(
            db,
            business_name=settings.DEFAULT_BUSINESS_NAME,
            owner_name=settings.DEFAULT_BUSINESS_OWNER,
            email=settings.DEFAULT_BUSINESS_EMAIL,
            phone="555-0123",
            service_types=DEFAULT_SERVICE_TYPES,
        )
        for weekday, morning, afternoon, evening in DEFAULT_WEEK:
            AvailabilityService.set_weekday_availability(
                db, business.id, weekday, morning=morning, afternoon=afternoon, evening=evening
            )

        logger.info(f"Seeded default business {business.id} ({business.business_name})")
        return business
    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    from slotbook.utils.my_logging import setup_logging

    setup_logging()
    try:
        create_tables()
        seed_default_business()
    except Exception:
        logger.exception("Seeding failed")
        sys.exit(1)
