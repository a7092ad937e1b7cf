# slotbook/services/availability/availability_service.py
from datetime import date, timedelta
from typing import Any, Dict, Iterator, List, Optional
import logging

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from slotbook.config.database import commit_or_rollback, store_call
from slotbook.core.exceptions import InvalidWeekday
from slotbook.models.availability import AvailabilityDay
from slotbook.services.availability.slot_calculator import open_slots, subtract_taken, weekday_index
from slotbook.services.booking.conflict_checker import taken_slots
from slotbook.services.business.business_service import BusinessService
from slotbook.utils.validation import ensure_not_past, parse_calendar_date

logger = logging.getLogger(__name__)

WEEKDAYS = range(7)

_UPSERT_BUILDERS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class AvailabilityService:
    """Weekly availability templates and the forward-looking date scan"""

    # ------------------------------------------------------------------
    # Template store
    # ------------------------------------------------------------------

    @staticmethod
    @store_call
    def get_template(db: Session, business_id: Any) -> List[AvailabilityDay]:
        """All configured weekday rows for a business, Sunday first"""
        business = BusinessService.require_business(db, business_id)
        return db.query(AvailabilityDay).filter(
            AvailabilityDay.business_id == business.id
        ).order_by(AvailabilityDay.day_of_week.asc()).all()

    @staticmethod
    @store_call
    def get_weekday(db: Session, business_id: Any, weekday: int) -> Optional[AvailabilityDay]:
        """
        Row for one weekday, or None when that weekday was never configured.
        None is "no information" and is kept distinct from an all-closed row.
        """
        AvailabilityService._check_weekday(weekday)
        business = BusinessService.require_business(db, business_id)
        return AvailabilityService._load_weekday(db, business.id, weekday)

    @staticmethod
    @store_call
    def set_weekday_availability(
            db: Session,
            business_id: Any,
            weekday: int,
            morning: bool,
            afternoon: bool,
            evening: bool
    ) -> AvailabilityDay:
        """Idempotent upsert of one weekday's three day-part flags"""
        AvailabilityService._check_weekday(weekday)
        business = BusinessService.require_business(db, business_id)

        values = {
            "business_id": business.id,
            "day_of_week": weekday,
            "morning_available": bool(morning),
            "afternoon_available": bool(afternoon),
            "evening_available": bool(evening),
        }
        AvailabilityService._upsert(db, values)
        commit_or_rollback(db, "update availability")

        row = AvailabilityService._load_weekday(db, business.id, weekday)
        db.refresh(row)
        logger.info(
            f"Availability for business {business.id} day {weekday} set to "
            f"morning={row.morning_available} afternoon={row.afternoon_available} "
            f"evening={row.evening_available}"
        )
        return row

    @staticmethod
    @store_call
    def reset_availability(db: Session, business_id: Any) -> List[AvailabilityDay]:
        """Write an all-closed row for every weekday"""
        business = BusinessService.require_business(db, business_id)
        for weekday in WEEKDAYS:
            AvailabilityService._upsert(db, {
                "business_id": business.id,
                "day_of_week": weekday,
                "morning_available": False,
                "afternoon_available": False,
                "evening_available": False,
            })
        commit_or_rollback(db, "reset availability")

        logger.info(f"Availability reset to all closed for business {business.id}")
        return AvailabilityService.get_template(db, business.id)

    # ------------------------------------------------------------------
    # Single date and forward scan
    # ------------------------------------------------------------------

    @staticmethod
    @store_call
    def get_open_slots(
            db: Session,
            business_id: Any,
            target_date: Any,
            today: Optional[date] = None
    ) -> List[str]:
        """
        Bookable slots for one date: the weekday's policy minus slots held
        by active bookings. Malformed dates raise InvalidDate, dates before
        today raise PastDate.
        """
        day = ensure_not_past(parse_calendar_date(target_date), today)
        business = BusinessService.require_business(db, business_id)

        template = AvailabilityService._load_weekday(db, business.id, weekday_index(day))
        offered = open_slots(template)
        if not offered:
            return []
        return subtract_taken(offered, taken_slots(db, business.id, day))

    @staticmethod
    @store_call
    def iter_available_dates(
            db: Session,
            business_id: Any,
            horizon_days: int,
            today: Optional[date] = None
    ) -> Iterator[Dict[str, Any]]:
        """
        Walk day 1 through day N after today and yield every date that still
        has at least one open slot. Today itself is never offered.
        """
        business = BusinessService.require_business(db, business_id)
        today = today or date.today()

        templates = {
            row.day_of_week: row
            for row in db.query(AvailabilityDay).filter(
                AvailabilityDay.business_id == business.id
            ).all()
        }
        open_weekdays = {weekday for weekday, row in templates.items() if row.is_open}
        if not open_weekdays:
            logger.debug(f"Business {business.id} has no open weekdays, skipping scan")
            return

        for offset in range(1, horizon_days + 1):
            day = today + timedelta(days=offset)
            weekday = weekday_index(day)
            if weekday not in open_weekdays:
                continue

            slots = subtract_taken(
                open_slots(templates[weekday]),
                taken_slots(db, business.id, day),
            )
            if slots:
                yield {
                    "date": day.isoformat(),
                    "weekday": weekday,
                    "open_slots": slots,
                }

    @staticmethod
    @store_call
    def get_available_dates(
            db: Session,
            business_id: Any,
            horizon_days: int,
            today: Optional[date] = None
    ) -> List[Dict[str, Any]]:
        return list(AvailabilityService.iter_available_dates(db, business_id, horizon_days, today))

    @staticmethod
    @store_call
    def get_next_available(
            db: Session,
            business_id: Any,
            horizon_days: int,
            today: Optional[date] = None
    ) -> Optional[Dict[str, Any]]:
        """First bookable date inside the horizon, or None"""
        scan = AvailabilityService.iter_available_dates(db, business_id, horizon_days, today)
        return next(scan, None)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_weekday(weekday: Any) -> None:
        if isinstance(weekday, bool) or not isinstance(weekday, int) or weekday not in WEEKDAYS:
            raise InvalidWeekday()

    @staticmethod
    def _load_weekday(db: Session, business_id, weekday: int) -> Optional[AvailabilityDay]:
        return db.query(AvailabilityDay).filter(
            AvailabilityDay.business_id == business_id,
            AvailabilityDay.day_of_week == weekday
        ).first()

    @staticmethod
    def _upsert(db: Session, values: Dict[str, Any]) -> None:
        """Insert or replace a weekday row in a single statement"""
        dialect = db.get_bind().dialect.name
        builder = _UPSERT_BUILDERS.get(dialect)

        if builder is None:
            # No native upsert; the unique constraint still guards duplicates
            row = AvailabilityService._load_weekday(db, values["business_id"], values["day_of_week"])
            if row is None:
                db.add(AvailabilityDay(**values))
            else:
                for field, value in values.items():
                    setattr(row, field, value)
            db.flush()
            return

        stmt = builder(AvailabilityDay).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["business_id", "day_of_week"],
            set_={
                "morning_available": stmt.excluded.morning_available,
                "afternoon_available": stmt.excluded.afternoon_available,
                "evening_available": stmt.excluded.evening_available,
            },
        )
        db.execute(stmt)
