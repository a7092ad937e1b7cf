# slotbook/utils/validation.py
"""Input parsing shared by the scheduling services"""
import re
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from slotbook.core.exceptions import InvalidDate, InvalidEmail, MissingField, NotFound, PastDate

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(
        values: Dict[str, Any],
        required: Iterable[str],
        text_fields: Iterable[str] = ()
) -> None:
    """
    Raise MissingField listing every required key that is absent or blank.
    Keys named in `text_fields` also count as missing unless they hold a string.
    """
    required = list(required)
    text_fields = set(text_fields)
    missing = [
        name for name in required
        if is_blank(values.get(name)) or (name in text_fields and not isinstance(values.get(name), str))
    ]
    if missing:
        raise MissingField(missing=missing, required=required)


def validate_email(email: Any) -> str:
    if not isinstance(email, str):
        raise InvalidEmail()
    email = email.strip()
    if not EMAIL_RE.match(email):
        raise InvalidEmail()
    return email


def parse_calendar_date(value: Any) -> date:
    """
    Accept a date object or a strict YYYY-MM-DD string.

    Strings that look right but name a day that does not exist
    (``2099-02-30``) are rejected too.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not ISO_DATE_RE.match(value.strip()):
        raise InvalidDate()
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDate(f"{value} is not a valid calendar date")


def ensure_not_past(target: date, today: Optional[date] = None) -> date:
    today = today or date.today()
    if target < today:
        raise PastDate()
    return target


def clean_labels(labels: Iterable[str]) -> List[str]:
    """Trim and de-duplicate labels, keeping first-seen order"""
    seen = []
    for label in labels:
        label = label.strip()
        if label not in seen:
            seen.append(label)
    return seen


def coerce_uuid(value: Any) -> UUID:
    """Parse an identifier; malformed ids cannot match any row"""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise NotFound("Resource not found", id=str(value))
