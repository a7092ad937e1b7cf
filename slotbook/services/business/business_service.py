# slotbook/services/business/business_service.py
"""Service for managing business records (lookup, CRUD, service types)"""
from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from slotbook.config.database import commit_or_rollback, store_call
from slotbook.core.exceptions import EmailTaken, InvalidServiceTypes, NotFound
from slotbook.models.business import Business
from slotbook.utils.validation import clean_labels, coerce_uuid, require_fields, validate_email

logger = logging.getLogger(__name__)

BUSINESS_REQUIRED_FIELDS = ["business_name", "owner_name", "email"]
UPDATABLE_FIELDS = ("business_name", "owner_name", "email", "phone", "service_types")


class BusinessService:
    """Handles business-related operations"""

    @staticmethod
    @store_call
    def get_business(db: Session, business_id: Any) -> Optional[Business]:
        """Get business by id, or None if it does not exist"""
        try:
            business_uuid = coerce_uuid(business_id)
        except NotFound:
            return None
        return db.query(Business).filter(Business.id == business_uuid).first()

    @staticmethod
    @store_call
    def get_business_by_email(db: Session, email: str) -> Optional[Business]:
        """Get business by contact email"""
        return db.query(Business).filter(Business.email == email.strip()).first()

    @staticmethod
    @store_call
    def require_business(db: Session, business_id: Any) -> Business:
        """Get business by id or raise NotFound"""
        business = BusinessService.get_business(db, business_id)
        if not business:
            raise NotFound("Business not found", business_id=str(business_id))
        return business

    @staticmethod
    @store_call
    def list_businesses(db: Session) -> List[Business]:
        return db.query(Business).order_by(Business.created_at.desc()).all()

    @staticmethod
    def validate_service_types(service_types: Any) -> List[str]:
        """Service types must be a non-empty list of non-empty strings"""
        if not isinstance(service_types, list):
            raise InvalidServiceTypes(
                "service_types must be an array",
                example=["service 1", "service 2", "service 3"],
            )
        if not service_types:
            raise InvalidServiceTypes("At least one service type is required")
        if not all(isinstance(item, str) and item.strip() for item in service_types):
            raise InvalidServiceTypes("All service types must be non-empty strings")
        return clean_labels(service_types)

    @staticmethod
    @store_call
    def create_business(
            db: Session,
            business_name: Optional[str],
            owner_name: Optional[str],
            email: Optional[str],
            phone: Optional[str] = None,
            service_types: Optional[List[str]] = None
    ) -> Business:
        """Create a new business; the email must not be in use yet"""
        require_fields(
            {"business_name": business_name, "owner_name": owner_name, "email": email},
            BUSINESS_REQUIRED_FIELDS,
            text_fields=("business_name", "owner_name"),
        )
        email = validate_email(email)

        if BusinessService.get_business_by_email(db, email):
            raise EmailTaken()

        business = Business(
            business_name=business_name.strip(),
            owner_name=owner_name.strip(),
            email=email,
            phone=phone,
            service_types=BusinessService.validate_service_types(service_types) if service_types else [],
        )
        db.add(business)
        try:
            commit_or_rollback(db, "create business")
        except IntegrityError:
            # Lost a race with another create using the same email
            raise EmailTaken()
        db.refresh(business)

        logger.info(f"Created business {business.id} ({business.email})")
        return business

    @staticmethod
    @store_call
    def update_business(db: Session, business_id: Any, updates: Dict[str, Any]) -> Business:
        """Apply a partial update; keys with None values are ignored"""
        business = BusinessService.require_business(db, business_id)
        changes = {k: v for k, v in updates.items() if k in UPDATABLE_FIELDS and v is not None}

        if "email" in changes:
            changes["email"] = validate_email(changes["email"])
            other = BusinessService.get_business_by_email(db, changes["email"])
            if other and other.id != business.id:
                raise EmailTaken("Another business already uses this email")

        if "service_types" in changes:
            changes["service_types"] = BusinessService.validate_service_types(changes["service_types"])

        for field, value in changes.items():
            setattr(business, field, value)

        try:
            commit_or_rollback(db, "update business")
        except IntegrityError:
            raise EmailTaken("Another business already uses this email")
        db.refresh(business)

        logger.info(f"Updated business {business.id}: {sorted(changes)}")
        return business

    @staticmethod
    @store_call
    def delete_business(db: Session, business_id: Any) -> Dict[str, Any]:
        """Delete a business together with its availability and bookings"""
        business = BusinessService.require_business(db, business_id)
        snapshot = business.to_dict()

        db.delete(business)
        commit_or_rollback(db, "delete business")

        logger.info(f"Deleted business {snapshot['id']}")
        return snapshot

    @staticmethod
    @store_call
    def get_service_types(db: Session, business_id: Any) -> List[str]:
        business = BusinessService.require_business(db, business_id)
        return list(business.service_types or [])

    @staticmethod
    @store_call
    def update_service_types(db: Session, business_id: Any, service_types: Any) -> List[str]:
        """Replace the service type list (trimmed, de-duplicated, order kept)"""
        cleaned = BusinessService.validate_service_types(service_types)
        business = BusinessService.require_business(db, business_id)

        business.service_types = cleaned
        commit_or_rollback(db, "update service types")
        db.refresh(business)
        return list(business.service_types)
