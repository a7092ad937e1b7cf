# ============================================================================
# slotbook/api/v1/businesses.py
# Business records and service types - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from slotbook.config.database import get_db
from slotbook.schemas.business import (
    BusinessCreateRequest,
    BusinessEnvelope,
    BusinessUpdateRequest,
    ServiceTypesRequest,
    ServiceTypesResponse,
)
from slotbook.services.business.business_service import BusinessService

router = APIRouter(prefix="/businesses", tags=["businesses"])


@router.get("")
def list_businesses(db: Session = Depends(get_db)):
    businesses = BusinessService.list_businesses(db)
    return {
        "success": True,
        "count": len(businesses),
        "businesses": [business.to_dict() for business in businesses],
    }


@router.post("", response_model=BusinessEnvelope, status_code=201)
def create_business(payload: BusinessCreateRequest, db: Session = Depends(get_db)):
    business = BusinessService.create_business(
        db,
        business_name=payload.business_name,
        owner_name=payload.owner_name,
        email=payload.email,
        phone=payload.phone,
        service_types=payload.service_types,
    )
    return {
        "success": True,
        "message": "Business created successfully",
        "business": business.to_dict(),
    }


@router.get("/{business_id}", response_model=BusinessEnvelope)
def get_business(business_id: str, db: Session = Depends(get_db)):
    business = BusinessService.require_business(db, business_id)
    return {"success": True, "business": business.to_dict()}


@router.put("/{business_id}", response_model=BusinessEnvelope)
def update_business(
        business_id: str,
        updates: BusinessUpdateRequest,
        db: Session = Depends(get_db)
):
    business = BusinessService.update_business(db, business_id, updates.model_dump(exclude_none=True))
    return {
        "success": True,
        "message": "Business updated successfully",
        "business": business.to_dict(),
    }


@router.delete("/{business_id}", response_model=BusinessEnvelope)
def delete_business(business_id: str, db: Session = Depends(get_db)):
    """Deletes the business with its availability template and bookings"""
    deleted = BusinessService.delete_business(db, business_id)
    return {
        "success": True,
        "message": "Business deleted successfully",
        "business": deleted,
    }


@router.get("/{business_id}/services", response_model=ServiceTypesResponse)
def get_service_types(business_id: str, db: Session = Depends(get_db)):
    return {
        "success": True,
        "business_id": business_id,
        "service_types": BusinessService.get_service_types(db, business_id),
    }


@router.put("/{business_id}/services", response_model=ServiceTypesResponse)
def update_service_types(
        business_id: str,
        payload: ServiceTypesRequest,
        db: Session = Depends(get_db)
):
    service_types = BusinessService.update_service_types(db, business_id, payload.service_types)
    return {
        "success": True,
        "business_id": business_id,
        "message": "Service types updated successfully",
        "service_types": service_types,
    }


@router.get("/{business_id}/contact")
def get_business_contact(business_id: str, db: Session = Depends(get_db)):
    """Public contact details only"""
    business = BusinessService.require_business(db, business_id)
    return {"success": True, "contact": business.contact_card()}
