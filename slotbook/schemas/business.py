"""
Pydantic schemas for Business validation and serialization
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Any
from datetime import datetime


# ============================================================================
# Request Schemas (for incoming data)
# ============================================================================

class BusinessCreateRequest(BaseModel):
    """Required fields are checked by the service so errors stay uniform"""
    business_name: Optional[str] = Field(None, max_length=255)
    owner_name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=20)
    service_types: Optional[Any] = None


class BusinessUpdateRequest(BaseModel):
    """
    Schema for updating business information.
    All fields are optional - only send what you want to update.
    """
    business_name: Optional[str] = Field(None, min_length=1, max_length=255)
    owner_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=20)
    service_types: Optional[Any] = None


class ServiceTypesRequest(BaseModel):
    service_types: Any = None


# ============================================================================
# Response Schemas (for outgoing data)
# ============================================================================

class BusinessResponse(BaseModel):
    """Schema for business data in responses"""
    id: str
    business_name: str
    owner_name: str
    email: str
    phone: Optional[str] = None
    service_types: List[str]
    created_at: Optional[datetime] = None


class BusinessEnvelope(BaseModel):
    success: bool
    message: Optional[str] = None
    business: BusinessResponse


class ServiceTypesResponse(BaseModel):
    success: bool
    business_id: str
    service_types: List[str]
    message: Optional[str] = None
