"""
API v1 router setup
Organized into: availability, bookings and businesses
"""
from fastapi import APIRouter

from slotbook.api.v1 import availability, bookings, businesses

api_v1_router = APIRouter()

# ============================================================================
# SCHEDULING ROUTES
# ============================================================================
api_v1_router.include_router(availability.router)
api_v1_router.include_router(bookings.router)

# ============================================================================
# BUSINESS ROUTES
# ============================================================================
api_v1_router.include_router(businesses.router)


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and available endpoints.
    """
    return {
        "version": "1.0",
        "endpoints": {
            "availability": "/api/v1/availability/{business_id}",
            "bookings": "/api/v1/bookings",
            "businesses": "/api/v1/businesses",
        },
        "time_slots": ["morning", "afternoon", "evening"],
        "weekdays": "0=Sunday ... 6=Saturday",
    }
