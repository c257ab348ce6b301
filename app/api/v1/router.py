"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the hotel engine
"""
from fastapi import APIRouter

from app.api.v1 import availability, offers, reservations, rooms

# Create main API v1 router with proper configuration
router = APIRouter(
    responses={
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        503: {"description": "Storage Unavailable"},
    }
)

router.include_router(availability.router)
router.include_router(rooms.router)
router.include_router(offers.router)
router.include_router(reservations.router)

__all__ = ["router"]
