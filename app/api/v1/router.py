"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the hotel booking backend
"""
from fastapi import APIRouter

from app.api.v1.endpoints import bookings, hotels

# Create main API v1 router with proper configuration
router = APIRouter(
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"}
    }
)

router.include_router(bookings.router)
router.include_router(hotels.router)

__all__ = ["router"]
