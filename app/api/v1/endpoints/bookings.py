# app/api/v1/endpoints/bookings.py
"""Booking endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.models.base import BookingStatus
from app.schemas.booking import BookingCreate, BookingResponse, BookingUpdate
from app.schemas.common.pagination import PaginatedResponse
from app.services.booking import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    service: BookingService = Depends(deps.get_booking_service),
) -> BookingResponse:
    """
    Create a PENDING booking.

    The booking holds its rooms until ``expires_at``; if it is still
    PENDING by then it is deleted.
    """
    return service.create_booking(payload)


@router.get("", response_model=PaginatedResponse[BookingResponse])
def list_bookings(
    page: int = Query(0, ge=0, description="Page index (0-indexed)"),
    size: int = Query(10, ge=1, le=100, description="Items per page"),
    credential: str = Depends(deps.get_credential),
    service: BookingService = Depends(deps.get_booking_service),
) -> PaginatedResponse[BookingResponse]:
    """Bookings visible to the caller's role. An empty page is a 404."""
    return service.get_list_booking(credential, page, size)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: UUID,
    service: BookingService = Depends(deps.get_booking_service),
) -> BookingResponse:
    return service.get_booking_detail(booking_id)


@router.put("/{booking_id}", response_model=BookingResponse)
def update_booking(
    booking_id: UUID,
    payload: BookingUpdate,
    credential: str = Depends(deps.get_credential),
    service: BookingService = Depends(deps.get_booking_service),
) -> BookingResponse:
    return service.update_booking(booking_id, payload, credential)


@router.put("/{booking_id}/owner", response_model=BookingResponse)
def assign_booking_owner(
    booking_id: UUID,
    credential: str = Depends(deps.get_credential),
    service: BookingService = Depends(deps.get_booking_service),
) -> BookingResponse:
    """Make the authenticated caller the owner of the booking."""
    return service.assign_owner(booking_id, credential)


@router.put("/{booking_id}/status", response_model=BookingResponse)
def update_booking_status(
    booking_id: UUID,
    new_status: BookingStatus = Query(..., alias="status"),
    credential: str = Depends(deps.get_credential),
    service: BookingService = Depends(deps.get_booking_service),
) -> BookingResponse:
    return service.update_status(booking_id, new_status, credential)
