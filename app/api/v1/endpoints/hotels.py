# app/api/v1/endpoints/hotels.py
"""Hotel endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.models.base import HotelStatus
from app.schemas.common.pagination import PaginatedResponse
from app.schemas.hotel import HotelCreate, HotelResponse, HotelUpdate
from app.services.hotel import HotelService

router = APIRouter(prefix="/hotels", tags=["hotels"])


@router.post("", response_model=HotelResponse, status_code=status.HTTP_201_CREATED)
def create_hotel(
    payload: HotelCreate,
    credential: str = Depends(deps.get_credential),
    service: HotelService = Depends(deps.get_hotel_service),
) -> HotelResponse:
    """Create a hotel; PARTNER callers own what they create."""
    return service.create_hotel(payload, credential)


@router.get("", response_model=PaginatedResponse[HotelResponse])
def list_hotels(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    service: HotelService = Depends(deps.get_hotel_service),
) -> PaginatedResponse[HotelResponse]:
    return service.get_list_hotels(page, size)


@router.get("/{hotel_id}", response_model=HotelResponse)
def get_hotel(
    hotel_id: UUID,
    service: HotelService = Depends(deps.get_hotel_service),
) -> HotelResponse:
    return service.get_hotel_detail(hotel_id)


@router.put("/{hotel_id}", response_model=HotelResponse)
def update_hotel(
    hotel_id: UUID,
    patch: HotelUpdate,
    credential: str = Depends(deps.get_credential),
    service: HotelService = Depends(deps.get_hotel_service),
) -> HotelResponse:
    return service.update_hotel(hotel_id, patch, credential)


@router.put("/{hotel_id}/status", response_model=HotelResponse)
def update_hotel_status(
    hotel_id: UUID,
    new_status: HotelStatus = Query(..., alias="status"),
    credential: str = Depends(deps.get_credential),
    service: HotelService = Depends(deps.get_hotel_service),
) -> HotelResponse:
    """Manual status override, ADMIN only."""
    return service.update_hotel_status(hotel_id, new_status, credential)
