"""Booking schemas package."""

from app.schemas.booking.booking import (
    BookingCreate,
    BookingDetailItem,
    BookingDetailResponse,
    BookingResponse,
    BookingUpdate,
)

__all__ = [
    "BookingCreate",
    "BookingDetailItem",
    "BookingDetailResponse",
    "BookingResponse",
    "BookingUpdate",
]
