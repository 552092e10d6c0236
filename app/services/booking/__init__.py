"""
Booking service layer.

Provides business logic for:
- Booking creation with an auto-expiring hold
- Role-scoped listing and detail views
- Updates and explicit owner assignment
- Role-gated status transitions
"""

from app.services.booking.booking_permissions import (
    BookingScope,
    booking_list_scope,
    can_change_status,
    ensure_can_change_status,
)
from app.services.booking.booking_service import BookingService

__all__ = [
    "BookingService",
    "BookingScope",
    "booking_list_scope",
    "can_change_status",
    "ensure_can_change_status",
]
