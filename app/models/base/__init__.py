"""
Base models package.

Provides the declarative base, mixins and enums for all database models.
"""

from app.models.base.base_model import Base, utc_now
from app.models.base.enums import BookingStatus, HotelStatus, RoomTypeStatus, UserRole
from app.models.base.mixins import TimestampMixin, UUIDMixin

__all__ = [
    "Base",
    "utc_now",
    "TimestampMixin",
    "UUIDMixin",
    "BookingStatus",
    "HotelStatus",
    "RoomTypeStatus",
    "UserRole",
]
