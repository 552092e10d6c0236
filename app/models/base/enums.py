"""
Database enums.

Closed enumerations shared by models, schemas and services.
"""

import enum
from typing import Optional


class UserRole(str, enum.Enum):
    """User role enumeration."""
    ADMIN = "ADMIN"
    PARTNER = "PARTNER"
    CUSTOMER = "CUSTOMER"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["UserRole"]:
        """Map a role claim to a member, or None when unrecognised."""
        if value is None:
            return None
        try:
            return cls(str(value).upper())
        except ValueError:
            return None


class BookingStatus(str, enum.Enum):
    """Booking lifecycle status."""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class HotelStatus(str, enum.Enum):
    """Hotel operational status."""
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"


class RoomTypeStatus(str, enum.Enum):
    """Room type availability status."""
    AVAILABLE = "AVAILABLE"
    FULL = "FULL"
    UNAVAILABLE = "UNAVAILABLE"
