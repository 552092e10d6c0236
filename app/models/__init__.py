"""
Database models.

Importing this package registers every model with the declarative base.
"""

from app.models.base import Base
from app.models.booking import Booking, BookingDetail
from app.models.hotel import Hotel, RoomType
from app.models.user import User

__all__ = [
    "Base",
    "Booking",
    "BookingDetail",
    "Hotel",
    "RoomType",
    "User",
]
