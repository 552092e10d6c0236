"""
Repositories package.
"""

from app.repositories.base import BaseRepository
from app.repositories.booking import BookingRepository
from app.repositories.hotel import HotelRepository, RoomTypeRepository
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "HotelRepository",
    "RoomTypeRepository",
    "UserRepository",
]
