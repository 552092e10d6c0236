"""Hotel repositories package."""

from app.repositories.hotel.hotel_repository import HotelRepository, RoomTypeRepository

__all__ = ["HotelRepository", "RoomTypeRepository"]
