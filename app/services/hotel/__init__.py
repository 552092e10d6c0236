"""Hotel service layer."""

from app.services.hotel.hotel_service import HotelService

__all__ = ["HotelService"]
