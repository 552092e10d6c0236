"""Hotel schemas package."""

from app.schemas.hotel.hotel import (
    HotelCreate,
    HotelResponse,
    HotelUpdate,
    RoomTypeItem,
    RoomTypeResponse,
)

__all__ = ["HotelCreate", "HotelUpdate", "RoomTypeItem", "HotelResponse", "RoomTypeResponse"]
