"""Hotel models package."""

from app.models.hotel.hotel import Hotel, RoomType

__all__ = ["Hotel", "RoomType"]
