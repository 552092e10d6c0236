"""
Hotel schemas.

Requests for creating and editing hotels with their room types, and the
response shapes returned by the hotel API.
"""

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from app.models.base import HotelStatus, RoomTypeStatus
from app.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "RoomTypeItem",
    "HotelCreate",
    "HotelUpdate",
    "RoomTypeResponse",
    "HotelResponse",
]


class RoomTypeItem(BaseSchema):
    """
    Room type in a hotel request.

    In an update, an item carrying ``id`` edits that room type; an item
    without one adds a new room type.
    """

    id: Optional[UUID] = None
    name: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0)
    status: RoomTypeStatus = RoomTypeStatus.AVAILABLE


class HotelCreate(BaseCreateSchema):
    """
    Hotel creation request.

    ``partner_id`` is honoured for ADMIN callers only; a PARTNER always
    owns the hotel they create.
    """

    name: str = Field(..., min_length=1, max_length=255)
    partner_id: Optional[UUID] = None
    room_types: List[RoomTypeItem] = Field(default_factory=list)

    @field_validator("room_types")
    @classmethod
    def new_room_types_have_no_id(cls, items: List[RoomTypeItem]) -> List[RoomTypeItem]:
        if any(item.id is not None for item in items):
            raise ValueError("room types of a new hotel cannot carry an id")
        return items


class HotelUpdate(BaseUpdateSchema):
    """Partial hotel edit. Status has its own endpoint."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    room_types: Optional[List[RoomTypeItem]] = None


class RoomTypeResponse(BaseResponseSchema):
    id: UUID
    name: str
    price: Decimal
    status: RoomTypeStatus


class HotelResponse(BaseResponseSchema):
    id: UUID
    name: str
    partner_id: Optional[UUID] = None
    status: HotelStatus
    room_types: List[RoomTypeResponse] = Field(default_factory=list)
