"""
Booking schemas with validation.

Request schemas for creating and updating bookings and the response
shapes returned by the booking API.
"""

from datetime import date as Date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import EmailStr, Field, model_validator

from app.models.base import BookingStatus
from app.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "BookingDetailItem",
    "BookingCreate",
    "BookingUpdate",
    "BookingDetailResponse",
    "BookingResponse",
]


class BookingDetailItem(BaseSchema):
    """Requested line item: a number of rooms of one room type."""

    room_type_id: UUID = Field(..., description="Room type being booked")
    price: Decimal = Field(..., ge=0, description="Unit price per room")
    number_of_rooms: int = Field(..., ge=1, description="Number of rooms requested")
    total_money: Decimal = Field(..., ge=0, description="Line total")


class BookingCreate(BaseCreateSchema):
    """
    Booking creation request.

    ``user_id`` is optional; bookings without one are attached to the
    guest account.
    """

    user_id: Optional[UUID] = Field(None, description="Owning user, guest if omitted")
    full_name: str = Field(..., min_length=1, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=30)
    email: Optional[EmailStr] = None
    total_price: Decimal = Field(..., ge=0)
    check_in_date: Date
    check_out_date: Date
    coupon_id: Optional[int] = None
    note: str = Field("", max_length=2000)
    payment_method: str = Field(..., min_length=1, max_length=50)
    booking_details: List[BookingDetailItem] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_dates(self) -> "BookingCreate":
        if self.check_out_date <= self.check_in_date:
            raise ValueError("check_out_date must be after check_in_date")
        return self


class BookingUpdate(BaseUpdateSchema):
    """Partial booking update; only fields that are set are applied."""

    total_price: Optional[Decimal] = Field(None, ge=0)
    check_in_date: Optional[Date] = None
    check_out_date: Optional[Date] = None
    coupon_id: Optional[int] = None
    note: Optional[str] = Field(None, max_length=2000)
    payment_method: Optional[str] = Field(None, min_length=1, max_length=50)
    booking_details: Optional[List[BookingDetailItem]] = None

    @model_validator(mode="after")
    def validate_dates(self) -> "BookingUpdate":
        if (
            self.check_in_date is not None
            and self.check_out_date is not None
            and self.check_out_date <= self.check_in_date
        ):
            raise ValueError("check_out_date must be after check_in_date")
        return self


class BookingDetailResponse(BaseResponseSchema):
    room_type_id: Optional[UUID] = None
    price: Decimal
    number_of_rooms: int
    total_money: Decimal


class BookingResponse(BaseResponseSchema):
    """Booking as returned to callers."""

    id: UUID
    user_id: Optional[UUID] = None
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    total_price: Decimal
    check_in_date: Date
    check_out_date: Date
    status: BookingStatus
    coupon_id: Optional[int] = None
    note: str
    payment_method: str
    booked_at: datetime
    expires_at: datetime
    booking_details: List[BookingDetailResponse] = Field(default_factory=list, validation_alias="details")
