"""
Booking models for managing hotel reservations.

A booking is created PENDING with a hold that expires after a fixed
duration; unconfirmed holds are reclaimed by deleting the row.
"""

from datetime import date as Date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    Date as SQLDate,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, BookingStatus, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.hotel.hotel import RoomType
    from app.models.user.user import User

__all__ = [
    "Booking",
    "BookingDetail",
]


class Booking(UUIDMixin, TimestampMixin, Base):
    """
    Core booking entity for hotel reservations.

    Attributes:
        user_id: Owning user (the guest account for anonymous bookings)
        total_price: Total amount for the stay
        check_in_date: Check-in date
        check_out_date: Check-out date, strictly after check-in
        status: Current status of the booking
        coupon_id: Applied coupon, if any
        note: Free-text note
        payment_method: Payment method identifier
        booked_at: When the booking was made
        expires_at: When an unconfirmed hold lapses
        full_name: Contact name captured at booking time
        phone_number: Contact phone captured at booking time
        email: Contact email captured at booking time
        details: Room type line items
    """

    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("total_price >= 0", name="ck_booking_total_price_non_negative"),
        CheckConstraint("check_out_date > check_in_date", name="ck_booking_dates_ordered"),
        Index("ix_bookings_status_expires_at", "status", "expires_at"),
    )

    user_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Owning user",
    )

    total_price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        comment="Total price of the booking",
    )
    check_in_date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    check_out_date: Mapped[Date] = mapped_column(SQLDate, nullable=False)

    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, native_enum=False, length=20),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
    )

    coupon_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")
    payment_method: Mapped[str] = mapped_column(String(50), nullable=False)

    booked_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        comment="Hold deadline; only meaningful while PENDING",
    )

    # Contact details captured independently of the user profile
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    user: Mapped[Optional["User"]] = relationship("User", lazy="joined")
    details: Mapped[List["BookingDetail"]] = relationship(
        "BookingDetail",
        back_populates="booking",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    @property
    def details_total(self) -> Decimal:
        return sum((d.total_money for d in self.details), Decimal("0"))

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, status={self.status}, expires_at={self.expires_at})>"


class BookingDetail(UUIDMixin, Base):
    """Line item of a booking: a number of rooms of one room type."""

    __tablename__ = "booking_details"

    booking_id: Mapped[UUID] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_type_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("room_types.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    number_of_rooms: Mapped[int] = mapped_column(Integer, nullable=False)
    total_money: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    booking: Mapped["Booking"] = relationship("Booking", back_populates="details")
    room_type: Mapped[Optional["RoomType"]] = relationship("RoomType", lazy="joined")

    def __repr__(self) -> str:
        return f"<BookingDetail(booking_id={self.booking_id}, room_type_id={self.room_type_id})>"
