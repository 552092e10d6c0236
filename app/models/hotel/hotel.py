"""
Hotel and room type models.

A hotel's status is derived from the statuses of its room types by the
periodic availability sweep.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, HotelStatus, RoomTypeStatus, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.user.user import User

__all__ = [
    "Hotel",
    "RoomType",
]


class Hotel(UUIDMixin, TimestampMixin, Base):
    """
    Hotel owned by a partner account.

    Attributes:
        name: Display name
        partner_id: Owning partner user
        status: ACTIVE while at least one room type is available
        room_types: Room types offered by the hotel
    """

    __tablename__ = "hotels"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hotel display name",
    )
    partner_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Partner user owning the hotel",
    )
    status: Mapped[HotelStatus] = mapped_column(
        Enum(HotelStatus, native_enum=False, length=20),
        nullable=False,
        default=HotelStatus.ACTIVE,
        index=True,
        comment="Operational status",
    )

    partner: Mapped[Optional["User"]] = relationship("User", lazy="joined")
    room_types: Mapped[List["RoomType"]] = relationship(
        "RoomType",
        back_populates="hotel",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Hotel(id={self.id}, name='{self.name}', status={self.status})>"


class RoomType(UUIDMixin, TimestampMixin, Base):
    """Bookable room category within a hotel."""

    __tablename__ = "room_types"

    hotel_id: Mapped[UUID] = mapped_column(
        ForeignKey("hotels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        default=Decimal("0.00"),
    )
    status: Mapped[RoomTypeStatus] = mapped_column(
        Enum(RoomTypeStatus, native_enum=False, length=20),
        nullable=False,
        default=RoomTypeStatus.AVAILABLE,
    )

    hotel: Mapped["Hotel"] = relationship("Hotel", back_populates="room_types")

    def __repr__(self) -> str:
        return f"<RoomType(id={self.id}, name='{self.name}', status={self.status})>"
