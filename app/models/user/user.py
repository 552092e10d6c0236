"""
User model configuration.
"""

from typing import Optional

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDMixin, UserRole


class User(UUIDMixin, TimestampMixin, Base):
    """
    Account that owns bookings or, for partners, hotels.

    The canonical guest account is the user whose ``full_name`` equals the
    configured guest marker.
    """

    __tablename__ = "users"

    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Full name of the user",
    )
    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        unique=True,
        nullable=True,
        comment="Email address",
    )
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, native_enum=False, length=20),
        nullable=False,
        default=UserRole.CUSTOMER,
        comment="Primary user role for RBAC",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, full_name='{self.full_name}', role={self.role})>"
