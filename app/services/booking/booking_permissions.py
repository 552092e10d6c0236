"""
Role-based permission policy for bookings.

Pure functions over closed tables: which bookings a role may list and
which status a role may move a booking to. Both tables must cover every
``UserRole`` member; a principal without a recognised role is denied.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional

from app.core.exceptions import MessageKey, PermissionDeniedError
from app.models.base import BookingStatus, UserRole


class BookingScope(str, Enum):
    """Which bookings a listing covers."""
    ALL = "all"
    PARTNER_HOTELS = "partner_hotels"
    OWN = "own"


STATUS_TRANSITIONS: Dict[UserRole, FrozenSet[BookingStatus]] = {
    UserRole.ADMIN: frozenset(BookingStatus),
    UserRole.PARTNER: frozenset({BookingStatus.CONFIRMED}),
    UserRole.CUSTOMER: frozenset({BookingStatus.CANCELLED}),
}

LIST_SCOPES: Dict[UserRole, BookingScope] = {
    UserRole.ADMIN: BookingScope.ALL,
    UserRole.PARTNER: BookingScope.PARTNER_HOTELS,
    UserRole.CUSTOMER: BookingScope.OWN,
}

for _table in (STATUS_TRANSITIONS, LIST_SCOPES):
    _missing = set(UserRole) - set(_table)
    if _missing:
        raise RuntimeError(f"Booking permission table missing roles: {sorted(r.value for r in _missing)}")


def can_change_status(role: Optional[UserRole], target: BookingStatus) -> bool:
    """True if ``role`` may set a booking's status to ``target``."""
    if role is None:
        return False
    return target in STATUS_TRANSITIONS[role]


def ensure_can_change_status(role: Optional[UserRole], target: BookingStatus) -> None:
    """
    Raises:
        PermissionDeniedError: naming the rejected target when the role has
            some transitions but not this one
    """
    if can_change_status(role, target):
        return
    if role is None or not STATUS_TRANSITIONS[role]:
        raise PermissionDeniedError(
            MessageKey.USER_DOES_NOT_HAVE_PERMISSION_TO_CHANGE_STATUS,
            message="User does not have permission to change booking status",
            role=role.value if role else None,
        )
    raise PermissionDeniedError(
        MessageKey.USER_CANNOT_CHANGE_STATUS_TO,
        message=f"User cannot change status to {target.value}",
        role=role.value,
        target=target.value,
    )


def booking_list_scope(role: Optional[UserRole]) -> BookingScope:
    if role is None:
        raise PermissionDeniedError(
            MessageKey.USER_DOES_NOT_HAVE_PERMISSION_TO_VIEW_BOOKINGS,
            message="User does not have permission to view bookings",
        )
    return LIST_SCOPES[role]
