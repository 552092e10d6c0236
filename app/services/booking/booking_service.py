"""
Core booking service: the booking lifecycle.

Creates bookings in PENDING with a time-bounded hold, answers role-scoped
list and detail queries, applies partial updates and explicit ownership
reassignment, and performs role-gated status transitions.
"""

from contextlib import contextmanager
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Iterable, Iterator, List, Optional, Protocol
from uuid import UUID

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.config import settings
from app.core.exceptions import ErrorCode, MessageKey, NotFoundError, ValidationError
from app.core.logging import get_logger, log_execution_time
from app.core.security import IdentityResolver
from app.models.base import BookingStatus, utc_now
from app.models.booking.booking import Booking, BookingDetail
from app.models.user.user import User
from app.repositories.booking import BookingRepository
from app.repositories.hotel import RoomTypeRepository
from app.repositories.user import UserRepository
from app.schemas.booking import (
    BookingCreate,
    BookingDetailItem,
    BookingResponse,
    BookingUpdate,
)
from app.schemas.common.pagination import PaginatedResponse
from app.services.booking.booking_permissions import (
    BookingScope,
    booking_list_scope,
    ensure_can_change_status,
)


class HoldScheduler(Protocol):
    """Anything that can arm a booking hold deadline."""

    def arm(self, booking_id: UUID, expires_at: datetime) -> None:
        ...


_PATCHABLE_FIELDS = (
    "total_price",
    "check_in_date",
    "check_out_date",
    "coupon_id",
    "note",
    "payment_method",
)


class BookingService:
    """
    Booking lifecycle operations.

    Responsibilities:
    - Booking creation with a hold that auto-expires while PENDING
    - Role-scoped listing and detail queries
    - Partial updates and explicit owner assignment
    - Role-gated status transitions
    """

    def __init__(
        self,
        db_session: Session,
        identity_resolver: IdentityResolver,
        hold_scheduler: Optional[HoldScheduler] = None,
        hold_seconds: Optional[int] = None,
        guest_user_name: Optional[str] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.db = db_session
        self.identity_resolver = identity_resolver
        self.hold_scheduler = hold_scheduler
        self.hold_seconds = hold_seconds if hold_seconds is not None else settings.BOOKING_HOLD_SECONDS
        self.guest_user_name = guest_user_name or settings.GUEST_USER_NAME
        self.clock = clock

        self.bookings = BookingRepository(db_session)
        self.users = UserRepository(db_session)
        self.room_types = RoomTypeRepository(db_session)
        self._logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    @log_execution_time()
    def create_booking(self, request: BookingCreate) -> BookingResponse:
        """
        Create a PENDING booking and arm its hold.

        Raises:
            NotFoundError: the named user, or the guest account, does not exist
        """
        user = self._resolve_owner(request.user_id)

        now = self.clock()
        booking = Booking(
            user_id=user.id,
            full_name=request.full_name,
            phone_number=request.phone_number,
            email=request.email,
            total_price=request.total_price,
            check_in_date=request.check_in_date,
            check_out_date=request.check_out_date,
            coupon_id=request.coupon_id,
            note=request.note,
            payment_method=request.payment_method,
            status=BookingStatus.PENDING,
            booked_at=now,
            expires_at=now + timedelta(seconds=self.hold_seconds),
        )
        booking.details = self._build_details(request.booking_details)
        self._check_total(booking)

        booking = self.bookings.create(booking)
        if self.hold_scheduler is not None:
            self.hold_scheduler.arm(booking.id, booking.expires_at)

        self._logger.info(
            f"Created booking {booking.id}",
            extra={"booking_id": str(booking.id), "user_id": str(user.id), "expires_at": booking.expires_at.isoformat()},
        )
        return BookingResponse.model_validate(booking)

    def _resolve_owner(self, user_id: Optional[UUID]) -> User:
        if user_id is not None:
            user = self.users.get_by_id(user_id)
            if user is None:
                self._logger.error(f"User with ID {user_id} not found")
                raise NotFoundError("User", user_id, MessageKey.USER_NOT_FOUND)
            return user

        guest = self.users.find_by_full_name(self.guest_user_name)
        if guest is None:
            self._logger.error(f"Guest user '{self.guest_user_name}' not found")
            raise NotFoundError("User", self.guest_user_name, MessageKey.USER_NOT_FOUND)
        return guest

    def _build_details(self, items: Iterable[BookingDetailItem]) -> List[BookingDetail]:
        details = []
        for item in items:
            room_type = self.room_types.get_optional(item.room_type_id)
            details.append(
                BookingDetail(
                    room_type_id=room_type.id if room_type is not None else None,
                    price=item.price,
                    number_of_rooms=item.number_of_rooms,
                    total_money=item.total_money,
                )
            )
        return details

    def _check_total(self, booking: Booking) -> None:
        if not booking.details:
            return
        lines = booking.details_total
        if lines != Decimal(booking.total_price):
            self._logger.warning(
                "Booking total price does not match its detail totals",
                extra={"total_price": str(booking.total_price), "details_total": str(lines)},
            )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @log_execution_time()
    def get_list_booking(self, token: str, page: int, size: int) -> PaginatedResponse[BookingResponse]:
        """
        Role-scoped page of bookings.

        Raises:
            PermissionDeniedError: the caller has no recognised role
            NotFoundError: the requested page is empty
        """
        principal = self.identity_resolver.resolve(token)
        scope = booking_list_scope(principal.role)
        offset = page * size

        self._logger.info("Fetching all bookings...", extra={"scope": scope.value, "page": page, "size": size})
        if scope is BookingScope.ALL:
            items, total = self.bookings.find_page(offset, size)
        elif scope is BookingScope.PARTNER_HOTELS:
            items, total = self.bookings.find_page_by_partner(principal.user_id, offset, size)
        else:
            items, total = self.bookings.find_page_by_user(principal.user_id, offset, size)

        if not items:
            self._logger.warning("No bookings found", extra={"scope": scope.value, "page": page})
            raise NotFoundError("Booking", message_key=MessageKey.NO_BOOKINGS_FOUND, message="No bookings found")

        return PaginatedResponse[BookingResponse].create(
            items=[BookingResponse.model_validate(b) for b in items],
            total_items=total,
            page=page,
            size=size,
        )

    def get_booking_detail(self, booking_id: UUID) -> BookingResponse:
        booking = self.bookings.get_by_id(booking_id)
        if booking is None:
            raise NotFoundError("Booking", booking_id, MessageKey.NO_BOOKINGS_FOUND)
        return BookingResponse.model_validate(booking)

    def _get_or_raise(self, booking_id: UUID) -> Booking:
        booking = self.bookings.get_by_id(booking_id)
        if booking is None:
            raise NotFoundError("Booking", booking_id, MessageKey.BOOKING_NOT_FOUND)
        return booking

    @contextmanager
    def _booking_still_exists(self, booking_id: UUID) -> Iterator[None]:
        """Report a row deleted under a pending write as a missing booking."""
        try:
            yield
        except StaleDataError as e:
            self.db.rollback()
            self._logger.info(f"Booking {booking_id} was deleted before the write")
            raise NotFoundError("Booking", booking_id, MessageKey.BOOKING_NOT_FOUND) from e

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    def update_booking(self, booking_id: UUID, patch: BookingUpdate, token: str) -> BookingResponse:
        """
        Apply the fields set in ``patch``. The owner is left unchanged.

        Raises:
            AuthenticationError: the credential does not resolve
            NotFoundError: the booking does not exist, including when it
                expired before the write
            ValidationError: the merged dates are not a valid range
        """
        principal = self.identity_resolver.resolve(token)
        booking = self._get_or_raise(booking_id)

        provided = patch.provided_values()
        for name in _PATCHABLE_FIELDS:
            if name in provided:
                setattr(booking, name, provided[name])

        if booking.check_out_date <= booking.check_in_date:
            self.db.rollback()
            raise ValidationError(
                "check_out_date must be after check_in_date",
                field_errors={"check_out_date": ["must be after check_in_date"]},
                error_code=ErrorCode.INVALID_DATE_RANGE,
                message_key=MessageKey.INVALID_DATE_RANGE,
            )

        with self._booking_still_exists(booking_id):
            if "booking_details" in provided:
                self.bookings.replace_details(booking, self._build_details(patch.booking_details))
            self._check_total(booking)
            booking = self.bookings.save(booking)

        self._logger.info(
            f"Updated booking {booking.id}",
            extra={"booking_id": str(booking.id), "updated_by": str(principal.user_id), "fields": sorted(provided)},
        )
        return BookingResponse.model_validate(booking)

    def assign_owner(self, booking_id: UUID, token: str) -> BookingResponse:
        """Make the caller the owner of the booking."""
        principal = self.identity_resolver.resolve(token)
        booking = self._get_or_raise(booking_id)

        previous = booking.user_id
        booking.user_id = principal.user_id
        with self._booking_still_exists(booking_id):
            booking = self.bookings.save(booking)
        self._logger.info(
            f"Reassigned booking {booking.id} owner",
            extra={"booking_id": str(booking.id), "from_user": str(previous), "to_user": str(principal.user_id)},
        )
        return BookingResponse.model_validate(booking)

    @log_execution_time()
    def update_status(self, booking_id: UUID, new_status: BookingStatus, token: str) -> BookingResponse:
        """
        Move the booking to ``new_status`` if the caller's role permits it.

        Raises:
            NotFoundError: the booking does not exist, including when it
                expired between the lookup and the write
            PermissionDeniedError: the role may not set ``new_status``
        """
        self._get_or_raise(booking_id)
        principal = self.identity_resolver.resolve(token)
        ensure_can_change_status(principal.role, new_status)

        if not self.bookings.update_status(booking_id, new_status):
            raise NotFoundError("Booking", booking_id, MessageKey.BOOKING_NOT_FOUND)

        booking = self._get_or_raise(booking_id)
        self._logger.info(
            f"Booking {booking_id} status changed to {new_status.value}",
            extra={"booking_id": str(booking_id), "status": new_status.value, "role": principal.role.value},
        )
        return BookingResponse.model_validate(booking)
