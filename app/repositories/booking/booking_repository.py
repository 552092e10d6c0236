# app/repositories/booking/booking_repository.py
"""
Booking repository.

Provides role-scoped paginated retrieval, the conditional writes that keep
hold expiration and status changes from racing, and the deadline queries
used by the expiration service.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import RepositoryError
from app.core.logging import get_logger
from app.models.base import BookingStatus, utc_now
from app.models.booking.booking import Booking, BookingDetail
from app.models.hotel.hotel import Hotel, RoomType
from app.repositories.base.base_repository import BaseRepository

logger = get_logger(__name__)


class BookingRepository(BaseRepository[Booking]):
    """
    Repository for booking aggregates.

    Features:
    - Paginated listing for all, per-user and per-partner scopes
    - Conditional delete of PENDING bookings
    - Single-statement status updates
    - Deadline queries over PENDING holds
    """

    def __init__(self, session: Session):
        """Initialize booking repository."""
        super().__init__(Booking, session)

    # ==================== SEARCH & RETRIEVAL ====================

    def find_page_by_user(self, user_id: UUID, offset: int, limit: int) -> Tuple[List[Booking], int]:
        """Bookings owned by ``user_id``."""
        stmt = select(Booking).where(Booking.user_id == user_id)
        return self._paginate(stmt, offset, limit)

    def find_page_by_partner(self, partner_id: UUID, offset: int, limit: int) -> Tuple[List[Booking], int]:
        """
        Bookings that include at least one room type of a hotel owned by
        ``partner_id``.
        """
        partner_booking_ids = (
            select(BookingDetail.booking_id)
            .join(RoomType, BookingDetail.room_type_id == RoomType.id)
            .join(Hotel, RoomType.hotel_id == Hotel.id)
            .where(Hotel.partner_id == partner_id)
        )
        stmt = select(Booking).where(Booking.id.in_(partner_booking_ids))
        return self._paginate(stmt, offset, limit)

    # ==================== LIFECYCLE ====================

    def replace_details(self, booking: Booking, details: Iterable[BookingDetail]) -> None:
        """Swap the whole detail collection; orphaned lines are deleted on flush."""
        booking.details.clear()
        booking.details.extend(details)

    def update_status(self, booking_id: UUID, status: BookingStatus) -> bool:
        """
        Set the status of a booking in one UPDATE statement.

        Returns:
            False when no row matched, i.e. the booking no longer exists
        """
        try:
            result = self.db.execute(
                update(Booking)
                .where(Booking.id == booking_id)
                .values(status=status, updated_at=utc_now())
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Status update failed: {str(e)}") from e
        return result.rowcount == 1

    def delete_if_pending(self, booking_id: UUID) -> bool:
        """
        Conditional delete: remove the booking only if it is still PENDING.

        The status predicate is evaluated by the database inside the DELETE,
        so a status change committed earlier always wins.

        Returns:
            True if a PENDING booking was deleted
        """
        try:
            result = self.db.execute(
                delete(Booking)
                .where(Booking.id == booking_id, Booking.status == BookingStatus.PENDING)
                .execution_options(synchronize_session=False)
            )
            deleted = result.rowcount == 1
            if deleted:
                # no-op where the FK cascade already removed them
                self.db.execute(
                    delete(BookingDetail)
                    .where(BookingDetail.booking_id == booking_id)
                    .execution_options(synchronize_session=False)
                )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Conditional delete failed: {str(e)}") from e
        return deleted

    # ==================== DEADLINES ====================

    def find_pending_deadlines(self) -> List[Tuple[datetime, UUID]]:
        """``(expires_at, id)`` of every PENDING booking."""
        rows = self.db.execute(
            select(Booking.expires_at, Booking.id)
            .where(Booking.status == BookingStatus.PENDING)
            .order_by(Booking.expires_at.asc())
        ).all()
        return [(row.expires_at, row.id) for row in rows]

    def find_expired_pending_ids(self, now: Optional[datetime] = None, limit: int = 500) -> List[UUID]:
        """Ids of PENDING bookings whose hold has lapsed, oldest first."""
        now = now or utc_now()
        return list(
            self.db.scalars(
                select(Booking.id)
                .where(Booking.status == BookingStatus.PENDING, Booking.expires_at <= now)
                .order_by(Booking.expires_at.asc())
                .limit(limit)
            ).all()
        )
