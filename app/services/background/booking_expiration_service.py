"""
Booking hold expiration service.

Reclaims PENDING bookings whose hold has lapsed. Deadlines are kept in an
in-process min-heap keyed by expiration time; one recurring job pops the
due entries and issues a conditional delete for each, so a booking that
was confirmed or cancelled in the meantime is left alone. The heap is
rebuilt from the database on startup.
"""

import heapq
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.exceptions import RepositoryError
from app.core.logging import get_logger
from app.models.base import utc_now
from app.repositories.booking import BookingRepository
from app.services.common import UnitOfWork


@dataclass
class ExpirationReport:
    """Result of one expiration pass."""
    checked: int = 0
    expired: List[UUID] = field(default_factory=list)
    skipped: int = 0
    failed: int = 0


class BookingExpirationService:
    """
    Deadline index over booking holds.

    Features:
    - ``arm`` registers a hold at creation time
    - ``run_due`` expires every hold whose deadline has passed
    - ``rebuild_from_database`` restores the index after a restart
    - ``sweep_database`` catches lapsed holds the index never saw
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        clock: Callable[[], datetime] = utc_now,
    ):
        self._session_factory = session_factory
        self._clock = clock
        self._heap: List[Tuple[datetime, UUID]] = []
        self._lock = threading.Lock()
        self._logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._heap)

    def arm(self, booking_id: UUID, expires_at: datetime) -> None:
        """Schedule the expiration check for ``booking_id`` at ``expires_at``."""
        with self._lock:
            heapq.heappush(self._heap, (expires_at, booking_id))
        self._logger.debug(f"Armed hold for booking {booking_id} until {expires_at.isoformat()}")

    def next_deadline(self) -> Optional[datetime]:
        with self._lock:
            return self._heap[0][0] if self._heap else None

    def _pop_due(self, now: datetime) -> List[UUID]:
        due: List[UUID] = []
        with self._lock:
            while self._heap and self._heap[0][0] <= now:
                due.append(heapq.heappop(self._heap)[1])
        return due

    def expire_booking(self, booking_id: UUID) -> bool:
        """
        Expiration action for one booking: delete it if still PENDING.

        Returns:
            True if the booking was deleted
        """
        with UnitOfWork(self._session_factory) as uow:
            deleted = uow.get_repo(BookingRepository).delete_if_pending(booking_id)
        if deleted:
            self._logger.info(f"Deleted expired booking with ID: {booking_id}")
        return deleted

    def run_due(self, now: Optional[datetime] = None) -> ExpirationReport:
        """Expire every indexed hold whose deadline is at or before ``now``."""
        now = now or self._clock()
        report = ExpirationReport()
        for booking_id in self._pop_due(now):
            report.checked += 1
            try:
                expired = self.expire_booking(booking_id)
            except RepositoryError:
                # retried on the next poll
                self._logger.exception(f"Failed to expire booking {booking_id}")
                self.arm(booking_id, now)
                report.failed += 1
                continue
            if expired:
                report.expired.append(booking_id)
            else:
                report.skipped += 1
        if report.checked:
            self._logger.info(
                f"Expiration pass: {len(report.expired)} expired, {report.skipped} skipped",
                extra={"checked": report.checked},
            )
        return report

    def sweep_database(self, now: Optional[datetime] = None) -> ExpirationReport:
        """Expire lapsed PENDING holds found directly in the database."""
        now = now or self._clock()
        with UnitOfWork(self._session_factory) as uow:
            candidates = uow.get_repo(BookingRepository).find_expired_pending_ids(now)
        report = ExpirationReport()
        for booking_id in candidates:
            report.checked += 1
            if self.expire_booking(booking_id):
                report.expired.append(booking_id)
            else:
                report.skipped += 1
        return report

    def rebuild_from_database(self) -> int:
        """
        Replace the index with the deadlines of all PENDING bookings.

        Returns:
            Number of holds armed
        """
        with UnitOfWork(self._session_factory) as uow:
            deadlines = uow.get_repo(BookingRepository).find_pending_deadlines()
        with self._lock:
            self._heap = list(deadlines)
            heapq.heapify(self._heap)
        self._logger.info(f"Rebuilt hold index with {len(deadlines)} pending bookings")
        return len(deadlines)
