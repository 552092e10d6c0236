"""
Hotel status sweep.

Recomputes every hotel's status from the availability of its room types:
a hotel with no AVAILABLE room type is CLOSED, and a CLOSED hotel with at
least one AVAILABLE room type is reopened. Only hotels whose status
changes are written.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable, List
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.base import HotelStatus, RoomTypeStatus
from app.repositories.hotel import HotelRepository
from app.services.common import UnitOfWork


def derive_hotel_status(current: HotelStatus, room_type_statuses: Iterable[RoomTypeStatus]) -> HotelStatus:
    """Target status for a hotel; a hotel without room types counts as full."""
    all_full = all(status is not RoomTypeStatus.AVAILABLE for status in room_type_statuses)
    if all_full:
        return HotelStatus.CLOSED
    if current is HotelStatus.CLOSED:
        return HotelStatus.ACTIVE
    return current


@dataclass
class SweepReport:
    """Result of one sweep."""
    scanned: int = 0
    closed: List[UUID] = field(default_factory=list)
    reopened: List[UUID] = field(default_factory=list)
    conflicts: int = 0

    @property
    def changed(self) -> int:
        return len(self.closed) + len(self.reopened)


class HotelStatusService:
    """Periodic recomputation of hotel status."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory
        self._logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    def refresh_hotel_statuses(self) -> SweepReport:
        report = SweepReport()
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(HotelRepository)
            for hotel in repo.find_all_with_room_types():
                report.scanned += 1
                target = derive_hotel_status(hotel.status, (rt.status for rt in hotel.room_types))
                if target is hotel.status:
                    continue
                # compare-and-set so a concurrent manual change is not overwritten
                if not repo.update_status_if(hotel.id, hotel.status, target, commit=False):
                    report.conflicts += 1
                    continue
                if target is HotelStatus.CLOSED:
                    report.closed.append(hotel.id)
                else:
                    report.reopened.append(hotel.id)

        if report.changed:
            self._logger.info(
                f"Hotel status sweep: {len(report.closed)} closed, {len(report.reopened)} reopened",
                extra={"scanned": report.scanned, "conflicts": report.conflicts},
            )
        else:
            self._logger.debug(f"Hotel status sweep: {report.scanned} scanned, no changes")
        return report
