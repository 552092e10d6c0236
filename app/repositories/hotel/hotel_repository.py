# app/repositories/hotel/hotel_repository.py
"""
Hotel and room type repositories.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import RepositoryError
from app.models.base import HotelStatus, utc_now
from app.models.hotel.hotel import Hotel, RoomType
from app.repositories.base.base_repository import BaseRepository


class HotelRepository(BaseRepository[Hotel]):
    """Repository for hotels and their derived status."""

    def __init__(self, session: Session):
        super().__init__(Hotel, session)

    def find_all_with_room_types(self) -> List[Hotel]:
        """All hotels with room types eagerly loaded."""
        stmt = select(Hotel).options(selectinload(Hotel.room_types)).order_by(Hotel.id)
        return list(self.db.scalars(stmt).all())

    def update_status_if(
        self,
        hotel_id: UUID,
        expected: HotelStatus,
        new_status: HotelStatus,
        commit: bool = True,
    ) -> bool:
        """
        Compare-and-set the hotel status.

        Returns:
            False if the stored status no longer equals ``expected``
        """
        try:
            result = self.db.execute(
                update(Hotel)
                .where(Hotel.id == hotel_id, Hotel.status == expected)
                .values(status=new_status, updated_at=utc_now())
                .execution_options(synchronize_session=False)
            )
            if commit:
                self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Hotel status update failed: {str(e)}") from e
        return result.rowcount == 1


class RoomTypeRepository(BaseRepository[RoomType]):
    """Repository for room types."""

    def __init__(self, session: Session):
        super().__init__(RoomType, session)

    def get_optional(self, room_type_id: Optional[UUID]) -> Optional[RoomType]:
        if room_type_id is None:
            return None
        return self.get_by_id(room_type_id)
