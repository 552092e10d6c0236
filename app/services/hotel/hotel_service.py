"""
Hotel service: creation, editing, detail, listing and manual status changes.
"""

from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.exceptions import MessageKey, NotFoundError, PermissionDeniedError, ValidationError
from app.core.logging import get_logger, log_execution_time
from app.core.security import IdentityResolver
from app.core.security.auth import Principal
from app.models.base import HotelStatus, UserRole
from app.models.hotel.hotel import Hotel, RoomType
from app.repositories.hotel import HotelRepository
from app.repositories.user import UserRepository
from app.schemas.common.pagination import PaginatedResponse
from app.schemas.hotel import HotelCreate, HotelResponse, HotelUpdate, RoomTypeItem
from app.services.background.hotel_status_service import derive_hotel_status


def _role_name(principal: Principal) -> Optional[str]:
    return principal.role.value if principal.role else None


class HotelService:
    """
    Hotel operations.

    Responsibilities:
    - Hotel creation by partners (who own what they create) and admins
    - Edits by an admin or the owning partner
    - Detail and paginated listing
    - ADMIN-only status override
    """

    def __init__(self, db_session: Session, identity_resolver: IdentityResolver):
        self.db = db_session
        self.identity_resolver = identity_resolver
        self.hotels = HotelRepository(db_session)
        self.users = UserRepository(db_session)
        self._logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    def _get_or_raise(self, hotel_id: UUID) -> Hotel:
        hotel = self.hotels.get_by_id(hotel_id)
        if hotel is None:
            raise NotFoundError("Hotel", hotel_id, MessageKey.HOTEL_NOT_FOUND)
        return hotel

    # -------------------------------------------------------------------------
    # Create / edit
    # -------------------------------------------------------------------------

    @log_execution_time()
    def create_hotel(self, request: HotelCreate, token: str) -> HotelResponse:
        """
        Create a hotel with its room types.

        A PARTNER becomes the owner. An ADMIN may name an owning partner
        through ``partner_id`` or leave the hotel unowned.

        Raises:
            PermissionDeniedError: the caller is neither PARTNER nor ADMIN
            NotFoundError: ``partner_id`` names no user
            ValidationError: ``partner_id`` names a user who is not a partner
        """
        principal = self.identity_resolver.resolve(token)
        if principal.has_role(UserRole.PARTNER):
            partner_id = principal.user_id
        elif principal.has_role(UserRole.ADMIN):
            partner_id = self._resolve_partner(request.partner_id)
        else:
            raise PermissionDeniedError(
                MessageKey.USER_DOES_NOT_HAVE_PERMISSION_TO_CREATE_HOTEL,
                message="User does not have permission to create hotels",
                role=_role_name(principal),
            )

        room_types = [self._new_room_type(item) for item in request.room_types]
        hotel = Hotel(
            name=request.name,
            partner_id=partner_id,
            status=derive_hotel_status(HotelStatus.ACTIVE, (rt.status for rt in room_types)),
            room_types=room_types,
        )
        hotel = self.hotels.create(hotel)
        self._logger.info(
            f"Created hotel {hotel.id}",
            extra={
                "hotel_id": str(hotel.id),
                "partner_id": str(partner_id) if partner_id else None,
                "created_by": str(principal.user_id),
                "room_types": len(room_types),
            },
        )
        return HotelResponse.model_validate(hotel)

    def _resolve_partner(self, partner_id: Optional[UUID]) -> Optional[UUID]:
        if partner_id is None:
            return None
        user = self.users.get_by_id(partner_id)
        if user is None:
            raise NotFoundError("User", partner_id, MessageKey.USER_NOT_FOUND)
        if user.role is not UserRole.PARTNER:
            raise ValidationError(
                "partner_id must reference a partner account",
                field_errors={"partner_id": ["must reference a partner account"]},
            )
        return user.id

    @staticmethod
    def _new_room_type(item: RoomTypeItem) -> RoomType:
        return RoomType(name=item.name, price=item.price, status=item.status)

    @log_execution_time()
    def update_hotel(self, hotel_id: UUID, patch: HotelUpdate, token: str) -> HotelResponse:
        """
        Apply the fields set in ``patch``.

        Room type items with an ``id`` edit that room type, items without
        one are added. Room types left out of the patch are kept. The
        hotel status is left to the availability sweep.

        Raises:
            NotFoundError: the hotel, or a referenced room type, does not exist
            PermissionDeniedError: the caller is not an ADMIN or the owning partner
        """
        principal = self.identity_resolver.resolve(token)
        hotel = self._get_or_raise(hotel_id)

        is_owner = principal.has_role(UserRole.PARTNER) and hotel.partner_id == principal.user_id
        if not (principal.has_role(UserRole.ADMIN) or is_owner):
            raise PermissionDeniedError(
                MessageKey.USER_DOES_NOT_HAVE_PERMISSION_TO_EDIT_HOTEL,
                message="User does not have permission to update this hotel",
                role=_role_name(principal),
                target=str(hotel_id),
            )

        provided = patch.provided_values()
        if "name" in provided:
            hotel.name = provided["name"]
        if "room_types" in provided:
            self._apply_room_types(hotel, patch.room_types)

        hotel = self.hotels.save(hotel)
        self._logger.info(
            f"Updated hotel {hotel.id}",
            extra={"hotel_id": str(hotel.id), "updated_by": str(principal.user_id), "fields": sorted(provided)},
        )
        return HotelResponse.model_validate(hotel)

    def _apply_room_types(self, hotel: Hotel, items: List[RoomTypeItem]) -> None:
        existing: Dict[UUID, RoomType] = {rt.id: rt for rt in hotel.room_types}
        for item in items:
            if item.id is None:
                hotel.room_types.append(self._new_room_type(item))
                continue
            room_type = existing.get(item.id)
            if room_type is None:
                self.db.rollback()
                raise NotFoundError("RoomType", item.id, MessageKey.ROOM_TYPE_NOT_FOUND)
            room_type.name = item.name
            room_type.price = item.price
            room_type.status = item.status

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_hotel_detail(self, hotel_id: UUID) -> HotelResponse:
        return HotelResponse.model_validate(self._get_or_raise(hotel_id))

    def get_list_hotels(self, page: int, size: int) -> PaginatedResponse[HotelResponse]:
        """
        Page of hotels.

        Raises:
            NotFoundError: the requested page is empty
        """
        items, total = self.hotels.find_page(page * size, size)
        if not items:
            self._logger.warning("No hotels found", extra={"page": page, "size": size})
            raise NotFoundError("Hotel", message_key=MessageKey.NO_HOTELS_FOUND, message="No hotels found")
        return PaginatedResponse[HotelResponse].create(
            items=[HotelResponse.model_validate(h) for h in items],
            total_items=total,
            page=page,
            size=size,
        )

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def update_hotel_status(self, hotel_id: UUID, status: HotelStatus, token: str) -> HotelResponse:
        """
        Set a hotel's status by hand.

        Raises:
            PermissionDeniedError: the caller is not an ADMIN
            NotFoundError: the hotel does not exist
        """
        principal = self.identity_resolver.resolve(token)
        if not principal.has_role(UserRole.ADMIN):
            raise PermissionDeniedError(
                MessageKey.USER_DOES_NOT_HAVE_PERMISSION_TO_UPDATE_HOTEL,
                message="User does not have permission to update hotel status",
                role=_role_name(principal),
                target=status.value,
            )

        hotel = self._get_or_raise(hotel_id)
        previous = hotel.status
        hotel.status = status
        hotel = self.hotels.save(hotel)
        self._logger.info(
            f"Hotel {hotel_id} status changed to {status.value}",
            extra={"hotel_id": str(hotel_id), "from_status": previous.value, "to_status": status.value},
        )
        return HotelResponse.model_validate(hotel)
