"""Tests for hotel creation, editing and queries."""

from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError as SchemaValidationError

from app.core.exceptions import MessageKey, NotFoundError, PermissionDeniedError, ValidationError
from app.models.base import HotelStatus, RoomTypeStatus
from app.schemas.hotel import HotelCreate, HotelUpdate, RoomTypeItem
from app.services.hotel import HotelService


@pytest.fixture
def service(db_session, identity_resolver) -> HotelService:
    return HotelService(db_session, identity_resolver)


@pytest.fixture
def tokens(seed, make_token):
    return {
        "admin": make_token(seed.admin_id, "ADMIN"),
        "partner": make_token(seed.partner_id, "PARTNER"),
        "other_partner": make_token(seed.other_partner_id, "PARTNER"),
        "customer": make_token(seed.customer_id, "CUSTOMER"),
    }


def _room(name="Double", status=RoomTypeStatus.AVAILABLE, **kwargs) -> RoomTypeItem:
    return RoomTypeItem(name=name, price=Decimal("120.00"), status=status, **kwargs)


class TestCreateHotel:
    def test_partner_owns_created_hotel(self, service, tokens, seed):
        hotel = service.create_hotel(HotelCreate(name="Lakeside", room_types=[_room()]), tokens["partner"])

        assert hotel.partner_id == seed.partner_id
        assert hotel.status is HotelStatus.ACTIVE
        assert [rt.name for rt in hotel.room_types] == ["Double"]

    def test_partner_cannot_create_for_someone_else(self, service, tokens, seed):
        request = HotelCreate(name="Lakeside", partner_id=seed.other_partner_id, room_types=[_room()])

        hotel = service.create_hotel(request, tokens["partner"])

        assert hotel.partner_id == seed.partner_id

    def test_admin_assigns_owning_partner(self, service, tokens, seed):
        request = HotelCreate(name="Lakeside", partner_id=seed.other_partner_id, room_types=[_room()])

        hotel = service.create_hotel(request, tokens["admin"])

        assert hotel.partner_id == seed.other_partner_id

    def test_admin_may_leave_hotel_unowned(self, service, tokens):
        hotel = service.create_hotel(HotelCreate(name="Lakeside", room_types=[_room()]), tokens["admin"])

        assert hotel.partner_id is None

    def test_owner_must_be_a_partner(self, service, tokens, seed):
        with pytest.raises(ValidationError):
            service.create_hotel(HotelCreate(name="Lakeside", partner_id=seed.customer_id), tokens["admin"])

    def test_unknown_owner(self, service, tokens):
        with pytest.raises(NotFoundError) as exc_info:
            service.create_hotel(HotelCreate(name="Lakeside", partner_id=uuid4()), tokens["admin"])
        assert exc_info.value.message_key is MessageKey.USER_NOT_FOUND

    def test_customer_is_denied(self, service, tokens):
        with pytest.raises(PermissionDeniedError) as exc_info:
            service.create_hotel(HotelCreate(name="Lakeside"), tokens["customer"])
        assert exc_info.value.message_key is MessageKey.USER_DOES_NOT_HAVE_PERMISSION_TO_CREATE_HOTEL

    @pytest.mark.parametrize(
        "room_types",
        [[], [_room(status=RoomTypeStatus.FULL), _room("Twin", status=RoomTypeStatus.UNAVAILABLE)]],
    )
    def test_hotel_without_availability_starts_closed(self, service, tokens, room_types):
        hotel = service.create_hotel(HotelCreate(name="Lakeside", room_types=room_types), tokens["partner"])

        assert hotel.status is HotelStatus.CLOSED

    def test_new_room_types_cannot_carry_ids(self):
        with pytest.raises(SchemaValidationError):
            HotelCreate(name="Lakeside", room_types=[_room(id=uuid4())])


class TestUpdateHotel:
    def test_owner_renames_hotel(self, service, tokens, seed):
        hotel = service.update_hotel(seed.hotel_id, HotelUpdate(name="Seaside Resort"), tokens["partner"])

        assert hotel.name == "Seaside Resort"
        assert {rt.name for rt in hotel.room_types} == {"Standard", "Suite"}

    def test_edits_and_adds_room_types(self, service, tokens, seed):
        patch = HotelUpdate(
            room_types=[
                RoomTypeItem(id=seed.suite_room_id, name="Grand Suite", price=Decimal("300.00")),
                _room("Family"),
            ]
        )

        hotel = service.update_hotel(seed.hotel_id, patch, tokens["partner"])

        by_name = {rt.name: rt for rt in hotel.room_types}
        assert set(by_name) == {"Standard", "Grand Suite", "Family"}
        assert by_name["Grand Suite"].id == seed.suite_room_id
        assert by_name["Grand Suite"].price == Decimal("300.00")
        assert by_name["Grand Suite"].status is RoomTypeStatus.AVAILABLE

    def test_admin_may_edit_any_hotel(self, service, tokens, seed):
        hotel = service.update_hotel(seed.other_hotel_id, HotelUpdate(name="Hilltop"), tokens["admin"])

        assert hotel.name == "Hilltop"

    @pytest.mark.parametrize("caller", ["other_partner", "customer"])
    def test_non_owner_is_denied(self, service, tokens, seed, caller):
        with pytest.raises(PermissionDeniedError) as exc_info:
            service.update_hotel(seed.hotel_id, HotelUpdate(name="Taken"), tokens[caller])

        assert exc_info.value.message_key is MessageKey.USER_DOES_NOT_HAVE_PERMISSION_TO_EDIT_HOTEL
        assert service.get_hotel_detail(seed.hotel_id).name == "Seaside"

    def test_room_type_of_another_hotel_is_not_found(self, service, tokens, seed):
        patch = HotelUpdate(
            name="Renamed",
            room_types=[RoomTypeItem(id=seed.other_room_id, name="Stolen", price=Decimal("1.00"))],
        )

        with pytest.raises(NotFoundError) as exc_info:
            service.update_hotel(seed.hotel_id, patch, tokens["partner"])

        assert exc_info.value.message_key is MessageKey.ROOM_TYPE_NOT_FOUND
        assert service.get_hotel_detail(seed.hotel_id).name == "Seaside"

    def test_explicit_null_keeps_name(self, service, tokens, seed):
        hotel = service.update_hotel(seed.hotel_id, HotelUpdate(name=None), tokens["partner"])

        assert hotel.name == "Seaside"

    def test_missing_hotel(self, service, tokens):
        with pytest.raises(NotFoundError) as exc_info:
            service.update_hotel(uuid4(), HotelUpdate(name="x"), tokens["admin"])
        assert exc_info.value.message_key is MessageKey.HOTEL_NOT_FOUND


class TestQueriesAndStatus:
    def test_list_hotels(self, service, seed):
        page = service.get_list_hotels(0, 10)

        assert page.meta.total_items == 2
        assert {h.name for h in page.items} == {"Seaside", "Hillside"}

    def test_page_past_end(self, service, seed):
        with pytest.raises(NotFoundError) as exc_info:
            service.get_list_hotels(5, 10)
        assert exc_info.value.message_key is MessageKey.NO_HOTELS_FOUND

    def test_admin_sets_status(self, service, tokens, seed):
        hotel = service.update_hotel_status(seed.hotel_id, HotelStatus.CLOSED, tokens["admin"])

        assert hotel.status is HotelStatus.CLOSED

    def test_owner_cannot_set_status(self, service, tokens, seed):
        with pytest.raises(PermissionDeniedError) as exc_info:
            service.update_hotel_status(seed.hotel_id, HotelStatus.CLOSED, tokens["partner"])
        assert exc_info.value.message_key is MessageKey.USER_DOES_NOT_HAVE_PERMISSION_TO_UPDATE_HOTEL
