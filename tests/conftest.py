"""
Shared pytest fixtures.

Every test gets its own file-backed SQLite database so background work on
other threads can open separate connections.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional
from uuid import UUID

import pytest

from app.core.security import IdentityResolver, JWTManager
from app.db.init_db import init_db
from app.db.session import create_db_engine, create_session_factory
from app.models import Booking, Hotel, RoomType, User
from app.models.base import HotelStatus, RoomTypeStatus, UserRole
from app.schemas.booking import BookingCreate, BookingDetailItem
from app.services.background import BookingExpirationService


class FrozenClock:
    """Manually advanced clock returning naive UTC datetimes."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or datetime(2030, 1, 1, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


@dataclass
class Seed:
    """Ids of the seeded accounts, hotels and room types."""
    guest_id: UUID
    admin_id: UUID
    partner_id: UUID
    other_partner_id: UUID
    customer_id: UUID
    other_customer_id: UUID
    hotel_id: UUID
    other_hotel_id: UUID
    standard_room_id: UUID
    suite_room_id: UUID
    other_room_id: UUID


@pytest.fixture
def engine(tmp_path):
    """Engine over a fresh SQLite file with all tables created."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}", echo=False)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def jwt_manager() -> JWTManager:
    return JWTManager(secret_key="test-secret-key", access_token_expire_minutes=30)


@pytest.fixture
def identity_resolver(jwt_manager) -> IdentityResolver:
    return IdentityResolver(jwt_manager)


@pytest.fixture
def make_token(jwt_manager) -> Callable[..., str]:
    """Builds a bearer credential for a user id and role name."""
    def _make(user_id: UUID, role: str) -> str:
        return f"Bearer {jwt_manager.create_access_token(user_id, role)}"
    return _make


@pytest.fixture
def seed(session_factory) -> Seed:
    """
    Accounts for every role plus two partner hotels.

    ``hotel`` (owned by ``partner``) offers a standard room and a suite;
    ``other_hotel`` (owned by ``other_partner``) offers one room type.
    """
    session = session_factory()
    try:
        guest = User(full_name="guest", role=UserRole.CUSTOMER)
        admin = User(full_name="Ada Admin", email="admin@example.com", role=UserRole.ADMIN)
        partner = User(full_name="Pat Partner", email="partner@example.com", role=UserRole.PARTNER)
        other_partner = User(full_name="Olly Partner", email="other.partner@example.com", role=UserRole.PARTNER)
        customer = User(full_name="Cam Customer", email="customer@example.com", role=UserRole.CUSTOMER)
        other_customer = User(full_name="Chris Customer", email="other@example.com", role=UserRole.CUSTOMER)
        session.add_all([guest, admin, partner, other_partner, customer, other_customer])
        session.flush()

        standard = RoomType(name="Standard", price=Decimal("100.00"), status=RoomTypeStatus.AVAILABLE)
        suite = RoomType(name="Suite", price=Decimal("250.00"), status=RoomTypeStatus.FULL)
        hotel = Hotel(name="Seaside", partner_id=partner.id, status=HotelStatus.ACTIVE, room_types=[standard, suite])

        other_room = RoomType(name="Loft", price=Decimal("80.00"), status=RoomTypeStatus.AVAILABLE)
        other_hotel = Hotel(name="Hillside", partner_id=other_partner.id, status=HotelStatus.ACTIVE, room_types=[other_room])
        session.add_all([hotel, other_hotel])
        session.commit()

        return Seed(
            guest_id=guest.id,
            admin_id=admin.id,
            partner_id=partner.id,
            other_partner_id=other_partner.id,
            customer_id=customer.id,
            other_customer_id=other_customer.id,
            hotel_id=hotel.id,
            other_hotel_id=other_hotel.id,
            standard_room_id=standard.id,
            suite_room_id=suite.id,
            other_room_id=other_room.id,
        )
    finally:
        session.close()


@pytest.fixture
def booking_request(seed) -> Callable[..., BookingCreate]:
    """Builds a valid create request for one standard room; keywords override fields."""
    def _make(**overrides) -> BookingCreate:
        data = dict(
            user_id=seed.customer_id,
            full_name="Cam Customer",
            phone_number="+1-555-0100",
            email="customer@example.com",
            total_price=Decimal("200.00"),
            check_in_date=date(2030, 2, 1),
            check_out_date=date(2030, 2, 3),
            payment_method="CARD",
            note="late arrival",
            booking_details=[
                BookingDetailItem(
                    room_type_id=seed.standard_room_id,
                    price=Decimal("100.00"),
                    number_of_rooms=1,
                    total_money=Decimal("200.00"),
                )
            ],
        )
        data.update(overrides)
        return BookingCreate(**data)
    return _make


@pytest.fixture
def expiration_service(session_factory, clock) -> BookingExpirationService:
    return BookingExpirationService(session_factory, clock=clock)


@pytest.fixture
def load_booking(session_factory) -> Callable[[UUID], Optional[Booking]]:
    """Reads a booking, with its details, through a fresh session."""
    def _load(booking_id: UUID) -> Optional[Booking]:
        session = session_factory()
        try:
            booking = session.get(Booking, booking_id)
            if booking is not None:
                session.expunge(booking)
            return booking
        finally:
            session.close()
    return _load
