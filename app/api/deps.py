# app/api/deps.py
"""
FastAPI dependencies.

Plain callables that routes use with ``Depends``:

    @router.get("/bookings")
    def list_bookings(service: BookingService = Depends(deps.get_booking_service)):
        ...
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.config import settings
from app.core.security import IdentityResolver, JWTManager
from app.db.session import get_db
from app.services.background import BookingExpirationService
from app.services.booking import BookingService
from app.services.hotel import HotelService


# --- Authentication ------------------------------------------------------------

@lru_cache()
def get_jwt_manager() -> JWTManager:
    return JWTManager(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        access_token_expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


def get_identity_resolver(jwt_manager: JWTManager = Depends(get_jwt_manager)) -> IdentityResolver:
    return IdentityResolver(jwt_manager)


def get_credential(authorization: Optional[str] = Header(None)) -> str:
    """Raw ``Authorization`` header; the resolver rejects a missing one."""
    return authorization or ""


# --- Services ------------------------------------------------------------------

def get_expiration_service(request: Request) -> Optional[BookingExpirationService]:
    """Deadline index created by the application lifespan, if any."""
    return getattr(request.app.state, "expiration_service", None)


def get_booking_service(
    db: Session = Depends(get_db),
    resolver: IdentityResolver = Depends(get_identity_resolver),
    expiration: Optional[BookingExpirationService] = Depends(get_expiration_service),
) -> BookingService:
    return BookingService(db, resolver, hold_scheduler=expiration)


def get_hotel_service(
    db: Session = Depends(get_db),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> HotelService:
    return HotelService(db, resolver)
