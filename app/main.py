from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.api.errors import register_exception_handlers
from app.api.v1.router import router as api_v1_router
from app.config.logging import setup_logging
from app.config.settings import Settings, settings as default_settings
from app.core.logging import get_logger
from app.core.middleware import register_middlewares
from app.db.init_db import init_db
from app.services.background import (
    BackgroundScheduler,
    BookingExpirationService,
    HotelStatusService,
)

logger = get_logger(__name__)


def build_scheduler(
    settings: Settings,
    expiration_service: BookingExpirationService,
    hotel_status_service: HotelStatusService,
) -> BackgroundScheduler:
    scheduler = BackgroundScheduler()
    scheduler.add_job("booking-expiration", expiration_service.run_due, settings.BOOKING_EXPIRY_POLL_SECONDS)
    scheduler.add_job("booking-expiration-sweep", expiration_service.sweep_database, settings.BOOKING_EXPIRY_SWEEP_SECONDS)
    scheduler.add_job("hotel-status-sweep", hotel_status_service.refresh_hotel_statuses, settings.HOTEL_STATUS_SWEEP_SECONDS)
    return scheduler


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[sessionmaker] = None,
    bind: Optional[Engine] = None,
) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    - Owns the booking hold index and the background jobs for the
      lifetime of the application.
    """
    settings = settings or default_settings

    if session_factory is None:
        from app.db.session import SessionLocal, engine
        session_factory = SessionLocal
        bind = bind or engine

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(settings)
        if not settings.is_production():
            # production schemas are managed with migrations
            init_db(bind)

        expiration_service = BookingExpirationService(session_factory)
        expiration_service.rebuild_from_database()
        app.state.expiration_service = expiration_service

        scheduler = None
        if settings.ENABLE_BACKGROUND_JOBS:
            scheduler = build_scheduler(settings, expiration_service, HotelStatusService(session_factory))
            scheduler.start()
        app.state.scheduler = scheduler

        logger.info(f"{settings.APP_NAME} started", extra={"environment": settings.ENVIRONMENT})
        try:
            yield
        finally:
            if scheduler is not None:
                scheduler.stop()
            logger.info(f"{settings.APP_NAME} stopped")

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    return app


app = create_app()
