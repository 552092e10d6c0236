"""
Background Services Module

Recurring work that runs outside the request cycle.

Services:
    - BookingExpirationService: Deadline index that reclaims lapsed booking holds
    - HotelStatusService: Periodic recomputation of hotel status
    - BackgroundScheduler: Runs recurring jobs on daemon threads

Usage:
    from app.services.background import (
        BackgroundScheduler,
        BookingExpirationService,
        HotelStatusService,
    )

    scheduler = BackgroundScheduler()
    scheduler.add_job("booking-expiration", expiration.run_due, 5.0)
    scheduler.add_job("hotel-status-sweep", sweeper.refresh_hotel_statuses, 60.0)
    scheduler.start()
"""

from app.services.background.booking_expiration_service import (
    BookingExpirationService,
    ExpirationReport,
)
from app.services.background.hotel_status_service import (
    HotelStatusService,
    SweepReport,
    derive_hotel_status,
)
from app.services.background.task_scheduler_service import (
    BackgroundScheduler,
    RecurringJob,
    TaskExecution,
    TaskStatus,
)

__all__ = [
    "BookingExpirationService",
    "ExpirationReport",
    "HotelStatusService",
    "SweepReport",
    "derive_hotel_status",
    "BackgroundScheduler",
    "RecurringJob",
    "TaskExecution",
    "TaskStatus",
]
