"""
Booking models package.
"""

from app.models.booking.booking import Booking, BookingDetail

__all__ = ["Booking", "BookingDetail"]
