"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from cinema_booking.service.reservation.driven_adapter.model.booking_model import BookingModel
from cinema_booking.service.reservation.driven_adapter.model.booking_seat_model import (
    BookingSeatModel,
)
from cinema_booking.service.reservation.driven_adapter.model.showtime_model import ShowtimeModel

__all__ = [
    'BookingModel',
    'BookingSeatModel',
    'ShowtimeModel',
]
