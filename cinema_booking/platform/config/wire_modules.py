"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from cinema_booking.service.reservation.app.command import (
    initiate_payment_use_case,
    verify_payment_use_case,
)
from cinema_booking.service.reservation.app.query import (
    get_booking_use_case,
    get_seat_availability_use_case,
    list_bookings_use_case,
    list_showtimes_by_movie_use_case,
)
from cinema_booking.service.reservation.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    initiate_payment_use_case,
    verify_payment_use_case,
    get_booking_use_case,
    get_seat_availability_use_case,
    list_bookings_use_case,
    list_showtimes_by_movie_use_case,
    role_auth,
]
