from typing import Sequence

from cinema_booking.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    UpstreamServiceError,
)


class InvalidRequestError(DomainError):
    def __init__(self, message: str = 'showtime_id and seats are required') -> None:
        super().__init__(message)


class InvalidSeatsError(DomainError):
    def __init__(self, invalid_seats: Sequence[str]) -> None:
        self.invalid_seats = list(invalid_seats)
        super().__init__('Invalid seats selected', data={'invalid_seats': self.invalid_seats})


class SeatConflictError(ConflictError):
    def __init__(self, unavailable_seats: Sequence[str]) -> None:
        self.unavailable_seats = list(unavailable_seats)
        super().__init__(
            'Some seats are already booked', data={'unavailable_seats': self.unavailable_seats}
        )


class AlreadyCancelledError(DomainError):
    def __init__(self, message: str = 'Booking is already cancelled') -> None:
        super().__init__(message)


class NotCancelledError(DomainError):
    def __init__(self, message: str = 'Only cancelled bookings can be removed') -> None:
        super().__init__(message)


class AlreadyPaidError(DomainError):
    def __init__(self, message: str = 'Booking is already paid') -> None:
        super().__init__(message)


class ReferenceMismatchError(DomainError):
    def __init__(self, message: str = 'Payment reference does not match this booking') -> None:
        super().__init__(message)


class PaymentGatewayError(UpstreamServiceError):
    pass


class PaymentNotPendingError(DomainError):
    def __init__(self, message: str = 'Payment has not been initiated') -> None:
        super().__init__(message)
