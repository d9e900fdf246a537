from typing import Iterable, Optional

from cinema_booking.service.reservation.domain.booking_errors import (
    InvalidRequestError,
    InvalidSeatsError,
    SeatConflictError,
)


def normalize_seats(seats: Optional[Iterable[object]]) -> list[str]:
    """Strip, uppercase and de-duplicate seat labels, keeping first-seen order"""
    if seats is None or isinstance(seats, str):
        raise InvalidRequestError()
    normalized = list(dict.fromkeys(str(seat).strip().upper() for seat in seats))
    if not normalized:
        raise InvalidRequestError()
    return normalized


def ensure_seats_in_universe(seats: list[str], universe: Iterable[str]) -> None:
    valid = set(universe)
    if invalid := [seat for seat in seats if seat not in valid]:
        raise InvalidSeatsError(invalid)


def ensure_seats_available(seats: list[str], booked_seats: Iterable[str]) -> None:
    booked = set(booked_seats)
    if unavailable := [seat for seat in seats if seat in booked]:
        raise SeatConflictError(unavailable)
