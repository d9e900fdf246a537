import time
from typing import Iterable, Optional, Self

from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from cinema_booking.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from cinema_booking.platform.exception.exceptions import CustomBaseError, NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.platform.metrics.booking_metrics import metrics
from cinema_booking.service.reservation.domain.booking_errors import (
    InvalidRequestError,
    InvalidSeatsError,
    SeatConflictError,
)
from cinema_booking.service.reservation.domain.entity.booking_entity import Booking
from cinema_booking.service.reservation.domain.hall_layout import seat_universe
from cinema_booking.service.reservation.domain.value_object.seat_selection import (
    ensure_seats_available,
    ensure_seats_in_universe,
    normalize_seats,
)


_RESULT_LABELS: dict[type[CustomBaseError], str] = {
    InvalidRequestError: 'invalid_request',
    NotFoundError: 'showtime_not_found',
    InvalidSeatsError: 'invalid_seats',
    SeatConflictError: 'conflict',
}


class ReserveSeatsUseCase:
    """
    Reserve seats for a showtime as one confirmed booking.

    Flow (single transaction):
    1. Normalize the requested seat labels
    2. Load the showtime and validate seats against the hall's seat universe
    3. Fail fast on seats already held by confirmed bookings
    4. Insert the booking and its booking_seat claims, then commit

    Step 3 is advisory. Two requests can both pass it; the unique claim
    constraint rejects the later insert, which the repo reports as the same
    SeatConflictError.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(
        self,
        *,
        showtime_id: Optional[int],
        user_id: Optional[int],
        seats: Optional[Iterable[str]],
    ) -> Booking:
        start = time.perf_counter()
        hall_id = 'unknown'

        with self.tracer.start_as_current_span(
            'use_case.reserve_seats',
            attributes={'showtime.id': showtime_id or 0, 'user.id': user_id or 0},
        ) as span:
            try:
                if showtime_id is None:
                    raise InvalidRequestError()
                requested = normalize_seats(seats)
                span.set_attribute('seats.count', len(requested))

                async with self.uow:
                    showtime = await self.uow.showtime_query_repo.get_by_id(
                        showtime_id=showtime_id
                    )
                    if not showtime:
                        raise NotFoundError('Showtime not found')
                    hall_id = showtime.hall_id

                    ensure_seats_in_universe(requested, seat_universe(showtime.layout))

                    booked_seats = await self.uow.booking_query_repo.get_booked_seats(
                        showtime_id=showtime_id
                    )
                    ensure_seats_available(requested, booked_seats)

                    booking = Booking.create(
                        id=uuid_utils.uuid7(),
                        user_id=user_id,
                        showtime_id=showtime_id,
                        seats=requested,
                        seat_price=showtime.price,
                    )
                    await self.uow.booking_command_repo.create(booking=booking)
                    await self.uow.commit()
            except CustomBaseError as e:
                metrics.record_seat_reservation(
                    hall_id=hall_id,
                    result=_RESULT_LABELS.get(type(e), 'error'),
                    duration=time.perf_counter() - start,
                )
                raise

            span.set_attribute('booking.id', str(booking.id))

        metrics.record_seat_reservation(
            hall_id=hall_id, result='success', duration=time.perf_counter() - start
        )
        Logger.base.info(
            f'🎟️ [RESERVE] Booking {booking.id} holds {booking.seats} '
            f'for showtime {showtime_id} (user {user_id})'
        )
        return booking
