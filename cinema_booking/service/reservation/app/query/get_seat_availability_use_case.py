from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from cinema_booking.platform.config.di import Container
from cinema_booking.platform.exception.exceptions import NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.reservation.app.interface.i_booking_query_repo import (
    IBookingQueryRepo,
)
from cinema_booking.service.reservation.app.interface.i_showtime_query_repo import (
    IShowtimeQueryRepo,
)
from cinema_booking.service.reservation.domain.value_object.seat_availability import (
    SeatAvailability,
)


class GetSeatAvailabilityUseCase:
    """
    Seat map of a showtime: hall layout plus the seats held by confirmed bookings.

    Read-only. The result can be stale by the time the client reserves; the
    reservation itself re-checks and the booking_seat constraint settles races.
    """

    def __init__(
        self,
        *,
        showtime_query_repo: IShowtimeQueryRepo,
        booking_query_repo: IBookingQueryRepo,
    ) -> None:
        self.showtime_query_repo = showtime_query_repo
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        showtime_query_repo: IShowtimeQueryRepo = Depends(Provide[Container.showtime_query_repo]),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(showtime_query_repo=showtime_query_repo, booking_query_repo=booking_query_repo)

    @Logger.io
    async def execute(self, *, showtime_id: int) -> SeatAvailability:
        showtime = await self.showtime_query_repo.get_by_id(showtime_id=showtime_id)
        if not showtime:
            raise NotFoundError('Showtime not found')

        booked_seats = await self.booking_query_repo.get_booked_seats(showtime_id=showtime_id)
        return SeatAvailability.of(showtime=showtime, booked_seats=booked_seats)
