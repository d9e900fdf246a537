from typing import List

from fastapi import APIRouter, Depends

from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.reservation.app.query.get_seat_availability_use_case import (
    GetSeatAvailabilityUseCase,
)
from cinema_booking.service.reservation.app.query.list_showtimes_by_movie_use_case import (
    ListShowtimesByMovieUseCase,
)
from cinema_booking.service.reservation.driving_adapter.http_controller.schema.showtime_schema import (
    SeatAvailabilityResponse,
    ShowtimeResponse,
)


router = APIRouter()


@router.get('/movie/{movie_id}')
@Logger.io
async def list_showtimes_by_movie(
    movie_id: int,
    use_case: ListShowtimesByMovieUseCase = Depends(ListShowtimesByMovieUseCase.depends),
) -> List[ShowtimeResponse]:
    showtimes = await use_case.execute(movie_id=movie_id)
    return [ShowtimeResponse.from_entity(showtime) for showtime in showtimes]


@router.get('/{showtime_id}/seats')
@Logger.io
async def get_seat_availability(
    showtime_id: int,
    use_case: GetSeatAvailabilityUseCase = Depends(GetSeatAvailabilityUseCase.depends),
) -> SeatAvailabilityResponse:
    availability = await use_case.execute(showtime_id=showtime_id)
    return SeatAvailabilityResponse.from_value(availability)
