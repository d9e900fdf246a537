from datetime import datetime

import attrs

from cinema_booking.service.reservation.domain.entity.showtime_entity import Showtime
from cinema_booking.service.reservation.domain.hall_layout import HallLayout, seat_universe


@attrs.frozen
class SeatAvailability:
    """Point-in-time snapshot; a seat shown available may be taken before it is reserved"""

    showtime_id: int
    movie_id: int
    hall_id: str
    hall_name: str
    start_time: datetime
    price: int
    layout: HallLayout
    seat_ids: tuple[str, ...]
    booked_seats: tuple[str, ...]

    @classmethod
    def of(cls, *, showtime: Showtime, booked_seats: set[str]) -> 'SeatAvailability':
        layout = showtime.layout
        universe = seat_universe(layout)
        return cls(
            showtime_id=showtime.id,
            movie_id=showtime.movie_id,
            hall_id=layout.hall_id.value,
            hall_name=layout.hall_name,
            start_time=showtime.start_time,
            price=showtime.price,
            layout=layout,
            seat_ids=universe,
            # Universe order, so the seat map renders predictably
            booked_seats=tuple(seat for seat in universe if seat in booked_seats),
        )

    @property
    def available_seats(self) -> tuple[str, ...]:
        booked = set(self.booked_seats)
        return tuple(seat for seat in self.seat_ids if seat not in booked)
