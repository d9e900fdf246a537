from datetime import datetime

import attrs

from cinema_booking.service.reservation.domain.hall_layout import HallLayout, layout_for


@attrs.define
class Showtime:
    """A screening; owned by the catalog service and read-only here"""

    id: int
    movie_id: int
    hall_id: str
    hall_name: str
    start_time: datetime
    price: int

    @property
    def layout(self) -> HallLayout:
        return layout_for(self.hall_id)
