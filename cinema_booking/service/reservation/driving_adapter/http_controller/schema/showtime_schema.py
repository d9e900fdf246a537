from datetime import datetime
from typing import List

from pydantic import BaseModel

from cinema_booking.service.reservation.domain.entity.showtime_entity import Showtime
from cinema_booking.service.reservation.domain.value_object.seat_availability import (
    SeatAvailability,
)


class ShowtimeResponse(BaseModel):
    id: int
    movie_id: int
    hall_id: str
    hall_name: str
    start_time: datetime
    price: int

    @classmethod
    def from_entity(cls, showtime: Showtime) -> 'ShowtimeResponse':
        return cls(
            id=showtime.id,
            movie_id=showtime.movie_id,
            hall_id=showtime.hall_id,
            hall_name=showtime.hall_name,
            start_time=showtime.start_time,
            price=showtime.price,
        )


class HallLayoutResponse(BaseModel):
    rows: List[str]
    seats_per_row: int
    seat_ids: List[str]


class SeatAvailabilityResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'showtime_id': 1,
                'movie_id': 7,
                'hall_id': 'A',
                'hall_name': 'Hall A',
                'start_time': '2025-01-10T18:30:00Z',
                'price': 300,
                'layout': {'rows': ['A', 'B'], 'seats_per_row': 2, 'seat_ids': ['A1', 'A2', 'B1', 'B2']},
                'booked_seats': ['A1'],
                'available_seats': ['A2', 'B1', 'B2'],
            }
        },
    }

    showtime_id: int
    movie_id: int
    hall_id: str
    hall_name: str
    start_time: datetime
    price: int
    layout: HallLayoutResponse
    booked_seats: List[str]
    available_seats: List[str]

    @classmethod
    def from_value(cls, availability: SeatAvailability) -> 'SeatAvailabilityResponse':
        return cls(
            showtime_id=availability.showtime_id,
            movie_id=availability.movie_id,
            hall_id=availability.hall_id,
            hall_name=availability.hall_name,
            start_time=availability.start_time,
            price=availability.price,
            layout=HallLayoutResponse(
                rows=list(availability.layout.rows),
                seats_per_row=availability.layout.seats_per_row,
                seat_ids=list(availability.seat_ids),
            ),
            booked_seats=list(availability.booked_seats),
            available_seats=list(availability.available_seats),
        )
