"""
Hall Layout Registry

Static seat grids for the theater halls. A seat id is the row label followed
by the seat number (``C7``); the set of valid ids for a hall never changes at
runtime, so it is used both to render the seat map and to validate requests.
"""

from enum import StrEnum
from functools import cache
from typing import Mapping

import attrs

from cinema_booking.platform.exception.exceptions import CustomBaseError


class HallId(StrEnum):
    A = 'A'
    B = 'B'


class UnknownHallError(CustomBaseError):
    """A showtime points at a hall outside the registry (catalog data error)"""

    def __init__(self, hall_id: str) -> None:
        super().__init__(f'Unknown hall: {hall_id}', 500, {'hall_id': hall_id})


@attrs.frozen
class HallLayout:
    hall_id: HallId
    hall_name: str
    rows: tuple[str, ...]
    seats_per_row: int


HALL_LAYOUTS: Mapping[HallId, HallLayout] = {
    HallId.A: HallLayout(
        hall_id=HallId.A,
        hall_name='Hall A',
        rows=('A', 'B', 'C', 'D', 'E', 'F'),
        seats_per_row=10,
    ),
    HallId.B: HallLayout(
        hall_id=HallId.B,
        hall_name='Hall B',
        rows=('A', 'B', 'C', 'D', 'E', 'F', 'G', 'H'),
        seats_per_row=12,
    ),
}


def layout_for(hall_id: str) -> HallLayout:
    try:
        return HALL_LAYOUTS[HallId(hall_id)]
    except (ValueError, KeyError):
        raise UnknownHallError(str(hall_id)) from None


@cache
def seat_universe(layout: HallLayout) -> tuple[str, ...]:
    """Row by row in declared order, seats 1..seats_per_row within a row"""
    return tuple(
        f'{row}{number}' for row in layout.rows for number in range(1, layout.seats_per_row + 1)
    )
