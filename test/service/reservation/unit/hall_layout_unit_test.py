import pytest

from cinema_booking.service.reservation.domain.hall_layout import (
    HallId,
    UnknownHallError,
    layout_for,
    seat_universe,
)


@pytest.mark.unit
class TestLayoutFor:
    def test_hall_a_is_six_rows_of_ten(self) -> None:
        layout = layout_for('A')
        assert layout.hall_id == HallId.A
        assert layout.hall_name == 'Hall A'
        assert layout.rows == ('A', 'B', 'C', 'D', 'E', 'F')
        assert layout.seats_per_row == 10

    def test_hall_b_is_eight_rows_of_twelve(self) -> None:
        layout = layout_for('B')
        assert layout.rows[-1] == 'H'
        assert layout.seats_per_row == 12

    @pytest.mark.parametrize('hall_id', ['C', '', 'a'])
    def test_unknown_hall_raises(self, hall_id: str) -> None:
        with pytest.raises(UnknownHallError) as exc_info:
            layout_for(hall_id)
        assert exc_info.value.status_code == 500
        assert exc_info.value.data == {'hall_id': hall_id}


@pytest.mark.unit
class TestSeatUniverse:
    def test_size_is_rows_times_seats_per_row(self) -> None:
        assert len(seat_universe(layout_for('A'))) == 60
        assert len(seat_universe(layout_for('B'))) == 96

    def test_order_is_row_major_with_numeric_seats(self) -> None:
        universe = seat_universe(layout_for('A'))
        assert universe[:3] == ('A1', 'A2', 'A3')
        assert universe[9:11] == ('A10', 'B1')
        assert universe[-1] == 'F10'

    def test_is_deterministic_and_duplicate_free(self) -> None:
        layout = layout_for('B')
        assert seat_universe(layout) == seat_universe(layout_for('B'))
        assert len(set(seat_universe(layout))) == len(seat_universe(layout))

    def test_row_outside_layout_is_not_a_seat(self) -> None:
        assert 'G1' not in seat_universe(layout_for('A'))
        assert 'G1' in seat_universe(layout_for('B'))
        assert 'A11' not in seat_universe(layout_for('A'))
