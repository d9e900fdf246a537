import pytest

from cinema_booking.service.reservation.domain.booking_errors import (
    InvalidRequestError,
    InvalidSeatsError,
    SeatConflictError,
)
from cinema_booking.service.reservation.domain.hall_layout import layout_for, seat_universe
from cinema_booking.service.reservation.domain.value_object.seat_selection import (
    ensure_seats_available,
    ensure_seats_in_universe,
    normalize_seats,
)


@pytest.mark.unit
class TestNormalizeSeats:
    def test_strips_uppercases_and_deduplicates_in_order(self) -> None:
        assert normalize_seats([' b2', 'A1', 'B2 ', 'a1', 'C3']) == ['B2', 'A1', 'C3']

    @pytest.mark.parametrize('seats', [None, []])
    def test_missing_or_empty_raises_invalid_request(self, seats) -> None:
        with pytest.raises(InvalidRequestError, match='showtime_id and seats are required'):
            normalize_seats(seats)

    def test_bare_string_is_not_a_seat_list(self) -> None:
        with pytest.raises(InvalidRequestError):
            normalize_seats('A1')


@pytest.mark.unit
class TestEnsureSeatsInUniverse:
    def test_reports_only_the_invalid_seats(self) -> None:
        universe = seat_universe(layout_for('A'))
        with pytest.raises(InvalidSeatsError) as exc_info:
            ensure_seats_in_universe(['A1', 'Z9', 'A11'], universe)

        assert exc_info.value.message == 'Invalid seats selected'
        assert exc_info.value.invalid_seats == ['Z9', 'A11']
        assert exc_info.value.data == {'invalid_seats': ['Z9', 'A11']}
        assert exc_info.value.status_code == 400

    def test_valid_seats_pass(self) -> None:
        ensure_seats_in_universe(['A1', 'F10'], seat_universe(layout_for('A')))


@pytest.mark.unit
class TestEnsureSeatsAvailable:
    def test_reports_exactly_the_requested_seats_that_are_held(self) -> None:
        with pytest.raises(SeatConflictError) as exc_info:
            ensure_seats_available(['A1', 'A2', 'A3'], {'A2', 'A3', 'B7'})

        assert exc_info.value.message == 'Some seats are already booked'
        assert exc_info.value.unavailable_seats == ['A2', 'A3']
        assert exc_info.value.status_code == 409

    def test_free_seats_pass(self) -> None:
        ensure_seats_available(['A1'], {'A2'})
