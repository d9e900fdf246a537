from fastapi.testclient import TestClient
import pytest

from cinema_booking.platform.constant.route_constant import (
    SHOWTIME_LIST_BY_MOVIE,
    SHOWTIME_SEATS,
)

from fixture_constants import MOVIE_ID, SHOWTIME_HALL_A, SHOWTIME_HALL_B, SHOWTIME_OTHER_MOVIE


UNKNOWN_MOVIE_ID = 404


@pytest.mark.integration
class TestListShowtimesByMovie:
    def test_showtimes_are_ordered_by_start_time(self, client: TestClient, seed_showtimes):
        response = client.get(SHOWTIME_LIST_BY_MOVIE.format(movie_id=MOVIE_ID))

        assert response.status_code == 200
        showtimes = response.json()
        # Hall B screens at 14:00, Hall A at 18:30; movie 8 is excluded
        assert [s['id'] for s in showtimes] == [SHOWTIME_HALL_B, SHOWTIME_HALL_A]
        assert showtimes[0]['hall_name'] == 'Hall B'
        assert showtimes[0]['price'] == 450

    def test_unknown_movie_has_no_showtimes(self, client: TestClient, seed_showtimes):
        response = client.get(SHOWTIME_LIST_BY_MOVIE.format(movie_id=UNKNOWN_MOVIE_ID))

        assert response.status_code == 200
        assert response.json() == []


@pytest.mark.integration
class TestSeatAvailability:
    def test_fresh_showtime_has_every_seat_available(self, client: TestClient, seed_showtimes):
        response = client.get(SHOWTIME_SEATS.format(showtime_id=SHOWTIME_HALL_A))

        assert response.status_code == 200
        body = response.json()
        assert body['hall_id'] == 'A'
        assert body['layout']['rows'] == ['A', 'B', 'C', 'D', 'E', 'F']
        assert body['layout']['seats_per_row'] == 10
        assert len(body['layout']['seat_ids']) == 60
        assert body['layout']['seat_ids'][:3] == ['A1', 'A2', 'A3']
        assert body['booked_seats'] == []
        assert len(body['available_seats']) == 60

    def test_hall_b_layout(self, client: TestClient, seed_showtimes):
        body = client.get(SHOWTIME_SEATS.format(showtime_id=SHOWTIME_HALL_B)).json()

        assert len(body['layout']['seat_ids']) == 96
        assert body['layout']['seat_ids'][-1] == 'H12'

    def test_reserved_seats_are_booked_only_for_their_showtime(
        self, client: TestClient, seed_showtimes, reserve
    ):
        # Given: C7 and A1 are held for the Hall A showtime
        reserve(['C7', 'A1'])

        # When
        hall_a = client.get(SHOWTIME_SEATS.format(showtime_id=SHOWTIME_HALL_A)).json()
        other = client.get(SHOWTIME_SEATS.format(showtime_id=SHOWTIME_OTHER_MOVIE)).json()

        # Then: Listed in seat-map order and partitioned with the available seats
        assert hall_a['booked_seats'] == ['A1', 'C7']
        assert 'A1' not in hall_a['available_seats']
        assert len(hall_a['available_seats']) == 58
        assert other['booked_seats'] == []

    def test_unknown_showtime(self, client: TestClient, seed_showtimes):
        response = client.get(SHOWTIME_SEATS.format(showtime_id=999))

        assert response.status_code == 404
        assert response.json()['detail'] == 'Showtime not found'
