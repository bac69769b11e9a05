"""
Unit tests for map_row_seats_for_availability.
"""

import pytest

from seating_rules.services.seat_rules import map_row_seats_for_availability
from seating_rules.utils.exceptions import SeatInventoryConsistencyError

from conftest import make_seat, make_seats


@pytest.mark.unit
class TestMapRowSeatsForAvailability:

    def test_fully_requested_row_is_all_unavailable(self):
        available = make_seats(range(1, 7))

        row = map_row_seats_for_availability(available, available)

        assert [seat.availability_indicator for seat in row] == [0] * 6
        assert all(seat.requested_now for seat in row)

    def test_missing_seat_numbers_become_gaps(self):
        available = make_seats([3, 4, 6, 7])

        row = map_row_seats_for_availability(available, [])

        assert row.first_seat_num == 3
        assert [seat.availability_indicator for seat in row] == [1, 1, 0, 1, 1]
        assert row[2].seat is None
        assert not row[2].requested_now

    def test_requested_seats_are_flagged(self):
        available = make_seats(range(1, 6))

        row = map_row_seats_for_availability(available, [make_seat(2), make_seat(3)])

        assert [seat.availability_indicator for seat in row] == [1, 0, 0, 1, 1]
        assert [seat.requested_now for seat in row] == [False, True, True, False, False]

    def test_index_maps_back_to_seat_number(self):
        available = make_seats([10, 11, 13, 15])

        row = map_row_seats_for_availability(available, [make_seat(13)])

        for index, mapped_seat in enumerate(row):
            if mapped_seat.seat is not None:
                assert row.seat_num_at(index) == mapped_seat.seat.num
                assert row.index_of(mapped_seat.seat.num) == index

    def test_unsorted_available_seats(self):
        available = make_seats([5, 2, 4, 3])

        row = map_row_seats_for_availability(available, [])

        assert row.first_seat_num == 2
        assert [mapped.seat.num for mapped in row] == [2, 3, 4, 5]

    def test_requested_seat_not_available_raises(self):
        available = make_seats([1, 2, 4])

        with pytest.raises(SeatInventoryConsistencyError) as exc_info:
            map_row_seats_for_availability(available, [make_seat(3)])

        assert exc_info.value.seat_num == 3
        assert "requested seat num 3 is unavailable" in str(exc_info.value)

    def test_requested_seat_outside_row_raises(self):
        with pytest.raises(SeatInventoryConsistencyError):
            map_row_seats_for_availability(make_seats([1, 2]), [make_seat(9)])

    def test_empty_row_without_request(self):
        row = map_row_seats_for_availability([], [])

        assert len(row) == 0

    def test_empty_row_with_request_raises(self):
        with pytest.raises(SeatInventoryConsistencyError) as exc_info:
            map_row_seats_for_availability([], [make_seat(1)])

        assert exc_info.value.seat_num == 1
