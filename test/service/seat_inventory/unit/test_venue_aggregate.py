"""
Unit tests for Venue

Test Focus:
1. Construction validation and initial counts
2. hold_seats: best seats, short supply, sold out, 1_000_000 on 9 seats
3. remove_hold: seats back in the pool and pickable again, idempotent
4. reserve / cancel_reservation / get_reservation
5. verify_accounting detects counter drift
6. A release or reserve that hits a bad seat changes nothing
7. The seat index stays bounded under churn
"""

from datetime import timedelta

import pytest

from src.platform.exception.exceptions import (
    DomainError,
    InvalidSeatTransitionError,
    InvariantViolationError,
    NotFoundError,
)
from src.service.seat_inventory.domain.seat_picker import RowMajorSeatPicker


TTL = timedelta(seconds=60)


def _ids(seats):
    return [seat.id for seat in seats]


def _assert_accounting(venue):
    venue.verify_accounting()
    assert (
        venue.available_num_seats + venue.num_seats_held + venue.num_seats_reserved
        == venue.total_num_seats
    )


@pytest.mark.unit
class TestVenueConstruction:
    @pytest.mark.parametrize(
        'num_rows, seats_per_row, message',
        [
            (0, 3, 'Number of rows must be > 0'),
            (-1, 3, 'Number of rows must be > 0'),
            (3, 0, 'Number of seats per row must be > 0'),
        ],
    )
    def test_rejects_empty_layout(self, make_venue, num_rows, seats_per_row, message):
        with pytest.raises(DomainError, match=message):
            make_venue(num_rows, seats_per_row)

    def test_initial_counts(self, make_venue):
        venue = make_venue(4, 5)

        assert venue.total_num_seats == 20
        assert venue.available_num_seats == 20
        assert venue.num_seats_held == 0
        assert venue.num_reservations == 0
        assert len(venue.seats) == 20
        assert venue.seat_at(3, 4).id == 'Row 4 Seat 5'


@pytest.mark.unit
class TestHoldSeats:
    def test_best_seats_then_the_rest(self, venue):
        first = venue.hold_seats(2, TTL)

        assert _ids(first.seats) == ['Row 1 Seat 2', 'Row 1 Seat 1']
        assert venue.available_num_seats == 7

        rest = venue.hold_seats(9, TTL)

        assert rest.num_seats_held == 7
        assert rest.num_seats_requested == 9
        assert 'Row 1 Seat 2' not in _ids(rest.seats)
        assert venue.available_num_seats == 0
        _assert_accounting(venue)

    def test_huge_request_takes_everything(self, venue):
        seat_hold = venue.hold_seats(1_000_000, TTL)

        assert seat_hold.num_seats_held == 9
        assert venue.available_num_seats == 0
        assert all(seat.is_held for seat in venue.seats)

    def test_sold_out_returns_empty_hold(self, venue):
        venue.hold_seats(9, TTL)

        seat_hold = venue.hold_seats(1, TTL)

        assert seat_hold.seats == []
        assert seat_hold.id > 0
        assert venue.available_num_seats == 0

    def test_zero_seats(self, venue):
        seat_hold = venue.hold_seats(0, TTL)

        assert seat_hold.num_seats_held == 0
        assert venue.available_num_seats == 9

    @pytest.mark.parametrize('num_seats, ttl', [(-1, TTL), (1, timedelta(seconds=-1))])
    def test_invalid_arguments(self, venue, num_seats, ttl):
        with pytest.raises(DomainError):
            venue.hold_seats(num_seats, ttl)
        assert venue.available_num_seats == 9

    def test_customer_email_kept_on_hold(self, venue):
        seat_hold = venue.hold_seats(1, TTL, 'buyer@example.com')

        assert seat_hold.customer_email == 'buyer@example.com'

    def test_generator_failure_rolls_back_seats(self, venue, id_generator):
        id_generator.close()

        with pytest.raises(InvariantViolationError):
            venue.hold_seats(3, TTL)

        assert venue.available_num_seats == 9
        assert all(seat.is_available for seat in venue.seats)
        _assert_accounting(venue)

    def test_row_major_picker(self, make_venue):
        venue = make_venue(seat_picker=RowMajorSeatPicker())

        seat_hold = venue.hold_seats(4, TTL)

        assert _ids(seat_hold.seats) == [
            'Row 1 Seat 1',
            'Row 1 Seat 2',
            'Row 1 Seat 3',
            'Row 2 Seat 1',
        ]


@pytest.mark.unit
class TestRemoveHold:
    def test_seats_return_to_pool(self, venue, id_generator):
        seat_hold = venue.hold_seats(2, TTL)
        seats = seat_hold.seats

        released = venue.remove_hold(seat_hold)

        assert released == 2
        assert venue.available_num_seats == 9
        assert all(seat.is_available for seat in seats)
        assert seat_hold.removed and seat_hold.seats == []
        assert id_generator.num_hold_ids_in_use == 0
        _assert_accounting(venue)

    def test_released_seats_are_picked_again(self, venue):
        seat_hold = venue.hold_seats(2, TTL)
        venue.remove_hold(seat_hold)

        again = venue.hold_seats(2, TTL)

        assert _ids(again.seats) == ['Row 1 Seat 2', 'Row 1 Seat 1']

    def test_second_remove_is_noop(self, venue):
        seat_hold = venue.hold_seats(2, TTL)
        venue.remove_hold(seat_hold)
        other = venue.hold_seats(2, TTL)

        assert venue.remove_hold(seat_hold) == 0
        assert venue.available_num_seats == 7
        assert all(seat.is_held for seat in other.seats)


@pytest.mark.unit
class TestReservation:
    def test_reserve_consumes_hold(self, venue, id_generator):
        seat_hold = venue.hold_seats(2, TTL)
        seats = seat_hold.seats

        code = venue.reserve(seat_hold)

        assert len(code) == 6
        assert code.isalnum() and code.upper() == code
        assert all(seat.is_reserved for seat in seats)
        assert seat_hold.removed and seat_hold.seats == []
        assert venue.num_seats_held == 0
        assert venue.num_seats_reserved == 2
        assert venue.num_reservations == 1
        assert id_generator.num_hold_ids_in_use == 0
        assert _ids(venue.get_reservation(code)) == _ids(seats)
        _assert_accounting(venue)

    def test_reserve_removed_hold_rejected(self, venue):
        seat_hold = venue.hold_seats(2, TTL)
        venue.remove_hold(seat_hold)

        with pytest.raises(DomainError, match='already been released'):
            venue.reserve(seat_hold)
        assert venue.num_reservations == 0

    def test_reserve_twice_rejected(self, venue):
        seat_hold = venue.hold_seats(1, TTL)
        venue.reserve(seat_hold)

        with pytest.raises(DomainError):
            venue.reserve(seat_hold)
        assert venue.num_reservations == 1

    def test_reserve_empty_hold_rejected(self, venue):
        venue.hold_seats(9, TTL)
        empty = venue.hold_seats(1, TTL)

        with pytest.raises(DomainError, match='holds no seats'):
            venue.reserve(empty)

    def test_cancel_restores_seats(self, venue, id_generator):
        seat_hold = venue.hold_seats(3, TTL)
        code = venue.reserve(seat_hold)

        released = venue.cancel_reservation(code)

        assert len(released) == 3
        assert all(seat.is_available for seat in released)
        assert venue.available_num_seats == 9
        assert venue.num_reservations == 0
        assert id_generator.num_codes_in_use == 0
        _assert_accounting(venue)

    def test_double_cancel_not_found(self, venue):
        code = venue.reserve(venue.hold_seats(3, TTL))
        venue.cancel_reservation(code)

        with pytest.raises(NotFoundError):
            venue.cancel_reservation(code)
        assert venue.available_num_seats == 9

    def test_cancelled_seats_are_picked_again(self, venue):
        code = venue.reserve(venue.hold_seats(1, TTL))
        venue.cancel_reservation(code)

        assert _ids(venue.hold_seats(1, TTL).seats) == ['Row 1 Seat 2']

    @pytest.mark.parametrize('code', ['', 'ABC', 'ABCDEFG'])
    def test_wrong_code_length(self, venue, code):
        with pytest.raises(DomainError, match='must be 6 characters'):
            venue.cancel_reservation(code)
        with pytest.raises(DomainError):
            venue.get_reservation(code)

    def test_unknown_code(self, venue):
        with pytest.raises(NotFoundError):
            venue.get_reservation('ZZZZZZ')


@pytest.mark.unit
class TestVerifyAccounting:
    def test_clean_venue_passes(self, venue):
        venue.hold_seats(2, TTL)
        venue.reserve(venue.hold_seats(3, TTL))

        venue.verify_accounting()

    def test_state_changed_behind_venue_detected(self, venue):
        venue.seat_at(2, 2).hold()

        with pytest.raises(InvariantViolationError, match='accounting drift'):
            venue.verify_accounting()

    def test_double_release_surfaces(self, venue):
        seat_hold = venue.hold_seats(1, TTL)
        seat = seat_hold.seats[0]
        seat.cancel_hold()

        with pytest.raises(InvalidSeatTransitionError):
            venue.remove_hold(seat_hold)

    def test_partial_release_leaves_hold_and_counters(self, venue):
        # Given: one seat of a 2-seat hold was released behind the venue's back
        seat_hold = venue.hold_seats(2, TTL)
        good, bad = seat_hold.seats
        bad.cancel_hold()

        # When
        with pytest.raises(InvalidSeatTransitionError):
            venue.remove_hold(seat_hold)

        # Then: nothing moved
        assert good.is_held
        assert venue.available_num_seats == 7
        assert venue.num_seats_held == 2
        assert not seat_hold.removed
        assert seat_hold.num_seats_held == 2

    def test_reserve_with_bad_seat_changes_nothing(self, venue, id_generator):
        seat_hold = venue.hold_seats(2, TTL)
        good, bad = seat_hold.seats
        bad.cancel_hold()

        with pytest.raises(InvalidSeatTransitionError):
            venue.reserve(seat_hold)

        assert good.is_held
        assert venue.num_seats_held == 2
        assert venue.num_seats_reserved == 0
        assert venue.num_reservations == 0
        assert id_generator.num_codes_in_use == 0
        assert not seat_hold.removed

    def test_cancel_with_bad_seat_keeps_reservation(self, venue, id_generator):
        code = venue.reserve(venue.hold_seats(2, TTL))
        good, bad = venue.get_reservation(code)
        bad.cancel_reservation()

        with pytest.raises(InvalidSeatTransitionError):
            venue.cancel_reservation(code)

        assert good.is_reserved
        assert venue.num_seats_reserved == 2
        assert venue.available_num_seats == 7
        assert _ids(venue.get_reservation(code)) == _ids([good, bad])
        assert id_generator.num_codes_in_use == 1


@pytest.mark.unit
class TestSeatIndexChurn:
    def test_hold_release_cycles_keep_index_bounded(self, venue):
        for _ in range(2_000):
            venue.remove_hold(venue.hold_seats(1, TTL))

        assert len(venue._grid.available_index) <= venue.total_num_seats
        _assert_accounting(venue)

    def test_mixed_churn_keeps_index_bounded(self, venue):
        # Given: a long-lived hold the picker keeps walking past
        pinned = venue.hold_seats(2, TTL)

        for _ in range(1_000):
            first = venue.hold_seats(1, TTL)
            second = venue.hold_seats(2, TTL)
            venue.remove_hold(first)
            venue.cancel_reservation(venue.reserve(second))

        assert len(venue._grid.available_index) <= venue.total_num_seats
        assert _ids(venue.hold_seats(7, TTL).seats) == [
            'Row 1 Seat 3',
            'Row 2 Seat 2',
            'Row 2 Seat 1',
            'Row 2 Seat 3',
            'Row 3 Seat 2',
            'Row 3 Seat 1',
            'Row 3 Seat 3',
        ]
        assert all(seat.is_held for seat in pinned.seats)
        _assert_accounting(venue)
