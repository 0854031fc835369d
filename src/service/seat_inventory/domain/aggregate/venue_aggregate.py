"""
Venue Aggregate - Aggregate Root for one venue's seat inventory

[DDD Design Principles]
- Venue is the Aggregate Root; Seat and the reservation table live inside it
- SeatHold references seats but every seat state change goes through the Venue

[Business Invariants]
- available_num_seats equals the number of seats in the available state
- available + held + reserved == total_num_seats
- A seat belongs to at most one live hold or reservation

[Concurrency]
One lock per venue. Selection and marking happen in the same critical section,
so two callers can never be handed the same seat.
"""

from datetime import timedelta
import threading
import time
from typing import Callable, Dict, List, Optional

from src.platform.exception.exceptions import (
    DomainError,
    InvariantViolationError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.interface.i_id_generator import IIdGenerator
from src.service.seat_inventory.domain.entity.seat import Seat
from src.service.seat_inventory.domain.entity.seat_grid import SeatGrid
from src.service.seat_inventory.domain.entity.seat_hold import SeatHold
from src.service.seat_inventory.domain.enum.seat_state import SeatState
from src.service.seat_inventory.domain.seat_picker import SeatPicker
from src.service.seat_inventory.domain.validators import DurationValidators, NumericValidators


class Venue:
    def __init__(
        self,
        num_rows: int,
        seats_per_row: int,
        *,
        seat_picker: SeatPicker,
        id_generator: IIdGenerator,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._grid = SeatGrid(num_rows=num_rows, seats_per_row=seats_per_row)
        self._seat_picker = seat_picker
        self._id_generator = id_generator
        self._clock = clock
        self._lock = threading.Lock()

        self._available_num_seats = self._grid.total_num_seats
        self._held_num_seats = 0
        self._reserved_num_seats = 0
        self._reservations: Dict[str, List[Seat]] = {}

        Logger.base.info(
            f'🏟️ [VENUE] {num_rows} rows x {seats_per_row} seats, '
            f'picker={type(seat_picker).__name__}'
        )

    @property
    def num_rows(self) -> int:
        return self._grid.num_rows

    @property
    def seats_per_row(self) -> int:
        return self._grid.seats_per_row

    @property
    def total_num_seats(self) -> int:
        return self._grid.total_num_seats

    @property
    def available_num_seats(self) -> int:
        with self._lock:
            return self._available_num_seats

    @property
    def num_seats_held(self) -> int:
        with self._lock:
            return self._held_num_seats

    @property
    def num_seats_reserved(self) -> int:
        with self._lock:
            return self._reserved_num_seats

    @property
    def num_reservations(self) -> int:
        with self._lock:
            return len(self._reservations)

    @property
    def seats(self) -> List[Seat]:
        """Row-major snapshot of the seat objects."""
        with self._lock:
            return list(self._grid)

    def seat_at(self, row: int, column: int) -> Seat:
        return self._grid.seat_at(row, column)

    # ------------------------------------------------------------------ holds

    @Logger.io
    def hold_seats(
        self, num_seats: int, ttl: timedelta, customer_email: Optional[str] = None
    ) -> SeatHold:
        """
        Hold up to `num_seats` of the best available seats for `ttl`.

        Returns a hold with fewer seats (possibly none) when the venue cannot
        satisfy the request; running out of seats is not an error.
        """
        NumericValidators.validate_non_negative(num_seats, 'num_seats')
        DurationValidators.validate_non_negative(ttl, 'ttl')

        with self._lock:
            seats = self._seat_picker.pick(self._grid, num_seats)
            for seat in seats:
                seat.hold()
            try:
                seat_hold = SeatHold.create(
                    id_generator=self._id_generator,
                    seats=seats,
                    num_seats_requested=num_seats,
                    ttl=ttl,
                    customer_email=customer_email,
                    clock=self._clock,
                )
            except Exception:
                self._release(seats, expected=SeatState.HELD, cancel=Seat.cancel_hold)
                raise
            self._available_num_seats -= len(seats)
            self._held_num_seats += len(seats)
            available = self._available_num_seats

        Logger.base.info(
            f'🎫 [HOLD] hold {seat_hold.id}: {len(seats)}/{num_seats} seats, {available} left'
        )
        return seat_hold

    def remove_hold(self, seat_hold: SeatHold) -> int:
        """
        Put the hold's seats back into the pool and retire the hold.

        Returns the number of seats released; 0 if the hold was already removed.
        """
        with self._lock:
            if seat_hold.removed:
                return 0
            seats = seat_hold.seats
            self._release(seats, expected=SeatState.HELD, cancel=Seat.cancel_hold)
            self._available_num_seats += len(seats)
            self._held_num_seats -= len(seats)
            seat_hold.remove()
        return len(seats)

    # ----------------------------------------------------------- reservations

    @Logger.io
    def reserve(self, seat_hold: SeatHold) -> str:
        """Turn every seat of the hold into a reservation and consume the hold."""
        with self._lock:
            if seat_hold.removed:
                raise DomainError(f'SeatHold {seat_hold.id} has already been released')
            seats = seat_hold.seats
            if not seats:
                raise DomainError(f'SeatHold {seat_hold.id} holds no seats')

            self._ensure_all(seats, expected=SeatState.HELD, target=SeatState.RESERVED)
            # Draw the code before any seat changes so a generator failure leaves the seats held
            code = self._id_generator.new_reservation_code()
            if code in self._reservations:
                self._id_generator.retire_reservation_code(code)
                raise InvariantViolationError(f'Reservation code {code} issued twice')
            for seat in seats:
                seat.reserve()
            self._reservations[code] = seats
            self._held_num_seats -= len(seats)
            self._reserved_num_seats += len(seats)
            seat_hold.remove()

        Logger.base.info(f'✅ [RESERVE] hold {seat_hold.id} -> reservation {code}, {len(seats)} seats')
        return code

    @Logger.io
    def cancel_reservation(self, reservation_code: str) -> List[Seat]:
        """Release a reservation's seats. Returns the seats that were released."""
        self._validate_reservation_code(reservation_code)
        with self._lock:
            seats = self._reservations.get(reservation_code)
            if seats is None:
                raise NotFoundError(f'Reservation {reservation_code} not found')
            self._release(seats, expected=SeatState.RESERVED, cancel=Seat.cancel_reservation)
            del self._reservations[reservation_code]
            self._available_num_seats += len(seats)
            self._reserved_num_seats -= len(seats)
        self._id_generator.retire_reservation_code(reservation_code)

        Logger.base.info(f'🔓 [CANCEL] reservation {reservation_code}: {len(seats)} seats released')
        return seats

    def get_reservation(self, reservation_code: str) -> List[Seat]:
        self._validate_reservation_code(reservation_code)
        with self._lock:
            seats = self._reservations.get(reservation_code)
            if seats is None:
                raise NotFoundError(f'Reservation {reservation_code} not found')
            return list(seats)

    # ------------------------------------------------------------- accounting

    def verify_accounting(self) -> None:
        """Recount every seat and compare against the cached counters."""
        with self._lock:
            available = held = reserved = 0
            for seat in self._grid:
                if seat.is_available:
                    available += 1
                elif seat.is_held:
                    held += 1
                else:
                    reserved += 1
            in_reservations = sum(len(seats) for seats in self._reservations.values())
            cached = (self._available_num_seats, self._held_num_seats, self._reserved_num_seats)

        problems = []
        if available != cached[0]:
            problems.append(f'available count {cached[0]} != {available} available seats')
        if held != cached[1]:
            problems.append(f'held count {cached[1]} != {held} held seats')
        if reserved != cached[2] or reserved != in_reservations:
            problems.append(
                f'reserved count {cached[2]} / {in_reservations} in reservations != {reserved} reserved seats'
            )
        if available + held + reserved != self.total_num_seats:
            problems.append(f'{available} + {held} + {reserved} != {self.total_num_seats} total')
        if problems:
            message = 'Venue accounting drift: ' + '; '.join(problems)
            Logger.base.critical(f'💥 [VENUE] {message}')
            raise InvariantViolationError(message)

    # ---------------------------------------------------------------- helpers

    @staticmethod
    def _ensure_all(seats: List[Seat], *, expected: SeatState, target: SeatState) -> None:
        for seat in seats:
            seat.ensure_transition(expected=expected, target=target)

    def _release(
        self, seats: List[Seat], *, expected: SeatState, cancel: Callable[[Seat], None]
    ) -> None:
        """All or nothing: every seat is checked before the first one changes."""
        self._ensure_all(seats, expected=expected, target=SeatState.AVAILABLE)
        for seat in seats:
            cancel(seat)
            self._grid.reindex(seat)

    def _validate_reservation_code(self, reservation_code: str) -> None:
        code_length = self._id_generator.code_length
        if not isinstance(reservation_code, str) or len(reservation_code) != code_length:
            raise DomainError(f'Reservation code must be {code_length} characters')
