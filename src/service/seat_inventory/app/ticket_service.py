"""
Ticket Service

Front door for one venue: validates customer input, keeps the table of live
holds and runs the background sweep that gives expired holds' seats back.

[Locking]
The venue lock and the table lock are never held at the same time. A hold is
created under the venue lock and then registered under the table lock; a hold
leaves the table under the table lock (reserve claim or sweep) and only then is
the venue touched. Whoever pops the id from the table owns the hold, so a
reserve racing the sweep resolves to exactly one winner.
"""

from collections import OrderedDict
from datetime import timedelta
import threading
from types import TracebackType
from typing import List, Optional, Self

from src.platform.exception.exceptions import (
    InvariantViolationError,
    NotFoundError,
    SeatHoldExpiredError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.scheduler.periodic_task import PeriodicTask
from src.service.seat_inventory.domain.aggregate.venue_aggregate import Venue
from src.service.seat_inventory.domain.entity.seat import Seat
from src.service.seat_inventory.domain.entity.seat_hold import SeatHold
from src.service.seat_inventory.domain.validators import (
    DurationValidators,
    EmailValidators,
    NumericValidators,
)


SWEEPER_THREAD_NAME = 'seat-hold-sweeper'


class TicketService:
    def __init__(self, venue: Venue, *, seat_hold_ttl: timedelta, sweep_interval: timedelta) -> None:
        DurationValidators.validate_non_negative(seat_hold_ttl, 'seat_hold_ttl')
        DurationValidators.validate_positive(sweep_interval, 'sweep_interval')

        self.venue = venue
        self.seat_hold_ttl = seat_hold_ttl
        self.sweep_interval = sweep_interval

        # Insertion order == creation order; deadlines are non-decreasing along
        # it unless two registrations interleaved, see _needs_full_scan
        self._holds: 'OrderedDict[int, SeatHold]' = OrderedDict()
        self._table_lock = threading.Lock()
        self._latest_deadline = float('-inf')
        self._needs_full_scan = False

        self._sweeper = PeriodicTask(
            name=SWEEPER_THREAD_NAME,
            interval_seconds=sweep_interval.total_seconds(),
            task=self.expire_seat_holds,
        )

    # -------------------------------------------------------------- lifecycle

    @property
    def running(self) -> bool:
        return self._sweeper.running

    def start(self) -> None:
        self._sweeper.start()

    def shutdown(self, timeout: Optional[float] = None) -> None:
        self._sweeper.stop(timeout)

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.shutdown()

    # ---------------------------------------------------------------- queries

    def num_seats_available(self) -> int:
        return self.venue.available_num_seats

    def num_seats_held(self) -> int:
        """Seats across the holds currently tracked by this service."""
        with self._table_lock:
            return sum(seat_hold.num_seats_held for seat_hold in self._holds.values())

    def num_active_holds(self) -> int:
        with self._table_lock:
            return len(self._holds)

    def get_reservation(self, reservation_code: str) -> List[Seat]:
        return self.venue.get_reservation(reservation_code)

    # --------------------------------------------------------------- commands

    @Logger.io
    def find_and_hold_seats(self, num_seats: int, customer_email: str) -> SeatHold:
        NumericValidators.validate_positive(num_seats, 'num_seats')
        EmailValidators.validate_email(customer_email)

        seat_hold = self.venue.hold_seats(num_seats, self.seat_hold_ttl, customer_email=customer_email)
        with self._table_lock:
            collision = seat_hold.id in self._holds
            if not collision:
                self._register(seat_hold)

        if collision:
            Logger.base.critical(f'💥 [HOLD] hold id {seat_hold.id} issued twice')
            raise InvariantViolationError(f'SeatHold ID [{seat_hold.id}] issued twice')
        return seat_hold

    @Logger.io
    def reserve_seats(self, seat_hold_id: int, customer_email: str) -> str:
        NumericValidators.validate_positive(seat_hold_id, 'seat_hold_id')
        EmailValidators.validate_email(customer_email)

        with self._table_lock:
            seat_hold = self._holds.get(seat_hold_id)
            if seat_hold is None or seat_hold.customer_email != customer_email:
                raise NotFoundError(f'SeatHold ID [{seat_hold_id}] not found')
            del self._holds[seat_hold_id]

        if seat_hold.expired():
            self.venue.remove_hold(seat_hold)
            raise SeatHoldExpiredError(f'SeatHold ID [{seat_hold_id}] has expired')

        try:
            return self.venue.reserve(seat_hold)
        except Exception:
            # The hold already left the table, nobody else will release it
            self.venue.remove_hold(seat_hold)
            raise

    @Logger.io
    def cancel_reservation(self, reservation_code: str) -> List[Seat]:
        return self.venue.cancel_reservation(reservation_code)

    # ------------------------------------------------------------------ sweep

    def expire_seat_holds(self) -> int:
        """
        One sweep pass. Expired holds leave the table under the table lock,
        then their seats are released without it.

        Returns:
            Number of holds reclaimed
        """
        with self._table_lock:
            expired = self._pop_expired()

        reclaimed = 0
        for seat_hold in expired:
            try:
                self.venue.remove_hold(seat_hold)
                reclaimed += 1
            except Exception as e:
                # The hold already left the table, its seats stay held until an operator steps in
                seat_ids = [seat.id for seat in seat_hold.seats]
                Logger.base.opt(exception=e).critical(
                    f'💥 [SWEEP] seat leak: hold {seat_hold.id} could not be released, seats {seat_ids} stay held: {e}'
                )

        if reclaimed:
            Logger.base.info(
                f'🧹 [SWEEP] reclaimed {reclaimed} expired holds, '
                f'{self.venue.available_num_seats} seats available'
            )
        return reclaimed

    # ---------------------------------------------------------------- helpers

    def _register(self, seat_hold: SeatHold) -> None:
        """Caller holds the table lock."""
        if seat_hold.expiration_time < self._latest_deadline:
            self._needs_full_scan = True
        else:
            self._latest_deadline = seat_hold.expiration_time
        self._holds[seat_hold.id] = seat_hold

    def _pop_expired(self) -> List[SeatHold]:
        """Caller holds the table lock."""
        full_scan = self._needs_full_scan
        expired_ids: List[int] = []
        still_out_of_order = False
        previous_deadline = float('-inf')

        for seat_hold_id, seat_hold in self._holds.items():
            if seat_hold.expired():
                expired_ids.append(seat_hold_id)
                continue
            if not full_scan:
                break
            if seat_hold.expiration_time < previous_deadline:
                still_out_of_order = True
            previous_deadline = seat_hold.expiration_time

        self._needs_full_scan = full_scan and still_out_of_order
        return [self._holds.pop(seat_hold_id) for seat_hold_id in expired_ids]
