from datetime import datetime, timedelta, timezone
import threading
import time
from typing import TYPE_CHECKING, Callable, List, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.seat_inventory.domain.entity.seat import Seat
from src.service.seat_inventory.domain.validators import DurationValidators, NumericValidators


if TYPE_CHECKING:
    from src.service.seat_inventory.app.interface.i_id_generator import IIdGenerator


@attrs.define(eq=False)
class SeatHold:
    """
    A time-boxed claim on a list of seats.

    The hold only references seats, the Venue owns them and performs every
    state change. The deadline is taken from a monotonic clock so holds created
    later never expire earlier under the same TTL.
    """

    id: int
    num_seats_requested: int
    customer_email: Optional[str] = attrs.field(repr=False)
    created_at: datetime
    expires_at: datetime
    _seats: List[Seat] = attrs.field(alias='seats')
    _expiration_time: float = attrs.field(alias='expiration_time')
    _id_generator: 'IIdGenerator' = attrs.field(alias='id_generator', repr=False)
    _clock: Callable[[], float] = attrs.field(alias='clock', default=time.monotonic, repr=False)
    _removed: bool = attrs.field(default=False, init=False)
    _lock: threading.Lock = attrs.field(factory=threading.Lock, init=False, repr=False)

    @classmethod
    def create(
        cls,
        *,
        id_generator: 'IIdGenerator',
        seats: List[Seat],
        num_seats_requested: int,
        ttl: timedelta,
        customer_email: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> 'SeatHold':
        NumericValidators.validate_non_negative(num_seats_requested, 'num_seats_requested')
        if len(seats) > num_seats_requested:
            raise DomainError(
                f'Cannot hold {len(seats)} seats when only {num_seats_requested} were requested'
            )
        DurationValidators.validate_non_negative(ttl, 'ttl')

        created_at = datetime.now(timezone.utc)
        return cls(
            id=id_generator.new_hold_id(),
            num_seats_requested=num_seats_requested,
            customer_email=customer_email,
            created_at=created_at,
            expires_at=created_at + ttl,
            seats=list(seats),
            expiration_time=clock() + ttl.total_seconds(),
            id_generator=id_generator,
            clock=clock,
        )

    @property
    def seats(self) -> List[Seat]:
        return list(self._seats)

    @property
    def num_seats_held(self) -> int:
        return len(self._seats)

    @property
    def expiration_time(self) -> float:
        return self._expiration_time

    @property
    def removed(self) -> bool:
        return self._removed

    def expired(self) -> bool:
        return self._removed or self._clock() >= self._expiration_time

    def remove(self) -> None:
        """
        Expire the hold now, retire its id and drop its seat references.

        Calling it again is a no-op. Seat states are left untouched; releasing
        or reserving the seats is the Venue's job.
        """
        with self._lock:
            if self._removed:
                return
            self._removed = True
            now = self._clock()
            if self._expiration_time > now:
                self._expiration_time = now
                self.expires_at = datetime.now(timezone.utc)
            self._seats.clear()
            self._id_generator.retire_hold_id(self.id)
