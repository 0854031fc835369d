import math

import attrs

from src.platform.exception.exceptions import InvalidSeatTransitionError
from src.service.seat_inventory.domain.enum.seat_state import SeatState


def calculate_goodness(*, row: int, column: int, seats_per_row: int) -> float:
    """
    Distance from the front-center of the venue, lower is better.

    Row 0 is the front row; the horizontal center sits between the middle two
    seats when a row has an even number of seats.
    """
    x_pos = column - (seats_per_row - 1) / 2
    y_pos = row
    return math.hypot(x_pos, y_pos)


def seat_label(*, row: int, column: int) -> str:
    return f'Row {row + 1} Seat {column + 1}'


_frozen = attrs.setters.frozen


@attrs.define(eq=False)
class Seat:
    """
    A single bookable seat.

    available -> held -> reserved, with a way back to available from held
    (hold cancelled or expired) and from reserved (reservation cancelled).
    Any other transition raises InvalidSeatTransitionError so double booking
    and double release surface where they happen.

    Not thread-safe on its own; the owning Venue serializes all transitions.
    """

    id: str = attrs.field(on_setattr=_frozen)
    row: int = attrs.field(on_setattr=_frozen)
    column: int = attrs.field(on_setattr=_frozen)
    goodness: float = attrs.field(on_setattr=_frozen)
    _state: SeatState = attrs.field(default=SeatState.AVAILABLE, alias='state')

    @classmethod
    def create(cls, *, row: int, column: int, seats_per_row: int) -> 'Seat':
        return cls(
            id=seat_label(row=row, column=column),
            row=row,
            column=column,
            goodness=calculate_goodness(row=row, column=column, seats_per_row=seats_per_row),
        )

    @property
    def state(self) -> SeatState:
        return self._state

    @property
    def is_available(self) -> bool:
        return self._state is SeatState.AVAILABLE

    @property
    def is_held(self) -> bool:
        return self._state is SeatState.HELD

    @property
    def is_reserved(self) -> bool:
        return self._state is SeatState.RESERVED

    def hold(self) -> None:
        self._transition(expected=SeatState.AVAILABLE, target=SeatState.HELD)

    def cancel_hold(self) -> None:
        self._transition(expected=SeatState.HELD, target=SeatState.AVAILABLE)

    def reserve(self) -> None:
        self._transition(expected=SeatState.HELD, target=SeatState.RESERVED)

    def cancel_reservation(self) -> None:
        self._transition(expected=SeatState.RESERVED, target=SeatState.AVAILABLE)

    def ensure_transition(self, *, expected: SeatState, target: SeatState) -> None:
        """Raise if the seat is not in `expected`; changes nothing."""
        if self._state is not expected:
            raise InvalidSeatTransitionError(
                seat_id=self.id, from_state=self._state.value, to_state=target.value
            )

    def _transition(self, *, expected: SeatState, target: SeatState) -> None:
        self.ensure_transition(expected=expected, target=target)
        self._state = target

    def __repr__(self) -> str:
        return f'Seat({self.id!r}, {self._state.value})'
