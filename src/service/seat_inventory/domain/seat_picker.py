"""
Seat Picker

Strategies for choosing which available seats a new hold gets. A venue is
given one picker at construction; pickers keep no state of their own.
"""

from abc import ABC, abstractmethod
import heapq
from typing import List

from src.platform.exception.exceptions import DomainError
from src.service.seat_inventory.domain.entity.seat import Seat
from src.service.seat_inventory.domain.entity.seat_grid import IndexEntry, SeatGrid


class SeatPicker(ABC):
    @abstractmethod
    def pick(self, seats: SeatGrid, num_seats: int) -> List[Seat]:
        """
        Return up to `num_seats` available seats, best first.

        Returns every available seat when fewer than `num_seats` are left and
        never pads the result. Seats are not marked held here.
        """
        pass

    @staticmethod
    def _validate(num_seats: int) -> None:
        if num_seats < 0:
            raise DomainError('Number of seats to pick must be >= 0')


class BestAvailableSeatPicker(SeatPicker):
    """
    Lowest goodness first, ties broken by row then column.

    Reads the grid's heap index instead of scanning the grid, so repeated small
    picks against a large venue stay O(k log n). Entries of seats that are no
    longer available are dropped from the index as they surface; picked entries
    are pushed back so a pick that is not followed by a hold leaves the index
    complete.
    """

    def pick(self, seats: SeatGrid, num_seats: int) -> List[Seat]:
        self._validate(num_seats)
        index = seats.available_index
        picked: List[Seat] = []
        picked_entries: List[IndexEntry] = []

        while index and len(picked) < num_seats:
            entry = heapq.heappop(index)
            seat = seats.seat_at(entry[1], entry[2])
            if not seat.is_available:
                seats.drop_from_index(entry)
                continue
            picked.append(seat)
            picked_entries.append(entry)

        for entry in picked_entries:
            heapq.heappush(index, entry)
        return picked


class RowMajorSeatPicker(SeatPicker):
    """First available seats scanning front row to back, left to right."""

    def pick(self, seats: SeatGrid, num_seats: int) -> List[Seat]:
        self._validate(num_seats)
        picked: List[Seat] = []
        if num_seats == 0:
            return picked
        for seat in seats:
            if seat.is_available:
                picked.append(seat)
                if len(picked) == num_seats:
                    break
        return picked


SEAT_PICKERS: dict[str, type[SeatPicker]] = {
    'best_available': BestAvailableSeatPicker,
    'row_major': RowMajorSeatPicker,
}


def build_seat_picker(name: str) -> SeatPicker:
    try:
        return SEAT_PICKERS[name]()
    except KeyError:
        raise DomainError(f'Unknown seat picker: {name}. Expected one of {sorted(SEAT_PICKERS)}')
