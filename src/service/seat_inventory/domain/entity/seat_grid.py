import heapq
from typing import Iterator, List, Set, Tuple

from src.platform.exception.exceptions import DomainError
from src.service.seat_inventory.domain.entity.seat import Seat


IndexEntry = Tuple[float, int, int]  # (goodness, row, column)


class SeatGrid:
    """
    Rectangular seat collection, row-major, plus a goodness-ordered index.

    The index is a min-heap of (goodness, row, column) entries holding at most
    one entry per seat, so it never outgrows the grid. Entries for seats that
    stopped being available are discarded lazily by readers through
    `drop_from_index`. Every available seat has an entry as long as the owner
    calls `reindex` whenever a seat goes back to available.
    """

    def __init__(self, *, num_rows: int, seats_per_row: int) -> None:
        if num_rows <= 0:
            raise DomainError('Number of rows must be > 0')
        if seats_per_row <= 0:
            raise DomainError('Number of seats per row must be > 0')

        self.num_rows = num_rows
        self.seats_per_row = seats_per_row
        self._rows: List[List[Seat]] = [
            [Seat.create(row=row, column=column, seats_per_row=seats_per_row) for column in range(seats_per_row)]
            for row in range(num_rows)
        ]
        self.available_index: List[IndexEntry] = [self.index_entry(seat) for seat in self]
        heapq.heapify(self.available_index)
        # Positions that currently have an entry in available_index
        self._indexed: Set[Tuple[int, int]] = {(seat.row, seat.column) for seat in self}

    @property
    def total_num_seats(self) -> int:
        return self.num_rows * self.seats_per_row

    def __iter__(self) -> Iterator[Seat]:
        for row in self._rows:
            yield from row

    def __len__(self) -> int:
        return self.total_num_seats

    def seat_at(self, row: int, column: int) -> Seat:
        if not (0 <= row < self.num_rows and 0 <= column < self.seats_per_row):
            raise DomainError(f'No seat at row={row}, column={column}')
        return self._rows[row][column]

    @staticmethod
    def index_entry(seat: Seat) -> IndexEntry:
        return (seat.goodness, seat.row, seat.column)

    def reindex(self, seat: Seat) -> None:
        """Make sure the seat has an entry; a seat that still has one is left alone."""
        position = (seat.row, seat.column)
        if position in self._indexed:
            return
        heapq.heappush(self.available_index, self.index_entry(seat))
        self._indexed.add(position)

    def drop_from_index(self, entry: IndexEntry) -> None:
        """Forget an entry the caller already popped off the heap."""
        self._indexed.discard((entry[1], entry[2]))
