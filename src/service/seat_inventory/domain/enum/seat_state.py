from enum import StrEnum


class SeatState(StrEnum):
    AVAILABLE = 'available'
    HELD = 'held'
    RESERVED = 'reserved'
