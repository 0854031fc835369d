"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.seat_inventory.app.command import (
    cancel_reservation_use_case,
    find_and_hold_seats_use_case,
    reserve_seats_use_case,
)
from src.service.seat_inventory.app.query import (
    get_reservation_use_case,
    get_venue_availability_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    find_and_hold_seats_use_case,
    reserve_seats_use_case,
    cancel_reservation_use_case,
    get_reservation_use_case,
    get_venue_availability_use_case,
]
