from typing import Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.service.seat_inventory.app.ticket_service import TicketService


@attrs.define(frozen=True)
class VenueAvailability:
    num_rows: int
    seats_per_row: int
    total_num_seats: int
    num_seats_available: int
    num_seats_held: int
    num_seats_reserved: int
    num_active_holds: int
    num_reservations: int


class GetVenueAvailabilityUseCase:
    def __init__(self, ticket_service: TicketService) -> None:
        self.ticket_service = ticket_service

    @classmethod
    @inject
    def depends(
        cls, ticket_service: TicketService = Depends(Provide[Container.ticket_service])
    ) -> Self:
        return cls(ticket_service=ticket_service)

    def execute(self) -> VenueAvailability:
        """Counters are read one by one, so under load they are not one snapshot."""
        venue = self.ticket_service.venue
        return VenueAvailability(
            num_rows=venue.num_rows,
            seats_per_row=venue.seats_per_row,
            total_num_seats=venue.total_num_seats,
            num_seats_available=self.ticket_service.num_seats_available(),
            num_seats_held=self.ticket_service.num_seats_held(),
            num_seats_reserved=venue.num_seats_reserved,
            num_active_holds=self.ticket_service.num_active_holds(),
            num_reservations=venue.num_reservations,
        )
