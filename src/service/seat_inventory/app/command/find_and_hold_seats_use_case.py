from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.ticket_service import TicketService
from src.service.seat_inventory.domain.entity.seat_hold import SeatHold


class FindAndHoldSeatsUseCase:
    def __init__(self, ticket_service: TicketService) -> None:
        self.ticket_service = ticket_service

    @classmethod
    @inject
    def depends(
        cls, ticket_service: TicketService = Depends(Provide[Container.ticket_service])
    ) -> Self:
        return cls(ticket_service=ticket_service)

    @Logger.io
    def execute(self, *, num_seats: int, customer_email: str) -> SeatHold:
        """
        Hold the best available seats for the customer.

        The hold may carry fewer seats than requested, or none when the venue
        is sold out; callers decide what to tell the customer.
        """
        seat_hold = self.ticket_service.find_and_hold_seats(num_seats, customer_email=customer_email)
        if seat_hold.num_seats_held < num_seats:
            Logger.base.warning(
                f'⚠️ [HOLD] hold {seat_hold.id} got {seat_hold.num_seats_held}/{num_seats} seats'
            )
        return seat_hold
