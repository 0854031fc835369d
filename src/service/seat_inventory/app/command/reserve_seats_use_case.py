from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.ticket_service import TicketService


class ReserveSeatsUseCase:
    def __init__(self, ticket_service: TicketService) -> None:
        self.ticket_service = ticket_service

    @classmethod
    @inject
    def depends(
        cls, ticket_service: TicketService = Depends(Provide[Container.ticket_service])
    ) -> Self:
        return cls(ticket_service=ticket_service)

    @Logger.io
    def execute(self, *, seat_hold_id: int, customer_email: str) -> str:
        """Commit a live hold. Returns the reservation code."""
        return self.ticket_service.reserve_seats(seat_hold_id, customer_email=customer_email)
