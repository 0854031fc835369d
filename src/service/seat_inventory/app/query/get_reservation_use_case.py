from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.service.seat_inventory.app.ticket_service import TicketService
from src.service.seat_inventory.domain.entity.seat import Seat


class GetReservationUseCase:
    def __init__(self, ticket_service: TicketService) -> None:
        self.ticket_service = ticket_service

    @classmethod
    @inject
    def depends(
        cls, ticket_service: TicketService = Depends(Provide[Container.ticket_service])
    ) -> Self:
        return cls(ticket_service=ticket_service)

    def execute(self, *, reservation_code: str) -> List[Seat]:
        return self.ticket_service.get_reservation(reservation_code)
