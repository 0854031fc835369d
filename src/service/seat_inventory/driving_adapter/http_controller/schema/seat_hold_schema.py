from datetime import datetime
from typing import List

from pydantic import BaseModel

from src.service.seat_inventory.domain.entity.seat import Seat
from src.service.seat_inventory.domain.entity.seat_hold import SeatHold


class SeatResponse(BaseModel):
    id: str
    row: int
    column: int
    state: str

    @classmethod
    def from_seat(cls, seat: Seat) -> 'SeatResponse':
        return cls(id=seat.id, row=seat.row, column=seat.column, state=seat.state.value)


class SeatHoldCreateRequest(BaseModel):
    model_config = {
        'json_schema_extra': {'example': {'num_seats': 2, 'customer_email': 'buyer@example.com'}}
    }

    num_seats: int
    customer_email: str


class SeatHoldResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': 184467,
                'customer_email': 'buyer@example.com',
                'num_seats_requested': 2,
                'num_seats_held': 2,
                'seats': [
                    {'id': 'Row 1 Seat 10', 'row': 0, 'column': 9, 'state': 'held'},
                    {'id': 'Row 1 Seat 11', 'row': 0, 'column': 10, 'state': 'held'},
                ],
                'created_at': '2025-01-10T10:30:00Z',
                'expires_at': '2025-01-10T10:32:00Z',
            }
        },
    }

    id: int
    customer_email: str
    num_seats_requested: int
    num_seats_held: int
    seats: List[SeatResponse]
    created_at: datetime
    expires_at: datetime

    @classmethod
    def from_seat_hold(cls, seat_hold: SeatHold) -> 'SeatHoldResponse':
        seats = seat_hold.seats
        return cls(
            id=seat_hold.id,
            customer_email=seat_hold.customer_email or '',
            num_seats_requested=seat_hold.num_seats_requested,
            num_seats_held=len(seats),
            seats=[SeatResponse.from_seat(seat) for seat in seats],
            created_at=seat_hold.created_at,
            expires_at=seat_hold.expires_at,
        )
