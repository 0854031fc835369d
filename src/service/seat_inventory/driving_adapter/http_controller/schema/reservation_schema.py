from typing import List

from pydantic import BaseModel

from src.service.seat_inventory.driving_adapter.http_controller.schema.seat_hold_schema import (
    SeatResponse,
)


class ReservationCreateRequest(BaseModel):
    model_config = {'json_schema_extra': {'example': {'customer_email': 'buyer@example.com'}}}

    customer_email: str


class ReservationCreateResponse(BaseModel):
    model_config = {
        'json_schema_extra': {'example': {'reservation_code': 'K7Q2ZD', 'seat_hold_id': 184467}}
    }

    reservation_code: str
    seat_hold_id: int


class ReservationResponse(BaseModel):
    reservation_code: str
    seats: List[SeatResponse]


class CancelReservationResponse(BaseModel):
    reservation_code: str
    released_seats: List[str]


class VenueAvailabilityResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'num_rows': 10,
                'seats_per_row': 20,
                'total_num_seats': 200,
                'num_seats_available': 194,
                'num_seats_held': 4,
                'num_seats_reserved': 2,
                'num_active_holds': 2,
                'num_reservations': 1,
            }
        },
    }

    num_rows: int
    seats_per_row: int
    total_num_seats: int
    num_seats_available: int
    num_seats_held: int
    num_seats_reserved: int
    num_active_holds: int
    num_reservations: int
