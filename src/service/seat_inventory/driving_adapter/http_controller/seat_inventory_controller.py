from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.seat_inventory.app.command.find_and_hold_seats_use_case import (
    FindAndHoldSeatsUseCase,
)
from src.service.seat_inventory.app.command.reserve_seats_use_case import ReserveSeatsUseCase
from src.service.seat_inventory.app.query.get_reservation_use_case import GetReservationUseCase
from src.service.seat_inventory.app.query.get_venue_availability_use_case import (
    GetVenueAvailabilityUseCase,
)
from src.service.seat_inventory.driving_adapter.http_controller.schema.reservation_schema import (
    CancelReservationResponse,
    ReservationCreateRequest,
    ReservationCreateResponse,
    ReservationResponse,
    VenueAvailabilityResponse,
)
from src.service.seat_inventory.driving_adapter.http_controller.schema.seat_hold_schema import (
    SeatHoldCreateRequest,
    SeatHoldResponse,
    SeatResponse,
)


# Plain `def` endpoints: the engine blocks on threading locks, FastAPI runs these in its threadpool
venue_router = APIRouter()
seat_hold_router = APIRouter()
reservation_router = APIRouter()


@venue_router.get('/availability')
def get_venue_availability(
    use_case: GetVenueAvailabilityUseCase = Depends(GetVenueAvailabilityUseCase.depends),
) -> VenueAvailabilityResponse:
    availability = use_case.execute()
    return VenueAvailabilityResponse(
        num_rows=availability.num_rows,
        seats_per_row=availability.seats_per_row,
        total_num_seats=availability.total_num_seats,
        num_seats_available=availability.num_seats_available,
        num_seats_held=availability.num_seats_held,
        num_seats_reserved=availability.num_seats_reserved,
        num_active_holds=availability.num_active_holds,
        num_reservations=availability.num_reservations,
    )


@seat_hold_router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
def create_seat_hold(
    request: SeatHoldCreateRequest,
    use_case: FindAndHoldSeatsUseCase = Depends(FindAndHoldSeatsUseCase.depends),
) -> SeatHoldResponse:
    seat_hold = use_case.execute(num_seats=request.num_seats, customer_email=request.customer_email)
    return SeatHoldResponse.from_seat_hold(seat_hold)


@seat_hold_router.post('/{seat_hold_id}/reservation', status_code=status.HTTP_201_CREATED)
@Logger.io
def reserve_seat_hold(
    seat_hold_id: int,
    request: ReservationCreateRequest,
    use_case: ReserveSeatsUseCase = Depends(ReserveSeatsUseCase.depends),
) -> ReservationCreateResponse:
    reservation_code = use_case.execute(
        seat_hold_id=seat_hold_id, customer_email=request.customer_email
    )
    return ReservationCreateResponse(reservation_code=reservation_code, seat_hold_id=seat_hold_id)


@reservation_router.get('/{reservation_code}')
def get_reservation(
    reservation_code: str,
    use_case: GetReservationUseCase = Depends(GetReservationUseCase.depends),
) -> ReservationResponse:
    seats = use_case.execute(reservation_code=reservation_code)
    return ReservationResponse(
        reservation_code=reservation_code,
        seats=[SeatResponse.from_seat(seat) for seat in seats],
    )


@reservation_router.delete('/{reservation_code}')
@Logger.io
def cancel_reservation(
    reservation_code: str,
    use_case: CancelReservationUseCase = Depends(CancelReservationUseCase.depends),
) -> CancelReservationResponse:
    seats = use_case.execute(reservation_code=reservation_code)
    return CancelReservationResponse(
        reservation_code=reservation_code, released_seats=[seat.id for seat in seats]
    )
