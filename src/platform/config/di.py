"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from datetime import timedelta

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.service.seat_inventory.app.ticket_service import TicketService
from src.service.seat_inventory.domain.aggregate.venue_aggregate import Venue
from src.service.seat_inventory.domain.seat_picker import build_seat_picker
from src.service.seat_inventory.driven_adapter.id_generator.in_memory_id_generator import (
    InMemoryIdGenerator,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Ids and reservation codes (stateful, closed on shutdown)
    id_generator = providers.Singleton(
        InMemoryIdGenerator,
        code_length=config_service.provided.RESERVATION_CODE_LENGTH,
    )

    # Seat picking strategy, chosen once per venue
    seat_picker = providers.Singleton(
        build_seat_picker,
        name=config_service.provided.SEAT_PICKER,
    )

    # The one venue this process serves
    venue = providers.Singleton(
        Venue,
        num_rows=config_service.provided.VENUE_NUM_ROWS,
        seats_per_row=config_service.provided.VENUE_SEATS_PER_ROW,
        seat_picker=seat_picker,
        id_generator=id_generator,
    )

    # Hold table + background sweep (started by main.py lifespan)
    ticket_service = providers.Singleton(
        TicketService,
        venue=venue,
        seat_hold_ttl=providers.Factory(
            timedelta, seconds=config_service.provided.SEAT_HOLD_TTL_SECONDS
        ),
        sweep_interval=providers.Factory(
            timedelta, seconds=config_service.provided.SWEEP_INTERVAL_SECONDS
        ),
    )


container = Container()


def cleanup() -> None:
    container.reset_singletons()
