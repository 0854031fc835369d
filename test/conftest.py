"""
Test Configuration and Fixtures

- Environment setup that must happen before any application import
- A controllable monotonic clock for hold expiry
- Venue / TicketService builders with small layouts

Architecture:
- Unit tests (test/**/unit/): in-process objects, fake clock, no threads unless the test is about threads
- Integration tests (test/**/integration/): the FastAPI app through TestClient
"""

# =============================================================================
# Environment setup MUST happen before importing src: settings and the loguru
# sinks are built at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('VENUE_NUM_ROWS', '3')
    os.environ.setdefault('VENUE_SEATS_PER_ROW', '3')
    os.environ.setdefault('SEAT_HOLD_TTL_SECONDS', '60')
    os.environ.setdefault('SWEEP_INTERVAL_SECONDS', '0.05')


_early_setup_test_environment()

from collections.abc import Callable, Generator  # noqa: E402
from datetime import timedelta  # noqa: E402
import threading  # noqa: E402

import pytest  # noqa: E402

from src.service.seat_inventory.app.ticket_service import TicketService  # noqa: E402
from src.service.seat_inventory.domain.aggregate.venue_aggregate import Venue  # noqa: E402
from src.service.seat_inventory.domain.seat_picker import (  # noqa: E402
    BestAvailableSeatPicker,
    SeatPicker,
)
from src.service.seat_inventory.driven_adapter.id_generator.in_memory_id_generator import (  # noqa: E402
    InMemoryIdGenerator,
)


class FakeClock:
    """Monotonic clock stand-in; time only moves when a test says so."""

    def __init__(self, start: float = 1_000.0) -> None:
        self._now = start
        self._lock = threading.Lock()

    def __call__(self) -> float:
        with self._lock:
            return self._now

    def advance(self, seconds: float) -> None:
        with self._lock:
            self._now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def id_generator() -> Generator[InMemoryIdGenerator, None, None]:
    generator = InMemoryIdGenerator(code_length=6)
    yield generator
    generator.close()


@pytest.fixture
def make_venue(
    id_generator: InMemoryIdGenerator, clock: FakeClock
) -> Callable[..., Venue]:
    def _make_venue(
        num_rows: int = 3, seats_per_row: int = 3, seat_picker: SeatPicker | None = None
    ) -> Venue:
        return Venue(
            num_rows,
            seats_per_row,
            seat_picker=seat_picker or BestAvailableSeatPicker(),
            id_generator=id_generator,
            clock=clock,
        )

    return _make_venue


@pytest.fixture
def venue(make_venue: Callable[..., Venue]) -> Venue:
    """3 rows x 3 seats, best-available picking"""
    return make_venue()


@pytest.fixture
def make_ticket_service(
    venue: Venue,
) -> Generator[Callable[..., TicketService], None, None]:
    created: list[TicketService] = []

    def _make_ticket_service(
        seat_hold_ttl: timedelta = timedelta(seconds=60),
        sweep_interval: timedelta = timedelta(seconds=60),
        target_venue: Venue | None = None,
    ) -> TicketService:
        service = TicketService(
            target_venue or venue, seat_hold_ttl=seat_hold_ttl, sweep_interval=sweep_interval
        )
        created.append(service)
        return service

    yield _make_ticket_service

    for service in created:
        service.shutdown(timeout=5)


@pytest.fixture
def ticket_service(make_ticket_service: Callable[..., TicketService]) -> TicketService:
    """Sweep thread not started; tests call expire_seat_holds() directly"""
    return make_ticket_service()
