"""
Seat Hold Engine FastAPI Application

Serves one venue; the seat hold sweep runs on its own thread for the lifetime
of the app.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Seat Hold Engine] Starting up...')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Seat Hold Engine] Dependency injection wired')

    ticket_service = container.ticket_service()
    ticket_service.start()
    Logger.base.info(
        f'✅ [Seat Hold Engine] Ready: {ticket_service.num_seats_available()} seats, '
        f'hold ttl={ticket_service.seat_hold_ttl}'
    )

    try:
        yield
    finally:
        Logger.base.info('🛑 [Seat Hold Engine] Shutting down...')
        ticket_service.shutdown()
        container.id_generator().close()
        container.unwire()
        Logger.base.info('👋 [Seat Hold Engine] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
