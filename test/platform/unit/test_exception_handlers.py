"""
Unit tests for the FastAPI exception handlers

Test Focus:
1. CustomBaseError subclasses map to their status codes
2. Unexpected exceptions become a generic 500
"""

from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.exception.exceptions import (
    DomainError,
    InvalidSeatTransitionError,
    InvariantViolationError,
    NotFoundError,
    SeatHoldExpiredError,
)


def _app_raising(error: Exception) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get('/boom')
    def boom() -> None:
        raise error

    return app


@pytest.mark.unit
class TestExceptionHandlers:
    @pytest.mark.parametrize(
        'error, status_code',
        [
            (DomainError('bad input'), 400),
            (NotFoundError('missing'), 404),
            (SeatHoldExpiredError('too late'), 410),
            (InvalidSeatTransitionError(seat_id='Row 1 Seat 1', from_state='held', to_state='held'), 500),
            (InvariantViolationError('drift'), 500),
        ],
    )
    def test_custom_errors(self, error, status_code):
        client = TestClient(_app_raising(error))

        response = client.get('/boom')

        assert response.status_code == status_code
        assert response.json() == {'detail': error.message}

    def test_unexpected_error(self):
        client = TestClient(_app_raising(RuntimeError('secret detail')), raise_server_exceptions=False)

        response = client.get('/boom')

        assert response.status_code == 500
        assert response.json() == {'detail': 'Internal server error'}
