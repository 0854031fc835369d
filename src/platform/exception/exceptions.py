class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    """Invalid argument from the caller: bad counts, malformed ids or codes."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class SeatHoldExpiredError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 410)


class InvalidSeatTransitionError(CustomBaseError):
    """A seat state machine violation. Always a bug in the caller, never user input."""

    def __init__(self, *, seat_id: str, from_state: str, to_state: str) -> None:
        self.seat_id = seat_id
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f'Illegal seat state transition for [{seat_id}]: {from_state} -> {to_state}', 500
        )


class InvariantViolationError(CustomBaseError):
    """Inventory accounting is corrupted (id collision, count drift). Not recoverable."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 500)
