"""
In-Memory Id Generator

Random ids drawn from `secrets`, deduplicated against the set of ids currently
in use. Retired ids go back into the pool.
"""

import secrets
import string
import threading
from typing import Set

from src.platform.exception.exceptions import DomainError, InvariantViolationError
from src.platform.logging.loguru_io import Logger
from src.service.seat_inventory.app.interface.i_id_generator import IIdGenerator


MAX_HOLD_ID = 2**31 - 1
RESERVATION_CODE_ALPHABET = string.ascii_uppercase + string.digits
# Give up instead of spinning forever once the code space is nearly exhausted
MAX_DRAW_ATTEMPTS = 10_000


class InMemoryIdGenerator(IIdGenerator):
    def __init__(self, *, code_length: int = 6) -> None:
        if code_length <= 0:
            raise DomainError('code_length must be > 0')
        self._code_length = code_length
        self._hold_ids_in_use: Set[int] = set()
        self._codes_in_use: Set[str] = set()
        self._lock = threading.Lock()
        self._closed = False
        self.hold_ids_issued = 0
        self.reservation_codes_issued = 0

    @property
    def code_length(self) -> int:
        return self._code_length

    @property
    def num_hold_ids_in_use(self) -> int:
        with self._lock:
            return len(self._hold_ids_in_use)

    @property
    def num_codes_in_use(self) -> int:
        with self._lock:
            return len(self._codes_in_use)

    def new_hold_id(self) -> int:
        with self._lock:
            self._ensure_open()
            for _ in range(MAX_DRAW_ATTEMPTS):
                hold_id = secrets.randbelow(MAX_HOLD_ID) + 1
                if hold_id not in self._hold_ids_in_use:
                    self._hold_ids_in_use.add(hold_id)
                    self.hold_ids_issued += 1
                    return hold_id
        raise InvariantViolationError('Unable to draw an unused hold id')

    def new_reservation_code(self) -> str:
        with self._lock:
            self._ensure_open()
            for _ in range(MAX_DRAW_ATTEMPTS):
                code = ''.join(
                    secrets.choice(RESERVATION_CODE_ALPHABET) for _ in range(self._code_length)
                )
                if code not in self._codes_in_use:
                    self._codes_in_use.add(code)
                    self.reservation_codes_issued += 1
                    return code
        raise InvariantViolationError('Unable to draw an unused reservation code')

    def retire_hold_id(self, hold_id: int) -> bool:
        with self._lock:
            if hold_id not in self._hold_ids_in_use:
                return False
            self._hold_ids_in_use.discard(hold_id)
            return True

    def retire_reservation_code(self, code: str) -> bool:
        with self._lock:
            if code not in self._codes_in_use:
                return False
            self._codes_in_use.discard(code)
            return True

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            hold_ids, codes = len(self._hold_ids_in_use), len(self._codes_in_use)
            self._hold_ids_in_use.clear()
            self._codes_in_use.clear()
        Logger.base.info(
            f'🔒 [ID_GENERATOR] closed: issued {self.hold_ids_issued} hold ids '
            f'and {self.reservation_codes_issued} codes, '
            f'{hold_ids} ids / {codes} codes still in use'
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise InvariantViolationError('Id generator is closed')
