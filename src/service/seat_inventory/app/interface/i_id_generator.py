"""
Id Generator Interface

Issues hold ids and reservation codes that are unique among the ones
currently in use, and takes them back when a hold or reservation ends.
"""

from abc import ABC, abstractmethod


class IIdGenerator(ABC):
    @property
    @abstractmethod
    def code_length(self) -> int:
        """Fixed length of every reservation code this generator issues."""
        pass

    @abstractmethod
    def new_hold_id(self) -> int:
        """Return a positive hold id not currently in use."""
        pass

    @abstractmethod
    def new_reservation_code(self) -> str:
        """Return a reservation code of `code_length` characters not currently in use."""
        pass

    @abstractmethod
    def retire_hold_id(self, hold_id: int) -> bool:
        """
        Make `hold_id` available again.

        Returns:
            False if the id was not in use
        """
        pass

    @abstractmethod
    def retire_reservation_code(self, code: str) -> bool:
        pass

    @abstractmethod
    def close(self) -> None:
        """Release generator state; later calls to `new_*` raise."""
        pass
