"""Seat inventory argument validation."""

from datetime import timedelta
from typing import Optional

from src.platform.exception.exceptions import DomainError


class NumericValidators:
    """Common numeric validation functions."""

    @staticmethod
    def validate_positive(value: int, field_name: str) -> None:
        if value <= 0:
            raise DomainError(f'{field_name} must be > 0')

    @staticmethod
    def validate_non_negative(value: int, field_name: str) -> None:
        if value < 0:
            raise DomainError(f'{field_name} must be >= 0')


class DurationValidators:
    @staticmethod
    def validate_non_negative(value: timedelta, field_name: str) -> None:
        if value < timedelta(0):
            raise DomainError(f'{field_name} must be >= 0')

    @staticmethod
    def validate_positive(value: timedelta, field_name: str) -> None:
        if value <= timedelta(0):
            raise DomainError(f'{field_name} must be > 0')


class EmailValidators:
    @staticmethod
    def is_valid_email(value: Optional[str]) -> bool:
        """
        Minimal shape check: at least 3 characters and exactly one '@' with text
        on both sides. Deliverability is not our concern.
        """
        if not value or len(value) < 3:
            return False
        local, sep, domain = value.partition('@')
        return bool(sep) and bool(local) and bool(domain) and '@' not in domain

    @staticmethod
    def validate_email(value: Optional[str]) -> None:
        if not EmailValidators.is_valid_email(value):
            raise DomainError(f'{value!r} is not a valid email address')
