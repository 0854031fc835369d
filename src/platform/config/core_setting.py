from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Seat Hold Engine'
    VERSION: str = '0.1.0'
    DEBUG: bool = False

    # Log file sink (stdout is always on)
    LOG_TO_FILE: bool = False

    # Venue layout
    VENUE_NUM_ROWS: int = 10
    VENUE_SEATS_PER_ROW: int = 20

    # Seat picking strategy used by the venue
    SEAT_PICKER: Literal['best_available', 'row_major'] = 'best_available'

    # Holds
    SEAT_HOLD_TTL_SECONDS: float = 120.0
    SWEEP_INTERVAL_SECONDS: float = 1.0

    # Reservation codes
    RESERVATION_CODE_LENGTH: int = 6

    @field_validator('VENUE_NUM_ROWS', 'VENUE_SEATS_PER_ROW', 'RESERVATION_CODE_LENGTH')
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError('must be > 0')
        return v

    @field_validator('SEAT_HOLD_TTL_SECONDS')
    @classmethod
    def ttl_not_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError('must be >= 0')
        return v

    @field_validator('SWEEP_INTERVAL_SECONDS')
    @classmethod
    def interval_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError('must be > 0')
        return v


settings = Settings()  # type: ignore
