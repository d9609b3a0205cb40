from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_MAX_SEATS = 10
DEFAULT_SEATS_PER_ROW = 10


def _positive_int_or(value: Any, default: int) -> int:
    try:
        n = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SEAT_BOOKING_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    max_seats: int = DEFAULT_MAX_SEATS
    seats_per_row: int = DEFAULT_SEATS_PER_ROW
    random_seed: Optional[int] = None

    static_dir: Optional[Path] = None
    # comma-separated
    cors_origins: str = "*"
    log_level: str = "INFO"

    host: str = "127.0.0.1"
    port: int = 3000

    @field_validator("max_seats", mode="before")
    @classmethod
    def _max_seats(cls, v: Any) -> int:
        return _positive_int_or(v, DEFAULT_MAX_SEATS)

    @field_validator("seats_per_row", mode="before")
    @classmethod
    def _seats_per_row(cls, v: Any) -> int:
        return _positive_int_or(v, DEFAULT_SEATS_PER_ROW)

    @property
    def cors_origin_list(self) -> List[str]:
        return [i.strip() for i in self.cors_origins.split(",") if i.strip()]


def get_settings(**overrides: Any) -> Settings:
    return Settings(**overrides)
