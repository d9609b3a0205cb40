from __future__ import annotations

import random
import string
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Optional

from .registry import Category


RESERVATION_ID_PREFIX = "RES-"
RESERVATION_ID_ALPHABET = string.ascii_uppercase + string.digits
RESERVATION_ID_LENGTH = 6


def generate_reservation_id(rng: random.Random) -> str:
    suffix = "".join(rng.choice(RESERVATION_ID_ALPHABET) for _ in range(RESERVATION_ID_LENGTH))
    return f"{RESERVATION_ID_PREFIX}{suffix}"


@dataclass(frozen=True)
class Reservation:
    reservation_id: str
    attendee_name: str
    phone_number: str
    seat_number: int
    category: Category
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "reservation_id": self.reservation_id,
            "attendee_name": self.attendee_name,
            "seat_number": self.seat_number,
            "category": self.category.value,
            "created_at": self.created_at.isoformat(),
        }


class ReservationLedger:
    """Active reservations, keyed by id, in booking order."""

    def __init__(self) -> None:
        self._by_id: dict[str, Reservation] = {}

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[Reservation]:
        return iter(list(self._by_id.values()))

    def __contains__(self, reservation_id: object) -> bool:
        return isinstance(reservation_id, str) and self.get(reservation_id) is not None

    def get(self, reservation_id: str) -> Optional[Reservation]:
        key = reservation_id.strip().upper()
        for r in self._by_id.values():
            if r.reservation_id.upper() == key:
                return r
        return None

    def add(self, reservation: Reservation) -> None:
        if reservation.reservation_id in self:
            raise ValueError(f"duplicate reservation id: {reservation.reservation_id}")
        self._by_id[reservation.reservation_id] = reservation

    def remove(self, reservation_id: str) -> Optional[Reservation]:
        return self._by_id.pop(reservation_id, None)

    def find(self, reservation_id: str, phone_number: str) -> Optional[Reservation]:
        """Case-insensitive on the id, exact on the phone number (both trimmed)."""
        rid = reservation_id.strip().lower()
        phone = phone_number.strip()
        for r in self._by_id.values():
            if r.reservation_id.lower() == rid and r.phone_number.strip() == phone:
                return r
        return None
