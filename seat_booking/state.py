from __future__ import annotations

import random
import threading
from datetime import datetime
from typing import Callable, Optional, Union

from .booking import book, utc_now
from .cancellation import CancellationFlow, CancelledSeat, confirm, lookup
from .ledger import Reservation, ReservationLedger
from .registry import Category, SeatRegistry


class EventState:
    """
    One event's registry and ledger, owned by whoever created it.

    All access goes through a single lock so the workflows stay safe when the
    HTTP layer calls them from several worker threads.
    """

    def __init__(
        self,
        capacity: int = 10,
        seats_per_row: int = 10,
        *,
        rng: Optional[random.Random] = None,
        now: Callable[[], datetime] = utc_now,
    ):
        self.registry = SeatRegistry(capacity, seats_per_row)
        self.ledger = ReservationLedger()
        self.rng = rng or random.Random()
        self.now = now
        self.lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings) -> "EventState":
        rng = random.Random(settings.random_seed) if settings.random_seed is not None else None
        return cls(settings.max_seats, settings.seats_per_row, rng=rng)

    def book(self, full_name: Optional[str], phone_number: Optional[str], category: Union[str, Category, None]) -> Reservation:
        with self.lock:
            return book(
                self.registry,
                self.ledger,
                full_name,
                phone_number,
                category,
                rng=self.rng,
                now=self.now,
            )

    def lookup(self, reservation_id: Optional[str], phone_number: Optional[str]) -> Reservation:
        with self.lock:
            return lookup(self.ledger, reservation_id, phone_number)

    def cancel(self, reservation_id: Optional[str], phone_number: Optional[str]) -> CancelledSeat:
        # Re-looks up under the same lock so a concurrent cancel cannot free the seat twice.
        with self.lock:
            found = lookup(self.ledger, reservation_id, phone_number)
            return confirm(self.registry, self.ledger, found)

    def cancellation_flow(self) -> CancellationFlow:
        return CancellationFlow(self.registry, self.ledger)

    def summary(self) -> dict:
        with self.lock:
            return self.registry.summary()

    def seats(self) -> list[dict]:
        with self.lock:
            return [s.to_dict() for s in self.registry]

    def seat_map(self) -> dict:
        with self.lock:
            return {
                "seats_per_row": self.registry.seats_per_row,
                "rows": [[s.to_dict() for s in row] for row in self.registry.rows()],
            }

    def reservations(self) -> list[Reservation]:
        with self.lock:
            return list(self.ledger)
