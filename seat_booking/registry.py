from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional


class RegistryError(Exception):
    pass


class Category(str, Enum):
    gold = "gold"
    silver = "silver"


@dataclass
class Seat:
    seat_number: int
    occupant: Optional[str] = None
    category: Optional[Category] = None

    @property
    def is_free(self) -> bool:
        return self.occupant is None

    @property
    def status(self) -> str:
        # "available" or the category value; used by the seat map.
        return "available" if self.category is None else self.category.value

    def to_dict(self) -> dict:
        return {
            "seat_number": self.seat_number,
            "occupant": self.occupant,
            "category": self.category.value if self.category else None,
            "status": self.status,
        }


class SeatRegistry:
    """
    Fixed-size, ordered collection of seats numbered 1..capacity.

    The registry is created with every seat free and is never resized. Only the
    booking and cancellation workflows call `occupy`/`release`; everything else
    reads.
    """

    def __init__(self, capacity: int, seats_per_row: int = 10):
        if capacity <= 0 or seats_per_row <= 0:
            raise RegistryError("capacity and seats_per_row must be positive integers")
        self.capacity = capacity
        self.seats_per_row = seats_per_row
        self.seats: list[Seat] = [Seat(seat_number=n) for n in range(1, capacity + 1)]

    def __len__(self) -> int:
        return len(self.seats)

    def __iter__(self) -> Iterator[Seat]:
        return iter(self.seats)

    def _validate_seat(self, seat_number: int) -> None:
        if not (1 <= seat_number <= self.capacity):
            raise RegistryError(f"seat out of range: {seat_number}")

    def get(self, seat_number: int) -> Seat:
        self._validate_seat(seat_number)
        return self.seats[seat_number - 1]

    def free_seats(self) -> list[Seat]:
        return [s for s in self.seats if s.is_free]

    def free_count(self) -> int:
        return sum(1 for s in self.seats if s.is_free)

    def seats_held_by(self, attendee_name: str) -> list[Seat]:
        return [s for s in self.seats if s.occupant is not None and s.occupant == attendee_name]

    def occupy(self, seat_number: int, attendee_name: str, category: Category) -> Seat:
        seat = self.get(seat_number)
        if not seat.is_free:
            raise RegistryError(f"seat {seat_number} is already occupied")
        seat.occupant = attendee_name
        seat.category = Category(category)
        return seat

    def release(self, seat_number: int) -> Seat:
        seat = self.get(seat_number)
        seat.occupant = None
        seat.category = None
        return seat

    def rows(self) -> list[list[Seat]]:
        n = self.seats_per_row
        return [self.seats[i : i + n] for i in range(0, len(self.seats), n)]

    def summary(self) -> dict:
        booked = [s for s in self.seats if not s.is_free]
        return {
            "seats_total": self.capacity,
            "seats_available": self.capacity - len(booked),
            "seats_booked": len(booked),
            "by_category": {c.value: sum(1 for s in booked if s.category == c) for c in Category},
        }
