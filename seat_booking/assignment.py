from __future__ import annotations

import random
from typing import Optional

from .registry import Seat, SeatRegistry


def assign_seat(registry: SeatRegistry, attendee_name: str, rng: random.Random) -> Optional[Seat]:
    """
    Pick a free seat for `attendee_name`, or None when nothing is free.

    If the attendee already holds seats in this registry, a free seat at most
    one number away from any of them is preferred. Without such a seat the
    choice is uniform over every free seat. Does not mutate the registry.
    """
    free = registry.free_seats()
    if not free:
        return None

    prior = [s.seat_number for s in registry.seats_held_by(attendee_name)]
    if prior:
        nearby = [s for s in free if any(abs(s.seat_number - p) <= 1 for p in prior)]
        if nearby:
            return rng.choice(nearby)

    return rng.choice(free)
