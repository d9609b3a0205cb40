from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Callable, Optional, Union

from loguru import logger

from .assignment import assign_seat
from .errors import MissingCategory, MissingName, MissingPhone, ReservationIdExhausted, SoldOut
from .ledger import Reservation, ReservationLedger, generate_reservation_id
from .registry import Category, SeatRegistry


MAX_ID_ATTEMPTS = 32


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_category(category: Union[str, Category, None]) -> Category:
    if isinstance(category, Category):
        return category
    value = (category or "").strip().lower()
    try:
        return Category(value)
    except ValueError:
        raise MissingCategory() from None


def _fresh_reservation_id(ledger: ReservationLedger, rng: random.Random) -> str:
    for attempt in range(MAX_ID_ATTEMPTS):
        rid = generate_reservation_id(rng)
        if rid not in ledger:
            return rid
        logger.warning("reservation id collision on {} (attempt {}), redrawing", rid, attempt + 1)
    raise ReservationIdExhausted()


def book(
    registry: SeatRegistry,
    ledger: ReservationLedger,
    full_name: Optional[str],
    phone_number: Optional[str],
    category: Union[str, Category, None],
    *,
    rng: Optional[random.Random] = None,
    now: Callable[[], datetime] = utc_now,
) -> Reservation:
    """
    Validate a booking request, assign a seat and record the reservation.

    Checks run in order (name, phone, category, availability) and the first
    failure is raised. Nothing is mutated unless every check passes.
    """
    rng = rng or random.Random()

    name = (full_name or "").strip()
    if not name:
        raise MissingName()
    phone = (phone_number or "").strip()
    if not phone:
        raise MissingPhone()
    cat = parse_category(category)

    seat = assign_seat(registry, name, rng)
    if seat is None:
        raise SoldOut()

    reservation = Reservation(
        reservation_id=_fresh_reservation_id(ledger, rng),
        attendee_name=name,
        phone_number=phone,
        seat_number=seat.seat_number,
        category=cat,
        created_at=now(),
    )
    registry.occupy(seat.seat_number, name, cat)
    ledger.add(reservation)
    logger.info(
        "booked seat {} ({}) for {!r} as {}",
        reservation.seat_number,
        cat.value,
        name,
        reservation.reservation_id,
    )
    return reservation
