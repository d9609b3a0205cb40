from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from loguru import logger

from .errors import CancelError, InvalidFlowState, MissingFields, NotFound
from .ledger import Reservation, ReservationLedger
from .registry import Category, SeatRegistry


@dataclass(frozen=True)
class CancelledSeat:
    reservation_id: str
    attendee_name: str
    seat_number: int
    category: Category

    def to_dict(self) -> dict:
        return {
            "reservation_id": self.reservation_id,
            "attendee_name": self.attendee_name,
            "seat_number": self.seat_number,
            "category": self.category.value,
        }


def lookup(ledger: ReservationLedger, reservation_id: Optional[str], phone_number: Optional[str]) -> Reservation:
    if not (reservation_id or "").strip() or not (phone_number or "").strip():
        raise MissingFields()
    match = ledger.find(reservation_id, phone_number)
    if match is None:
        raise NotFound()
    return match


def confirm(registry: SeatRegistry, ledger: ReservationLedger, reservation: Reservation) -> CancelledSeat:
    # A stale reservation must not free a seat that has since been rebooked.
    if ledger.remove(reservation.reservation_id) is None:
        raise NotFound()
    registry.release(reservation.seat_number)
    logger.info("cancelled {} and freed seat {}", reservation.reservation_id, reservation.seat_number)
    return CancelledSeat(
        reservation_id=reservation.reservation_id,
        attendee_name=reservation.attendee_name,
        seat_number=reservation.seat_number,
        category=reservation.category,
    )


def cancel(
    registry: SeatRegistry, ledger: ReservationLedger, reservation_id: str, phone_number: str
) -> CancelledSeat:
    return confirm(registry, ledger, lookup(ledger, reservation_id, phone_number))


class FlowStage(str, Enum):
    idle = "idle"
    found = "found"
    error = "error"


class CancellationFlow:
    """
    Two-phase cancellation: look the booking up, show it, then confirm.

    idle --lookup ok--> found --confirm--> idle
    idle --lookup fails--> error --lookup/reset--> ...
    """

    def __init__(self, registry: SeatRegistry, ledger: ReservationLedger):
        self.registry = registry
        self.ledger = ledger
        self.stage = FlowStage.idle
        self.reservation: Optional[Reservation] = None
        self.error: Optional[CancelError] = None

    def lookup(self, reservation_id: str, phone_number: str) -> Reservation:
        try:
            found = lookup(self.ledger, reservation_id, phone_number)
        except CancelError as e:
            self.stage = FlowStage.error
            self.reservation = None
            self.error = e
            raise
        self.stage = FlowStage.found
        self.reservation = found
        self.error = None
        return found

    def confirm(self) -> CancelledSeat:
        if self.stage is not FlowStage.found or self.reservation is None:
            raise InvalidFlowState()
        try:
            result = confirm(self.registry, self.ledger, self.reservation)
        except CancelError as e:
            self.stage = FlowStage.error
            self.reservation = None
            self.error = e
            raise
        self.reset()
        return result

    def reset(self) -> None:
        self.stage = FlowStage.idle
        self.reservation = None
        self.error = None
