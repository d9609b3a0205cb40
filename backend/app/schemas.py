from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from seat_booking.registry import Category


class BookingCreate(BaseModel):
    # Left unconstrained: trimming and validation order belong to the booking workflow.
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    category: Optional[str] = None


class CancellationRequest(BaseModel):
    reservation_id: Optional[str] = None
    phone_number: Optional[str] = None


class ReservationOut(BaseModel):
    reservation_id: str
    attendee_name: str
    seat_number: int
    category: Category
    created_at: datetime


class SeatOut(BaseModel):
    seat_number: int
    occupant: Optional[str] = None
    category: Optional[Category] = None
    status: str


class SeatMap(BaseModel):
    seats_per_row: int
    rows: list[list[SeatOut]]


class Summary(BaseModel):
    seats_total: int
    seats_available: int
    seats_booked: int
    by_category: dict[str, int]


class CancelledSeatOut(BaseModel):
    reservation_id: str
    attendee_name: str
    seat_number: int
    category: Category


class ErrorOut(BaseModel):
    detail: str
    code: str
