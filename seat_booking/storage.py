from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, TextIO

from .ledger import Reservation


ATTENDEE_COLUMNS = ["reservation_id", "attendee_name", "seat_number", "category", "created_at"]
REQUEST_COLUMNS = {"name", "phone", "category"}


class StorageError(Exception):
    pass


@dataclass(frozen=True)
class BookingRequest:
    full_name: str
    phone_number: str
    category: str


def write_attendees_csv(reservations: Iterable[Reservation], f: TextIO) -> None:
    w = csv.writer(f)
    w.writerow(ATTENDEE_COLUMNS)
    for r in reservations:
        d = r.to_dict()
        w.writerow([d[c] for c in ATTENDEE_COLUMNS])


def attendees_csv(reservations: Iterable[Reservation]) -> str:
    out = io.StringIO()
    write_attendees_csv(reservations, out)
    return out.getvalue()


def save_attendees_csv(reservations: Iterable[Reservation], path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", newline="", encoding="utf-8") as f:
        write_attendees_csv(reservations, f)


def load_booking_requests(path: str | Path) -> list[BookingRequest]:
    p = Path(path)
    if not p.exists():
        raise StorageError(f"bookings file not found: {p}")

    with p.open("r", newline="", encoding="utf-8") as f:
        r = csv.DictReader(f)
        if not REQUEST_COLUMNS.issubset(set(r.fieldnames or [])):
            raise StorageError(f"CSV must have headers: {sorted(REQUEST_COLUMNS)}")
        # Values are passed through untrimmed; the booking workflow validates them.
        return [
            BookingRequest(
                full_name=row["name"] or "",
                phone_number=row["phone"] or "",
                category=row["category"] or "",
            )
            for row in r
        ]
