from __future__ import annotations

from typing import Iterable, Optional

from .ledger import Reservation
from .registry import Seat, SeatRegistry


_MARKERS = {"available": ".", "gold": "G", "silver": "S"}


def _cell(text: Optional[str], width: int) -> str:
    if not text:
        return "-".center(width)
    t = str(text)
    if len(t) > width:
        t = t[: max(0, width - 1)] + "…"
    return t.ljust(width)


def _seat_cell(seat: Seat, width: int) -> str:
    marker = _MARKERS[seat.status]
    t = f"{seat.seat_number}{marker}"
    if len(t) > width:
        # keep the status marker; shorten the number
        t = t[: max(0, width - 2)] + "…" + marker
    return t.center(width)


def render_seat_map(registry: SeatRegistry, *, cell_width: int = 5) -> str:
    cell_width = max(3, int(cell_width))
    row_width = min(registry.seats_per_row, registry.capacity) * (cell_width + 1) - 1

    lines = ["STAGE".center(row_width, "="), ""]
    for row in registry.rows():
        lines.append(" ".join(_seat_cell(s, cell_width) for s in row))
    summary = registry.summary()
    lines.append("")
    lines.append(f"{summary['seats_available']} / {summary['seats_total']} seats available  (. free  G gold  S silver)")
    return "\n".join(lines)


def render_attendees(reservations: Iterable[Reservation], *, name_width: int = 20) -> str:
    rows = list(reservations)
    if not rows:
        return "No reservations yet."

    header = f"{'Reservation ID':<14} {'Name':<{name_width}} {'Seat':>4}  {'Category':<8} Booked At"
    lines = [header, "-" * len(header)]
    for r in rows:
        lines.append(
            f"{r.reservation_id:<14} {_cell(r.attendee_name, name_width)} {r.seat_number:>4}  "
            f"{r.category.value.capitalize():<8} {r.created_at.strftime('%d %b %Y, %H:%M')}"
        )
    return "\n".join(lines)
