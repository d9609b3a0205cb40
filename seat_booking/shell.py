from __future__ import annotations

import argparse
import shlex
import sys
from typing import NoReturn, Optional, TextIO

from .errors import ReservationError
from .render import render_attendees, render_seat_map
from .state import EventState


class ShellUsageError(Exception):
    pass


class _ShellParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise ShellUsageError(message)


def build_shell_parser() -> argparse.ArgumentParser:
    p = _ShellParser(prog="", add_help=False)
    sub = p.add_subparsers(dest="cmd", required=True)

    p_book = sub.add_parser("book", add_help=False, help="Book a seat: book NAME PHONE CATEGORY")
    p_book.add_argument("name", nargs="?", default="")
    p_book.add_argument("phone", nargs="?", default="")
    p_book.add_argument("category", nargs="?", default="")

    p_cancel = sub.add_parser("cancel", add_help=False, help="Cancel a booking: cancel RESERVATION_ID PHONE")
    p_cancel.add_argument("reservation_id", nargs="?", default="")
    p_cancel.add_argument("phone", nargs="?", default="")
    p_cancel.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    sub.add_parser("map", add_help=False, help="Show the seat map")
    sub.add_parser("attendees", add_help=False, help="List reservations")
    sub.add_parser("summary", add_help=False, help="Show seat availability")
    sub.add_parser("help", add_help=False)
    sub.add_parser("quit", add_help=False)
    sub.add_parser("exit", add_help=False)
    return p


HELP_TEXT = """Commands:
  book NAME PHONE CATEGORY       book a seat (category: gold or silver)
  cancel RESERVATION_ID PHONE    look up a booking and cancel it after confirmation
  map                            show the seat map
  attendees                      list reservations
  summary                        show seat availability
  quit                           leave the shell"""


class ReservationShell:
    """Line-oriented session over one in-memory EventState."""

    prompt = "seats> "

    def __init__(self, state: EventState, *, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.state = state
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.parser = build_shell_parser()
        self.flow = state.cancellation_flow()

    def _print(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def _read(self, prompt: str) -> Optional[str]:
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        return None if line == "" else line.rstrip("\n")

    def run(self) -> int:
        self._print("Seat booking shell. Type 'help' for commands.")
        while True:
            line = self._read(self.prompt)
            if line is None:
                self._print()
                return 0
            if not line.strip():
                continue
            if not self.handle(line):
                return 0

    def handle(self, line: str) -> bool:
        """Run one command line. Returns False when the session should end."""
        try:
            args = self.parser.parse_args(shlex.split(line))
        except (ShellUsageError, ValueError) as e:
            self._print(f"Error: {e}")
            return True

        if args.cmd in ("quit", "exit"):
            return False
        if args.cmd == "help":
            self._print(HELP_TEXT)
            return True

        try:
            getattr(self, f"cmd_{args.cmd}")(args)
        except ReservationError as e:
            self._print(f"Error: {e.message}")
        return True

    def cmd_book(self, args: argparse.Namespace) -> None:
        r = self.state.book(args.name, args.phone, args.category)
        self._print(
            f"Booking confirmed! Seat {r.seat_number} ({r.category.value}) assigned to {r.attendee_name}."
        )
        self._print(f"Reservation ID: {r.reservation_id}")

    def cmd_cancel(self, args: argparse.Namespace) -> None:
        with self.state.lock:
            found = self.flow.lookup(args.reservation_id, args.phone)
        self._print("Booking found:")
        self._print(f"  Reservation ID  {found.reservation_id}")
        self._print(f"  Name            {found.attendee_name}")
        self._print(f"  Seat            {found.seat_number}")
        self._print(f"  Category        {found.category.value.capitalize()}")
        self._print(f"  Booked At       {found.created_at.strftime('%d %b %Y, %H:%M')}")

        if not args.yes:
            answer = self._read("Confirm cancellation? [y/N] ")
            if (answer or "").strip().lower() not in ("y", "yes"):
                self.flow.reset()
                self._print("Cancellation aborted.")
                return

        with self.state.lock:
            cancelled = self.flow.confirm()
        self._print(f"Reservation {cancelled.reservation_id} cancelled.")

    def cmd_map(self, args: argparse.Namespace) -> None:
        with self.state.lock:
            self._print(render_seat_map(self.state.registry))

    def cmd_attendees(self, args: argparse.Namespace) -> None:
        self._print(render_attendees(self.state.reservations()))

    def cmd_summary(self, args: argparse.Namespace) -> None:
        s = self.state.summary()
        by_cat = ", ".join(f"{k}: {v}" for k, v in s["by_category"].items())
        self._print(f"{s['seats_available']} / {s['seats_total']} seats available ({by_cat})")
