from __future__ import annotations

import argparse

from .config import get_settings
from .errors import ReservationError
from .logging_config import configure_logging
from .render import render_attendees, render_seat_map
from .shell import ReservationShell
from .state import EventState
from .storage import StorageError, load_booking_requests, save_attendees_csv


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--seats", type=int, help="Total seat capacity (default: SEAT_BOOKING_MAX_SEATS or 10)")
    p.add_argument("--per-row", type=int, help="Seats per display row (default: SEAT_BOOKING_SEATS_PER_ROW or 10)")
    p.add_argument("--seed", type=int, help="Random seed for reproducible seat assignment")


def _settings_from_args(args: argparse.Namespace):
    overrides = {}
    if getattr(args, "seats", None) is not None:
        overrides["max_seats"] = args.seats
    if getattr(args, "per_row", None) is not None:
        overrides["seats_per_row"] = args.per_row
    if getattr(args, "seed", None) is not None:
        overrides["random_seed"] = args.seed
    return get_settings(**overrides)


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from backend.app.main import create_app

    settings = _settings_from_args(args)
    host = args.host or settings.host
    port = args.port or settings.port
    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())
    return 0


def cmd_shell(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    configure_logging(settings.log_level)
    return ReservationShell(EventState.from_settings(settings)).run()


def cmd_simulate(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    configure_logging(settings.log_level)
    state = EventState.from_settings(settings)

    failed = 0
    for i, req in enumerate(load_booking_requests(args.input), start=1):
        try:
            state.book(req.full_name, req.phone_number, req.category)
        except ReservationError as e:
            failed += 1
            print(f"Row {i}: {e.message}")

    print(render_seat_map(state.registry, cell_width=args.width))
    print()
    print(render_attendees(state.reservations()))
    if args.output:
        save_attendees_csv(state.reservations(), args.output)
        print(f"Exported attendees to {args.output}")
    return 0 if failed == 0 else 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="seat_booking", description="Single-event seat booking (CLI).")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    _add_common_args(p_serve)
    p_serve.add_argument("--host", help="Bind address (default: SEAT_BOOKING_HOST or 127.0.0.1)")
    p_serve.add_argument("--port", type=int, help="Port (default: SEAT_BOOKING_PORT or 3000)")
    p_serve.set_defaults(func=cmd_serve)

    p_shell = sub.add_parser("shell", help="Interactive in-memory booking session")
    _add_common_args(p_shell)
    p_shell.set_defaults(func=cmd_shell)

    p_sim = sub.add_parser("simulate", help="Book every row of a CSV file (name,phone,category) and print the result")
    _add_common_args(p_sim)
    p_sim.add_argument("--input", required=True)
    p_sim.add_argument("--output", help="Write the attendee list to this CSV file")
    p_sim.add_argument("--width", type=int, default=5, help="Cell width for the seat map")
    p_sim.set_defaults(func=cmd_simulate)

    return p


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    try:
        return int(args.func(args))
    except StorageError as e:
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
