from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, Response
from loguru import logger

from seat_booking.config import Settings, get_settings
from seat_booking.errors import ReservationError
from seat_booking.logging_config import configure_logging
from seat_booking.state import EventState
from seat_booking.storage import attendees_csv

from .schemas import (
    BookingCreate,
    CancellationRequest,
    CancelledSeatOut,
    ErrorOut,
    ReservationOut,
    SeatMap,
    SeatOut,
    Summary,
)


ERROR_RESPONSES = {
    400: {"model": ErrorOut},
    404: {"model": ErrorOut},
    409: {"model": ErrorOut},
    503: {"model": ErrorOut},
}


async def reservation_error_handler(request: Request, exc: ReservationError) -> JSONResponse:
    logger.info("{} {} rejected: {} ({})", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.code})


def _state(request: Request) -> EventState:
    return request.app.state.event


def _mount_static(app: FastAPI, static_dir: Path) -> None:
    """Serve a built single-page UI; unknown GET paths fall back to index.html."""
    root = static_dir.resolve()
    index = root / "index.html"

    @app.get("/{full_path:path}", include_in_schema=False)
    def spa(full_path: str) -> FileResponse:
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_relative_to(root) and candidate.is_file():
            return FileResponse(candidate)
        if not index.is_file():
            raise HTTPException(status_code=404, detail="not found")
        return FileResponse(index)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Seat Booking API", version="0.1.0")
    app.state.settings = settings
    app.state.event = EventState.from_settings(settings)
    logger.info(
        "event created with {} seats ({} per row)",
        settings.max_seats,
        settings.seats_per_row,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ReservationError, reservation_error_handler)

    @app.get("/health")
    def health() -> dict:
        return {"ok": True}

    @app.get("/summary", response_model=Summary)
    def summary(state: EventState = Depends(_state)) -> dict:
        return state.summary()

    @app.get("/seats", response_model=list[SeatOut])
    def list_seats(state: EventState = Depends(_state)) -> list[dict]:
        return state.seats()

    @app.get("/seat-map", response_model=SeatMap)
    def seat_map(state: EventState = Depends(_state)) -> dict:
        return state.seat_map()

    @app.get("/reservations", response_model=list[ReservationOut])
    def list_reservations(state: EventState = Depends(_state)) -> list[dict]:
        return [r.to_dict() for r in state.reservations()]

    @app.get("/reservations.csv")
    def export_reservations_csv(state: EventState = Depends(_state)) -> Response:
        return Response(
            content=attendees_csv(state.reservations()),
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="reservations.csv"'},
        )

    @app.post("/reservations", status_code=201, response_model=ReservationOut, responses=ERROR_RESPONSES)
    def create_reservation(payload: BookingCreate, state: EventState = Depends(_state)) -> dict:
        r = state.book(payload.full_name, payload.phone_number, payload.category)
        return r.to_dict()

    @app.post("/cancellations/lookup", response_model=ReservationOut, responses=ERROR_RESPONSES)
    def lookup_cancellation(payload: CancellationRequest, state: EventState = Depends(_state)) -> dict:
        return state.lookup(payload.reservation_id, payload.phone_number).to_dict()

    @app.post("/cancellations/confirm", response_model=CancelledSeatOut, responses=ERROR_RESPONSES)
    def confirm_cancellation(payload: CancellationRequest, state: EventState = Depends(_state)) -> dict:
        # HTTP is stateless, so the confirm step repeats the lookup before freeing the seat.
        return state.cancel(payload.reservation_id, payload.phone_number).to_dict()

    if settings.static_dir is not None and settings.static_dir.is_dir():
        _mount_static(app, settings.static_dir)

    return app


app = create_app()
