from __future__ import annotations


class ReservationError(Exception):
    """
    Base class for every user-facing booking/cancellation failure.

    `code` is a stable machine-readable name, `message` is safe to show to an
    attendee. None of these leave the registry or ledger modified.
    """

    code = "ReservationError"
    status_code = 400
    default_message = "reservation request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BookingError(ReservationError):
    code = "BookingError"


class MissingName(BookingError):
    code = "MissingName"
    default_message = "Please enter a full name."


class MissingPhone(BookingError):
    code = "MissingPhone"
    default_message = "Please enter a phone number."


class MissingCategory(BookingError):
    code = "MissingCategory"
    default_message = "Please select a ticket category."


class SoldOut(BookingError):
    code = "SoldOut"
    status_code = 409
    default_message = "No seats available. The event is fully booked."


class ReservationIdExhausted(BookingError):
    code = "ReservationIdExhausted"
    status_code = 503
    default_message = "Could not generate a unique reservation id, please retry."


class CancelError(ReservationError):
    code = "CancelError"


class MissingFields(CancelError):
    code = "MissingFields"
    default_message = "Please enter both Reservation ID and phone number."


class NotFound(CancelError):
    code = "NotFound"
    status_code = 404
    default_message = "No reservation found. Please check your details."


class InvalidFlowState(CancelError):
    code = "InvalidFlowState"
    status_code = 409
    default_message = "No reservation has been looked up for cancellation."
