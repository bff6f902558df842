"""
Error taxonomy for the booking engine.

Services raise these; the HTTP layer turns them into ``HTTPException`` with
the carried status code and message.
"""
from typing import Optional


class HotDeskError(Exception):
    status_code = 400
    default_message = "Invalid request"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(HotDeskError):
    default_message = "Missing required booking details"


class MissingSlot(InvalidRequest):
    default_message = "Time slot is required for temporary bookings"


class DuplicateEmployeeBooking(HotDeskError):
    default_message = "You already have a booking for this date and time slot"


class SeatAlreadyBooked(HotDeskError):
    default_message = "This seat has already been booked by someone else"


class BookingNotLive(HotDeskError):
    status_code = 409
    default_message = "Only booked reservations can be cancelled"


class NotFound(HotDeskError):
    status_code = 404
    default_message = "Not found"


class SeatNotFound(NotFound):
    default_message = "Seat not found"


class BookingNotFound(NotFound):
    default_message = "Booking not found"


class StorageFailure(HotDeskError):
    status_code = 500
    default_message = "Storage operation failed"
