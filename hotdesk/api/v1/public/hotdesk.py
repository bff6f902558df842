import logging
from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from hotdesk.api.deps import (
    get_availability_resolver,
    get_booking_coordinator,
    get_booking_ledger,
    http_error,
)
from hotdesk.core.exceptions import HotDeskError
from hotdesk.models.booking import TimeSlot
from hotdesk.services.availability import AvailabilityResolver
from hotdesk.services.booking_ledger import BookingLedger
from hotdesk.services.coordinator import BookingCoordinator
from hotdesk.schemas.booking import (
    BookingCreate,
    Booking as BookingSchema,
    BookingCancelResponse,
)
from hotdesk.schemas.common import ErrorResponse
from hotdesk.schemas.seat import Seat as SeatSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hotdesk", tags=["Hot-Desk"])


# ---------------------------------------------------------------------------
# GET /hotdesk/available-seats?date=YYYY-MM-DD&slot=Full Day
# ---------------------------------------------------------------------------


@router.get("/available-seats", response_model=List[SeatSchema])
def available_seats(
    date: Optional[str] = Query(None, description="Booking date, YYYY-MM-DD"),
    slot: Optional[TimeSlot] = Query(None, description="Time slot label"),
    resolver: AvailabilityResolver = Depends(get_availability_resolver),
):
    """Seats free for the given date and slot (permanently assigned seats are never offered)."""
    try:
        return resolver.get_available_seats(date, slot)
    except HotDeskError as e:
        raise http_error(e)


# ---------------------------------------------------------------------------
# POST /hotdesk/book
# ---------------------------------------------------------------------------


@router.post(
    "/book",
    response_model=BookingSchema,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def book_seat(
    data: BookingCreate,
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    """
    Book a seat.

    - **TEMPORARY** (default): one date + time slot, released automatically
      once the slot has ended.
    - **PERMANENT**: holds the seat until cancelled or unassigned by an admin;
      stored as a Full Day booking.
    """
    try:
        return coordinator.book(
            seat_id=data.seat_id,
            employee_id=data.employee_id,
            employee_name=data.employee_name,
            booking_date=data.booking_date,
            time_slot=data.time_slot,
            booking_type=data.booking_type,
        )
    except HotDeskError as e:
        logger.info("Booking rejected: %s", e.message)
        raise http_error(e)


# ---------------------------------------------------------------------------
# GET /hotdesk/my-bookings/{emp_id}
# ---------------------------------------------------------------------------


@router.get("/my-bookings/{emp_id}", response_model=List[BookingSchema])
def my_bookings(
    emp_id: str,
    ledger: BookingLedger = Depends(get_booking_ledger),
):
    """Booking history for an employee, newest booking date first."""
    return ledger.list_for_employee(emp_id)


# ---------------------------------------------------------------------------
# POST /hotdesk/cancel/{booking_id}
# ---------------------------------------------------------------------------


@router.post("/cancel/{booking_id}", response_model=BookingCancelResponse)
def cancel_booking(
    booking_id: UUID,
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    try:
        booking = coordinator.cancel(booking_id)
    except HotDeskError as e:
        raise http_error(e)
    return BookingCancelResponse(
        message="Booking cancelled successfully",
        booking=BookingSchema.model_validate(booking),
    )
