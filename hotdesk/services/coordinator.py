import logging
from contextlib import contextmanager
from datetime import date
from typing import Optional, Union
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hotdesk.core.exceptions import (
    BookingNotLive,
    DuplicateEmployeeBooking,
    HotDeskError,
    InvalidRequest,
    MissingSlot,
    SeatAlreadyBooked,
    StorageFailure,
)
from hotdesk.models.booking import HotDeskBooking, BookingStatus, BookingType, TimeSlot
from hotdesk.models.seat import SeatStatus
from hotdesk.services.activity_log import ActivityLog
from hotdesk.services.booking_ledger import BookingLedger
from hotdesk.services.seat_registry import SeatRegistry
from hotdesk.utils.timeslots import effective_slot, normalize_booking_date

logger = logging.getLogger(__name__)


class BookingCoordinator:
    """
    Validates and commits bookings, keeping the ledger and the seat's
    occupant fields in step.

    Each operation writes the booking row and the seat row in one database
    transaction. The partial unique indexes on live bookings are the final
    arbiter when two requests race past the pre-checks.
    """

    def __init__(self, db: Session, registry: SeatRegistry, ledger: BookingLedger, activity: ActivityLog):
        self.db = db
        self.registry = registry
        self.ledger = ledger
        self.activity = activity

    @contextmanager
    def _storage_errors(self, action: str):
        """Roll back and report any database error raised inside the block."""
        try:
            yield
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Database error while %s", action)
            raise StorageFailure()

    def _conflict_for(self, employee_id: str, booking_date: date, slot: TimeSlot) -> HotDeskError:
        # Same tie-break as the pre-checks: employee conflict wins.
        if self.ledger.find_live_booking_for_employee(employee_id, booking_date, slot):
            return DuplicateEmployeeBooking()
        return SeatAlreadyBooked()

    # ------------------------------------------------------------------
    # book
    # ------------------------------------------------------------------

    def book(
        self,
        seat_id: Optional[UUID],
        employee_id: Optional[str],
        employee_name: Optional[str],
        booking_date: Union[date, str, None],
        time_slot: Optional[TimeSlot] = None,
        booking_type: Optional[BookingType] = None,
    ) -> HotDeskBooking:
        if not seat_id or not employee_id or not booking_date:
            raise InvalidRequest()

        try:
            booking_type = BookingType(booking_type or BookingType.TEMPORARY)
            time_slot = TimeSlot(time_slot) if time_slot else None
        except ValueError as e:
            raise InvalidRequest(str(e)) from e

        if booking_type == BookingType.TEMPORARY and not time_slot:
            raise MissingSlot()

        day = normalize_booking_date(booking_date)
        slot = effective_slot(booking_type, time_slot)

        with self._storage_errors("booking a seat"):
            booking = self._book(seat_id, employee_id, employee_name, day, slot, booking_type)

        self.activity.log(
            "Hot-Desk Booked",
            f"{booking.employee_name} booked seat {booking.workstation_id} for {day.isoformat()} ({slot.value})",
            "event_seat",
            "bg-blue-50 text-blue-600",
        )
        return booking

    def _book(
        self,
        seat_id: UUID,
        employee_id: str,
        employee_name: Optional[str],
        day: date,
        slot: TimeSlot,
        booking_type: BookingType,
    ) -> HotDeskBooking:
        if self.ledger.find_live_booking_for_employee(employee_id, day, slot):
            raise DuplicateEmployeeBooking()
        if self.ledger.find_live_booking(seat_id, day, slot):
            raise SeatAlreadyBooked()

        seat = self.registry.get(seat_id)
        if seat.status == SeatStatus.PERMANENTLY_ASSIGNED:
            raise SeatAlreadyBooked("This seat is permanently assigned")

        name = employee_name or employee_id

        try:
            booking = self.ledger.create(HotDeskBooking(
                seat_id=seat.id,
                workstation_id=seat.workstation_id,
                employee_id=employee_id,
                employee_name=name,
                booking_date=day,
                time_slot=slot,
                booking_type=booking_type,
            ))
            self.registry.set_occupant(
                seat.id,
                employee_id,
                name,
                SeatStatus.PERMANENTLY_ASSIGNED if booking_type == BookingType.PERMANENT else SeatStatus.OCCUPIED,
            )
            self.db.commit()
        except IntegrityError:
            # A concurrent request committed a live booking for the same
            # seat or employee between our pre-check and this insert.
            self.db.rollback()
            logger.info(
                "Live booking conflict on commit for seat %s, employee %s, %s %s",
                seat_id, employee_id, day, slot.value,
            )
            raise self._conflict_for(employee_id, day, slot)

        self.db.refresh(booking)
        return booking

    # ------------------------------------------------------------------
    # cancel
    # ------------------------------------------------------------------

    def cancel(self, booking_id: UUID) -> HotDeskBooking:
        with self._storage_errors("cancelling a booking"):
            booking = self.ledger.get(booking_id)
            if booking.status == BookingStatus.CANCELLED:
                return booking
            if booking.status != BookingStatus.BOOKED:
                raise BookingNotLive(
                    f"Only booked reservations can be cancelled (current status: '{booking.status.value}')"
                )

            self.ledger.cancel(booking.id)

            # Leave the seat alone if a later booking has taken it over
            seat = booking.seat
            if seat and seat.employee_id == booking.employee_id:
                self.registry.clear_occupant(seat.id)

            self.db.commit()
            self.db.refresh(booking)

        self.activity.log(
            "Hot-Desk Cancelled",
            f"{booking.employee_name} cancelled booking for seat {booking.workstation_id} "
            f"on {booking.booking_date.isoformat()}",
            "event_busy",
            "bg-orange-50 text-orange-600",
        )
        return booking

    # ------------------------------------------------------------------
    # admin unassign
    # ------------------------------------------------------------------

    def admin_unassign(self, seat_id: UUID) -> None:
        """Force-release a seat. Wins even if ledger and seat disagree."""
        with self._storage_errors("unassigning a seat"):
            seat = self.registry.get(seat_id)

            booking = self.ledger.find_current_for_seat(seat.id, seat.employee_id)
            if booking:
                self.ledger.cancel(booking.id)

            self.registry.clear_occupant(seat.id)
            self.db.commit()
            workstation_id = seat.workstation_id

        self.activity.log(
            "Seat Unassigned (Admin)",
            f"Seat {workstation_id} was unassigned by Admin. Permanent booking closed.",
            "person_remove",
            "bg-gray-50 text-gray-600",
        )
