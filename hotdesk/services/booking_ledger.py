from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import case
from sqlalchemy.orm import Session

from hotdesk.core.exceptions import BookingNotFound
from hotdesk.models.booking import HotDeskBooking, BookingStatus, BookingType, TimeSlot
from hotdesk.utils.timeslots import is_slot_over


class BookingLedger:
    """Booking records and their Booked -> Cancelled/Completed lifecycle.

    Like the registry, the ledger flushes and leaves commits to its caller.
    """

    def __init__(self, db: Session):
        self.db = db

    def _live(self):
        return self.db.query(HotDeskBooking).filter(HotDeskBooking.status == BookingStatus.BOOKED)

    def get(self, booking_id: UUID) -> HotDeskBooking:
        booking = self.db.get(HotDeskBooking, booking_id)
        if not booking:
            raise BookingNotFound()
        return booking

    def find_live_booking(self, seat_id: UUID, booking_date: date, slot: TimeSlot) -> Optional[HotDeskBooking]:
        return self._live().filter(
            HotDeskBooking.seat_id == seat_id,
            HotDeskBooking.booking_date == booking_date,
            HotDeskBooking.time_slot == slot,
        ).first()

    def find_live_booking_for_employee(
        self, employee_id: str, booking_date: date, slot: TimeSlot
    ) -> Optional[HotDeskBooking]:
        return self._live().filter(
            HotDeskBooking.employee_id == employee_id,
            HotDeskBooking.booking_date == booking_date,
            HotDeskBooking.time_slot == slot,
        ).first()

    def find_current_for_seat(self, seat_id: UUID, occupant_id: Optional[str] = None) -> Optional[HotDeskBooking]:
        """
        The seat's current live booking regardless of date and slot.

        Prefers the booking held by the seat's occupant, then the earliest
        booking date.
        """
        query = self._live().filter(HotDeskBooking.seat_id == seat_id)
        order = [HotDeskBooking.booking_date.asc(), HotDeskBooking.created_at.asc()]
        if occupant_id:
            order.insert(0, case((HotDeskBooking.employee_id == occupant_id, 0), else_=1))
        return query.order_by(*order).first()

    def list_live(self, booking_date: date, slot: TimeSlot) -> List[HotDeskBooking]:
        return self._live().filter(
            HotDeskBooking.booking_date == booking_date,
            HotDeskBooking.time_slot == slot,
        ).all()

    def create(self, booking: HotDeskBooking) -> HotDeskBooking:
        booking.status = BookingStatus.BOOKED
        self.db.add(booking)
        self.db.flush()
        return booking

    def cancel(self, booking_id: UUID) -> HotDeskBooking:
        booking = self.get(booking_id)
        booking.status = BookingStatus.CANCELLED
        self.db.flush()
        return booking

    def complete(self, booking_id: UUID) -> HotDeskBooking:
        booking = self.get(booking_id)
        booking.status = BookingStatus.COMPLETED
        self.db.flush()
        return booking

    def list_expired_booked(self, as_of: datetime) -> List[HotDeskBooking]:
        """
        Live temporary bookings whose slot window has ended by ``as_of``.

        The date filter runs in SQL; the slot end check (which crosses
        midnight for Shift C) runs here.
        """
        candidates = (
            self._live()
            .filter(
                HotDeskBooking.booking_type == BookingType.TEMPORARY,
                HotDeskBooking.booking_date <= as_of.date(),
            )
            .order_by(HotDeskBooking.booking_date, HotDeskBooking.created_at)
            .all()
        )
        return [b for b in candidates if is_slot_over(b.booking_date, b.time_slot, as_of)]

    def list_for_employee(self, employee_id: str) -> List[HotDeskBooking]:
        return (
            self.db.query(HotDeskBooking)
            .filter(HotDeskBooking.employee_id == employee_id)
            .order_by(HotDeskBooking.booking_date.desc(), HotDeskBooking.created_at.desc())
            .all()
        )
