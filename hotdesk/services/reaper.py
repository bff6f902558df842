import logging
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from hotdesk.db.session import SessionLocal
from hotdesk.models.booking import BookingStatus
from hotdesk.services.activity_log import ActivityLog
from hotdesk.services.booking_ledger import BookingLedger
from hotdesk.services.seat_registry import SeatRegistry

logger = logging.getLogger(__name__)


class LifecycleReaper:
    """
    Completes temporary bookings whose slot has ended and frees their seats.

    This is the long-run consistency backstop between the ledger and the
    registry: a seat can stay wrongly Occupied for at most one sweep interval
    after its booking has expired.
    """

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def sweep(self, now: Optional[datetime] = None) -> int:
        """
        Run one pass. Returns the number of bookings marked Completed.

        ``now`` is naive local time, the same clock booking dates are kept in.
        Each booking is committed on its own; a failure is logged and the
        sweep moves on to the next one.
        """
        now = now or datetime.now()
        db = self.session_factory()
        try:
            ledger = BookingLedger(db)
            expired_ids = [b.id for b in ledger.list_expired_booked(now)]
            if not expired_ids:
                return 0

            logger.info("Found %d expired hot-desk booking(s).", len(expired_ids))
            completed = 0
            for booking_id in expired_ids:
                try:
                    if self._release(db, booking_id):
                        completed += 1
                except Exception:
                    db.rollback()
                    logger.exception("Failed to complete hot-desk booking %s.", booking_id)
            return completed
        finally:
            db.close()

    def _release(self, db: Session, booking_id: UUID) -> bool:
        ledger = BookingLedger(db)
        registry = SeatRegistry(db)

        booking = ledger.get(booking_id)
        if booking.status != BookingStatus.BOOKED:
            # Cancelled since the scan
            return False

        logger.info("Marking booking %s as completed", booking.id)
        ledger.complete(booking.id)

        seat = booking.seat
        released = seat is not None and seat.employee_id == booking.employee_id
        if released:
            registry.clear_occupant(seat.id)
        db.commit()

        if released:
            ActivityLog(db).log(
                "Seat Released",
                f"Seat {booking.workstation_id} released after hot-desk completion for {booking.employee_name}",
                "desk",
                "bg-green-50 text-green-600",
            )
        return True
