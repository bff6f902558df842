import logging
from datetime import date
from typing import List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError

from hotdesk.core.exceptions import InvalidRequest, StorageFailure
from hotdesk.models.booking import TimeSlot
from hotdesk.models.seat import Seat
from hotdesk.services.booking_ledger import BookingLedger
from hotdesk.services.seat_registry import SeatRegistry
from hotdesk.utils.timeslots import normalize_booking_date

logger = logging.getLogger(__name__)


class AvailabilityResolver:
    def __init__(self, registry: SeatRegistry, ledger: BookingLedger):
        self.registry = registry
        self.ledger = ledger

    def get_available_seats(self, booking_date: Union[date, str, None], slot: Optional[TimeSlot]) -> List[Seat]:
        """
        Seats free for ``(booking_date, slot)``.

        Excludes seats with a live booking for that date and slot. The
        registry only offers seats whose own status is Available, so a
        permanently assigned seat is never returned even with no booking row
        for the slot.
        """
        day = normalize_booking_date(booking_date)
        if not day or not slot:
            raise InvalidRequest("Date and time slot are required")

        try:
            booked_seat_ids = {b.seat_id for b in self.ledger.list_live(day, slot) if b.seat_id}
            return self.registry.list_available(exclude_seat_ids=booked_seat_ids)
        except SQLAlchemyError:
            self.registry.db.rollback()
            logger.exception("Database error while resolving available seats for %s %s", day, slot)
            raise StorageFailure()
