from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from hotdesk.core.exceptions import InvalidRequest
from hotdesk.models.booking import TimeSlot, BookingType


# End of each slot's window as (wall-clock time, day offset from booking_date).
# Shift C starts at 22:00 and runs into the next calendar day.
SLOT_ENDS = {
    TimeSlot.FULL_DAY: (time(20, 0), 0),
    TimeSlot.SHIFT_A: (time(14, 0), 0),
    TimeSlot.SHIFT_B: (time(22, 0), 0),
    TimeSlot.SHIFT_C: (time(6, 0), 1),
}


def normalize_booking_date(value: Union[date, datetime, str, None]) -> Optional[date]:
    """
    Reduce a booking date to its date-only key.

    Two requests for the same calendar date conflict regardless of the
    time-of-day they carry, so everything downstream compares plain dates.
    Accepts ``date``, ``datetime`` or an ISO string (``2024-06-10`` or
    ``2024-06-10T09:30:00``).
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value).strip().replace("Z", "+00:00")).date()
    except ValueError:
        raise InvalidRequest(f"Invalid booking date: {value}")


def effective_slot(booking_type: BookingType, slot: Optional[TimeSlot]) -> Optional[TimeSlot]:
    """Permanent bookings always occupy the Full Day slot."""
    if booking_type == BookingType.PERMANENT:
        return TimeSlot.FULL_DAY
    return slot


def slot_end(booking_date: date, slot: TimeSlot) -> datetime:
    end_time, day_offset = SLOT_ENDS[slot]
    return datetime.combine(booking_date + timedelta(days=day_offset), end_time)


def is_slot_over(booking_date: date, slot: TimeSlot, now: datetime) -> bool:
    """
    True once ``now`` has reached the end of the slot's window.

    For every slot except Shift C this is the same as "booking_date is a past
    day, or it is today and the current hour is at/after the end hour".
    A Shift C booking dated D stays live until 06:00 on D+1.
    """
    return now >= slot_end(booking_date, slot)
