
from typing import Optional
from pydantic import UUID4, field_validator
from datetime import date, datetime

from hotdesk.models.booking import TimeSlot, BookingType, BookingStatus
from hotdesk.schemas.common import CamelModel


# Booking — Create (POST /hotdesk/book)
# Required fields are checked by the coordinator so that a missing one is a
# 400 with the booking message rather than a schema error.
class BookingCreate(CamelModel):
    seat_id: Optional[UUID4] = None
    employee_id: Optional[str] = None
    employee_name: Optional[str] = None
    booking_date: Optional[date] = None
    time_slot: Optional[TimeSlot] = None
    booking_type: Optional[BookingType] = None

    @field_validator("seat_id", "employee_id", "time_slot", "booking_type", mode="before")
    @classmethod
    def parse_empty_str_to_none(cls, v):
        if v == "":
            return None
        return v

    @field_validator("booking_date", mode="before")
    @classmethod
    def strip_time_of_day(cls, v):
        # Clients send either YYYY-MM-DD or a full ISO timestamp
        if v == "":
            return None
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v


# Booking — Full response
class Booking(CamelModel):
    id: UUID4
    seat_id: Optional[UUID4] = None
    workstation_id: str
    employee_id: str
    employee_name: str
    booking_date: date
    time_slot: TimeSlot
    booking_type: BookingType
    status: BookingStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Booking — Cancel response (POST /hotdesk/cancel/{id})
class BookingCancelResponse(CamelModel):
    message: str
    booking: Booking
