
import uuid
import enum
from sqlalchemy import Column, String, Date, DateTime, Uuid, ForeignKey, Index, func, text, Enum as SAEnum
from sqlalchemy.orm import relationship
from hotdesk.db.session import Base


class TimeSlot(str, enum.Enum):
    # Values are both display labels and wire values
    FULL_DAY = "Full Day"
    SHIFT_A = "Shift A (6AM-2PM)"
    SHIFT_B = "Shift B (2PM-10PM)"
    SHIFT_C = "Shift C (10PM-6AM)"


class BookingType(str, enum.Enum):
    TEMPORARY = "TEMPORARY"
    PERMANENT = "PERMANENT"


class BookingStatus(str, enum.Enum):
    BOOKED = "Booked"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


def _values(e):
    return [m.value for m in e]


LIVE_ONLY = text("status = 'Booked'")


class HotDeskBooking(Base):
    __tablename__ = "hot_desk_bookings"
    __table_args__ = (
        # At most one live booking per seat and per employee for a date+slot.
        # Partial unique indexes reject the losing writer of a concurrent race.
        Index(
            "uq_live_seat_slot", "seat_id", "booking_date", "time_slot",
            unique=True, postgresql_where=LIVE_ONLY, sqlite_where=LIVE_ONLY,
        ),
        Index(
            "uq_live_employee_slot", "employee_id", "booking_date", "time_slot",
            unique=True, postgresql_where=LIVE_ONLY, sqlite_where=LIVE_ONLY,
        ),
        Index("ix_booking_lookup", "booking_date", "workstation_id", "time_slot", "status"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    seat_id = Column(Uuid(as_uuid=True), ForeignKey("seats.id", ondelete="SET NULL"), nullable=True, index=True)
    workstation_id = Column(String(50), nullable=False)  # denormalized, read-only
    employee_id = Column(String(50), nullable=False, index=True)
    employee_name = Column(String(255), nullable=False)
    booking_date = Column(Date, nullable=False, index=True)
    time_slot = Column(
        SAEnum(TimeSlot, native_enum=False, values_callable=_values),
        nullable=False,
        default=TimeSlot.FULL_DAY,
    )
    booking_type = Column(
        SAEnum(BookingType, native_enum=False, values_callable=_values),
        nullable=False,
        default=BookingType.TEMPORARY,
    )
    status = Column(
        SAEnum(BookingStatus, native_enum=False, values_callable=_values),
        nullable=False,
        default=BookingStatus.BOOKED,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    seat = relationship("Seat", back_populates="bookings")
