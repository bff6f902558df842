
import uuid
import enum
from sqlalchemy import Column, String, Boolean, DateTime, Uuid, func, Enum as SAEnum
from sqlalchemy.orm import relationship
from hotdesk.db.session import Base


class SeatStatus(str, enum.Enum):
    AVAILABLE = "Available"
    OCCUPIED = "Occupied"
    PERMANENTLY_ASSIGNED = "Permanently Assigned"


class Seat(Base):
    __tablename__ = "seats"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    workstation_id = Column(String(50), unique=True, nullable=False, index=True)
    block = Column(String(20), nullable=True, index=True)
    # Current occupant, driven by the latest live booking for this seat
    employee_id = Column(String(50), nullable=True, index=True)
    employee_name = Column(String(255), nullable=True)
    project = Column(String(255), nullable=True)
    manager = Column(String(255), nullable=True)
    status = Column(
        SAEnum(SeatStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=SeatStatus.AVAILABLE,
        index=True,
    )
    is_active = Column(Boolean, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    bookings = relationship("HotDeskBooking", back_populates="seat", passive_deletes=True)
