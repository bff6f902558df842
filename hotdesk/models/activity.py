
import uuid
from sqlalchemy import Column, String, DateTime, Text, Uuid, func
from hotdesk.db.session import Base

class Activity(Base):
    __tablename__ = "activities"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)  # Hot-Desk Booked, Seat Released, ...
    message = Column(Text, nullable=False)
    icon = Column(String(50), nullable=False)
    color = Column(String(100), nullable=False)
    category = Column(String(50), default="reservation", index=True)
    details = Column(Text, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
