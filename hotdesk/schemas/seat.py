
from typing import Optional, List
from pydantic import UUID4, model_validator
from datetime import datetime

from hotdesk.models.seat import SeatStatus
from hotdesk.schemas.common import CamelModel


# Seat — base fields
class SeatBase(CamelModel):
    workstation_id: str
    block: Optional[str] = None
    employee_id: Optional[str] = None
    employee_name: Optional[str] = None
    project: Optional[str] = None
    manager: Optional[str] = None


class SeatCreate(SeatBase):
    status: Optional[SeatStatus] = None
    is_active: bool = True

    @model_validator(mode="after")
    def check_occupancy(self):
        if self.employee_id == "":
            self.employee_id = None
        if self.status == SeatStatus.AVAILABLE and self.employee_id:
            raise ValueError("An Available seat cannot have an occupant")
        if self.status in (SeatStatus.OCCUPIED, SeatStatus.PERMANENTLY_ASSIGNED) and not self.employee_id:
            raise ValueError(f"A seat marked {self.status.value} needs an employeeId")
        return self


class Seat(SeatBase):
    id: UUID4
    status: SeatStatus
    is_active: Optional[bool] = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Bulk seat creation (POST /desks/bulk)
class SeatBulkCreate(CamelModel):
    seats: List[SeatCreate]


class SeatBulkCreateResponse(CamelModel):
    created_count: int
