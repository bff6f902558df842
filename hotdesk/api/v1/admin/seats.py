
from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hotdesk.api.deps import get_activity_log, get_seat_registry, http_error
from hotdesk.core.exceptions import HotDeskError
from hotdesk.db.session import get_db
from hotdesk.models.seat import SeatStatus
from hotdesk.services.activity_log import ActivityLog
from hotdesk.services.seat_registry import SeatRegistry
from hotdesk.schemas.common import MessageResponse
from hotdesk.schemas.seat import (
    Seat as SeatSchema,
    SeatBulkCreate,
    SeatBulkCreateResponse,
)

router = APIRouter(prefix="/desks", tags=["Admin - Seats"])


# ---------------------------------------------------------------------------
# Listing / lookup
# ---------------------------------------------------------------------------


@router.get("/", response_model=List[SeatSchema])
def list_seats(
    block: Optional[str] = None,
    status: Optional[SeatStatus] = None,
    registry: SeatRegistry = Depends(get_seat_registry),
):
    return registry.list_seats(block=block, status=status)


@router.get("/employee/{emp_id}", response_model=SeatSchema)
def get_seat_for_employee(
    emp_id: str,
    registry: SeatRegistry = Depends(get_seat_registry),
):
    try:
        return registry.get_by_employee(emp_id)
    except HotDeskError as e:
        raise http_error(e)


@router.get("/{seat_id}", response_model=SeatSchema)
def get_seat(
    seat_id: UUID,
    registry: SeatRegistry = Depends(get_seat_registry),
):
    try:
        return registry.get(seat_id)
    except HotDeskError as e:
        raise http_error(e)


# ---------------------------------------------------------------------------
# Bulk seed
# ---------------------------------------------------------------------------


@router.post(
    "/bulk",
    response_model=SeatBulkCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
def bulk_create_seats(
    data: SeatBulkCreate,
    db: Session = Depends(get_db),
    registry: SeatRegistry = Depends(get_seat_registry),
    activity: ActivityLog = Depends(get_activity_log),
):
    try:
        new_seats = registry.bulk_create([s.model_dump() for s in data.seats])
    except HotDeskError as e:
        db.rollback()
        raise http_error(e)
    db.commit()

    activity.log(
        "Seats Imported",
        f"{len(new_seats)} seat(s) added to the hot-desk registry",
        "upload_file",
        "bg-purple-50 text-purple-600",
    )
    return SeatBulkCreateResponse(created_count=len(new_seats))


# ---------------------------------------------------------------------------
# Bulk reset
# ---------------------------------------------------------------------------


@router.delete("/all", response_model=MessageResponse)
def delete_all_seats(
    db: Session = Depends(get_db),
    registry: SeatRegistry = Depends(get_seat_registry),
):
    """Wipe the registry. Booking history is kept, detached from its seats."""
    registry.reset()
    db.commit()
    return MessageResponse(message="All desks deleted")
