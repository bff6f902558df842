
from uuid import UUID

from fastapi import APIRouter, Depends

from hotdesk.api.deps import get_booking_coordinator, http_error
from hotdesk.core.exceptions import HotDeskError
from hotdesk.services.coordinator import BookingCoordinator
from hotdesk.schemas.common import MessageResponse

router = APIRouter(prefix="/hotdesk/admin", tags=["Admin - Hot-Desk"])


@router.post("/unassign/{seat_id}", response_model=MessageResponse)
def unassign_seat(
    seat_id: UUID,
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    """Force-release a seat and cancel its current live booking, if any."""
    try:
        coordinator.admin_unassign(seat_id)
    except HotDeskError as e:
        raise http_error(e)
    return MessageResponse(message="Seat unassigned successfully")
