from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from hotdesk.core.exceptions import InvalidRequest, NotFound, SeatNotFound
from hotdesk.models.booking import HotDeskBooking
from hotdesk.models.seat import Seat, SeatStatus


class SeatRegistry:
    """
    Authoritative list of bookable seats and their current occupancy.

    Methods flush but never commit; the caller owns the transaction so that a
    seat update can share one commit with the ledger write that drives it.
    No method here looks at the booking ledger except ``reset``.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, seat_id: UUID) -> Seat:
        seat = self.db.get(Seat, seat_id)
        if not seat:
            raise SeatNotFound()
        return seat

    def list_available(self, exclude_seat_ids: Iterable[UUID] = ()) -> List[Seat]:
        query = self.db.query(Seat).filter(
            Seat.is_active == True,  # noqa: E712
            Seat.status == SeatStatus.AVAILABLE,
        )
        excluded = set(exclude_seat_ids)
        if excluded:
            query = query.filter(Seat.id.notin_(list(excluded)))
        return query.order_by(Seat.workstation_id).all()

    def set_occupant(
        self,
        seat_id: UUID,
        employee_id: str,
        employee_name: Optional[str],
        status: SeatStatus,
    ) -> Seat:
        seat = self.get(seat_id)
        seat.employee_id = employee_id
        seat.employee_name = employee_name
        seat.status = status
        self.db.flush()
        return seat

    def clear_occupant(self, seat_id: UUID) -> Seat:
        seat = self.get(seat_id)
        seat.status = SeatStatus.AVAILABLE
        seat.employee_id = None
        seat.employee_name = None
        self.db.flush()
        return seat

    # ------------------------------------------------------------------
    # Registry administration
    # ------------------------------------------------------------------

    def list_seats(self, block: Optional[str] = None, status: Optional[SeatStatus] = None) -> List[Seat]:
        query = self.db.query(Seat)
        if block:
            query = query.filter(Seat.block == block)
        if status:
            query = query.filter(Seat.status == status)
        return query.order_by(Seat.workstation_id).all()

    def get_by_employee(self, employee_id: str) -> Seat:
        seat = self.db.query(Seat).filter(Seat.employee_id == employee_id).first()
        if not seat:
            raise NotFound("No desk assigned to this employee")
        return seat

    def bulk_create(self, seats: List[dict]) -> List[Seat]:
        """Seed seats. Rejects the whole batch if any workstation id is taken."""
        if not seats:
            raise InvalidRequest("seats list cannot be empty")

        ids = [s["workstation_id"] for s in seats]
        duplicates = {i for i in ids if ids.count(i) > 1}
        taken = {
            row.workstation_id
            for row in self.db.query(Seat.workstation_id).filter(Seat.workstation_id.in_(ids))
        }
        clash = sorted(duplicates | taken)
        if clash:
            raise InvalidRequest(f"Workstation id(s) already exist: {', '.join(clash)}")

        new_seats = []
        for data in seats:
            data = dict(data)
            # Seeded occupants count as permanent holders of their desk
            if not data.get("status"):
                data["status"] = SeatStatus.PERMANENTLY_ASSIGNED if data.get("employee_id") else SeatStatus.AVAILABLE
            seat = Seat(**data)
            self.db.add(seat)
            new_seats.append(seat)
        self.db.flush()
        return new_seats

    def reset(self) -> int:
        """
        Bulk reset: delete every seat.

        Booking history is kept; rows are detached from their seat and stay
        readable through the denormalized workstation id.
        """
        self.db.query(HotDeskBooking).update({"seat_id": None}, synchronize_session=False)
        count = self.db.query(Seat).delete(synchronize_session=False)
        self.db.flush()
        return count
