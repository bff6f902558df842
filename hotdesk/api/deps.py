
from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from hotdesk.core.exceptions import HotDeskError
from hotdesk.db.session import get_db
from hotdesk.services.activity_log import ActivityLog
from hotdesk.services.availability import AvailabilityResolver
from hotdesk.services.booking_ledger import BookingLedger
from hotdesk.services.coordinator import BookingCoordinator
from hotdesk.services.seat_registry import SeatRegistry


# Service objects are built per request around the request's session


def get_seat_registry(db: Session = Depends(get_db)) -> SeatRegistry:
    return SeatRegistry(db)


def get_booking_ledger(db: Session = Depends(get_db)) -> BookingLedger:
    return BookingLedger(db)


def get_activity_log(db: Session = Depends(get_db)) -> ActivityLog:
    return ActivityLog(db)


def get_availability_resolver(
    registry: SeatRegistry = Depends(get_seat_registry),
    ledger: BookingLedger = Depends(get_booking_ledger),
) -> AvailabilityResolver:
    return AvailabilityResolver(registry, ledger)


def get_booking_coordinator(
    db: Session = Depends(get_db),
    registry: SeatRegistry = Depends(get_seat_registry),
    ledger: BookingLedger = Depends(get_booking_ledger),
    activity: ActivityLog = Depends(get_activity_log),
) -> BookingCoordinator:
    return BookingCoordinator(db, registry, ledger, activity)


def http_error(exc: HotDeskError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)
