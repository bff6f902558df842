from datetime import date, datetime

import pytest

from hotdesk.models.activity import Activity
from hotdesk.models.booking import HotDeskBooking, BookingStatus, BookingType, TimeSlot
from hotdesk.models.seat import SeatStatus
from hotdesk.services.reaper import LifecycleReaper
from hotdesk.services.seat_registry import SeatRegistry

TODAY = date(2024, 6, 10)
YESTERDAY = date(2024, 6, 9)


@pytest.fixture
def reaper(session_factory):
    return LifecycleReaper(session_factory)


@pytest.fixture
def occupied(db, make_seat):
    """A seat held by a live booking, the way the coordinator leaves it."""
    def _occupied(workstation_id, employee_id, booking_date, slot, booking_type=BookingType.TEMPORARY):
        seat = make_seat(
            workstation_id,
            employee_id=employee_id,
            employee_name=f"Name {employee_id}",
            status=SeatStatus.PERMANENTLY_ASSIGNED if booking_type == BookingType.PERMANENT else SeatStatus.OCCUPIED,
        )
        booking = HotDeskBooking(
            seat_id=seat.id,
            workstation_id=workstation_id,
            employee_id=employee_id,
            employee_name=f"Name {employee_id}",
            booking_date=booking_date,
            time_slot=slot,
            booking_type=booking_type,
        )
        db.add(booking)
        db.commit()
        return seat, booking

    return _occupied


def reload(db, *objs):
    db.expire_all()
    for obj in objs:
        db.refresh(obj)


def test_yesterdays_booking_is_completed_and_seat_released(db, reaper, occupied):
    seat, booking = occupied("A-101", "E1", YESTERDAY, TimeSlot.SHIFT_B)

    assert reaper.sweep(now=datetime(2024, 6, 10, 0, 30)) == 1

    reload(db, seat, booking)
    assert booking.status == BookingStatus.COMPLETED
    assert seat.status == SeatStatus.AVAILABLE
    assert seat.employee_id is None
    released = db.query(Activity).filter_by(title="Seat Released").one()
    assert released.message == "Seat A-101 released after hot-desk completion for Name E1"


@pytest.mark.parametrize(
    "slot, still_live, expired",
    [
        (TimeSlot.SHIFT_A, datetime(2024, 6, 10, 13, 59), datetime(2024, 6, 10, 14, 0)),
        (TimeSlot.SHIFT_B, datetime(2024, 6, 10, 21, 59), datetime(2024, 6, 10, 22, 0)),
        (TimeSlot.FULL_DAY, datetime(2024, 6, 10, 19, 59), datetime(2024, 6, 10, 20, 0)),
    ],
)
def test_todays_booking_expires_at_slot_end(db, reaper, occupied, slot, still_live, expired):
    seat, booking = occupied("A-101", "E1", TODAY, slot)

    assert reaper.sweep(now=still_live) == 0
    reload(db, booking)
    assert booking.status == BookingStatus.BOOKED

    assert reaper.sweep(now=expired) == 1
    reload(db, booking, seat)
    assert booking.status == BookingStatus.COMPLETED
    assert seat.status == SeatStatus.AVAILABLE


def test_shift_c_completes_at_six_the_next_morning(db, reaper, occupied):
    seat, booking = occupied("A-101", "E1", TODAY, TimeSlot.SHIFT_C)

    # 06:00 on the booking date is before the shift has even started
    for now in (
        datetime(2024, 6, 10, 6, 0),
        datetime(2024, 6, 10, 22, 30),
        datetime(2024, 6, 11, 0, 0),
        datetime(2024, 6, 11, 5, 30),
    ):
        assert reaper.sweep(now=now) == 0
        reload(db, booking)
        assert booking.status == BookingStatus.BOOKED

    assert reaper.sweep(now=datetime(2024, 6, 11, 6, 0)) == 1
    reload(db, booking, seat)
    assert booking.status == BookingStatus.COMPLETED
    assert seat.status == SeatStatus.AVAILABLE


def test_future_and_permanent_bookings_are_untouched(db, reaper, occupied):
    _, future = occupied("A-101", "E1", date(2024, 6, 11), TimeSlot.SHIFT_A)
    seat, permanent = occupied("B-07", "E3", YESTERDAY, TimeSlot.FULL_DAY, BookingType.PERMANENT)

    assert reaper.sweep(now=datetime(2024, 6, 10, 23, 0)) == 0

    reload(db, future, permanent, seat)
    assert future.status == BookingStatus.BOOKED
    assert permanent.status == BookingStatus.BOOKED
    assert seat.status == SeatStatus.PERMANENTLY_ASSIGNED


def test_seat_taken_by_someone_else_is_left_alone(db, reaper, occupied):
    seat, booking = occupied("A-101", "E1", YESTERDAY, TimeSlot.SHIFT_A)
    seat.employee_id = "E2"
    seat.employee_name = "Name E2"
    db.commit()

    assert reaper.sweep(now=datetime(2024, 6, 10, 9, 0)) == 1

    reload(db, seat, booking)
    assert booking.status == BookingStatus.COMPLETED
    assert seat.status == SeatStatus.OCCUPIED
    assert seat.employee_id == "E2"
    assert db.query(Activity).filter_by(title="Seat Released").count() == 0


def test_cancelled_booking_is_skipped(db, reaper, occupied):
    _, booking = occupied("A-101", "E1", YESTERDAY, TimeSlot.SHIFT_A)
    booking.status = BookingStatus.CANCELLED
    db.commit()

    assert reaper.sweep(now=datetime(2024, 6, 10, 9, 0)) == 0


def test_one_bad_booking_does_not_block_the_rest(db, reaper, occupied, monkeypatch):
    broken_seat, broken = occupied("A-101", "E1", YESTERDAY, TimeSlot.SHIFT_A)
    good_seat, good = occupied("A-102", "E2", YESTERDAY, TimeSlot.SHIFT_A)
    broken_id = broken_seat.id
    original = SeatRegistry.clear_occupant

    def flaky_clear(self, seat_id):
        if seat_id == broken_id:
            raise RuntimeError("seat row locked")
        return original(self, seat_id)

    monkeypatch.setattr(SeatRegistry, "clear_occupant", flaky_clear)

    assert reaper.sweep(now=datetime(2024, 6, 10, 9, 0)) == 1

    reload(db, broken, good, broken_seat, good_seat)
    # The failed booking rolled back as a whole and is retried next sweep
    assert broken.status == BookingStatus.BOOKED
    assert broken_seat.employee_id == "E1"
    assert good.status == BookingStatus.COMPLETED
    assert good_seat.status == SeatStatus.AVAILABLE


def test_second_sweep_is_a_no_op(reaper, occupied):
    occupied("A-101", "E1", YESTERDAY, TimeSlot.SHIFT_A)
    now = datetime(2024, 6, 10, 9, 0)
    assert reaper.sweep(now=now) == 1
    assert reaper.sweep(now=now) == 0
