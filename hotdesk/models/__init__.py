
from hotdesk.models.seat import Seat, SeatStatus
from hotdesk.models.booking import HotDeskBooking, TimeSlot, BookingType, BookingStatus
from hotdesk.models.activity import Activity
