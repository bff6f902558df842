
from hotdesk.schemas.common import CamelModel, MessageResponse, ErrorResponse
from hotdesk.schemas.seat import Seat, SeatCreate, SeatBulkCreate, SeatBulkCreateResponse
from hotdesk.schemas.booking import Booking, BookingCreate, BookingCancelResponse
from hotdesk.schemas.activity import Activity
