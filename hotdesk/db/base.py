
from hotdesk.db.session import Base
from hotdesk.models.seat import Seat
from hotdesk.models.booking import HotDeskBooking
from hotdesk.models.activity import Activity
