import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotdesk.models.activity import Activity

logger = logging.getLogger(__name__)


class ActivityLog:
    """Writes audit records to the activity feed.

    Emission never fails the caller: a booking that has already been
    committed must not be reported as failed because its audit row could
    not be written.
    """

    def __init__(self, db: Session):
        self.db = db

    def log(
        self,
        title: str,
        message: str,
        icon: str,
        color: str,
        category: str = "reservation",
        details: str = "",
    ) -> None:
        try:
            self.db.add(Activity(
                title=title,
                message=message,
                icon=icon,
                color=color,
                category=category,
                details=details,
            ))
            self.db.commit()
            logger.info("Activity logged: %s", title)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to log activity: %s", title)

    def recent(self, limit: int = 20):
        return (
            self.db.query(Activity)
            .order_by(Activity.created_at.desc())
            .limit(limit)
            .all()
        )
