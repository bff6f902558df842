
from typing import List

from fastapi import APIRouter, Depends, Query

from hotdesk.api.deps import get_activity_log
from hotdesk.services.activity_log import ActivityLog
from hotdesk.schemas.activity import Activity as ActivitySchema

router = APIRouter(prefix="/activities", tags=["Activities"])


@router.get("/", response_model=List[ActivitySchema])
def recent_activities(
    limit: int = Query(20, ge=1, le=100),
    activity: ActivityLog = Depends(get_activity_log),
):
    """Most recent reservation activity, newest first."""
    return activity.recent(limit)
