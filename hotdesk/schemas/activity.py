
from pydantic import UUID4
from datetime import datetime
from typing import Optional

from hotdesk.schemas.common import CamelModel


class Activity(CamelModel):
    id: UUID4
    title: str
    message: str
    icon: str
    color: str
    category: str
    details: Optional[str] = ""
    created_at: Optional[datetime] = None
