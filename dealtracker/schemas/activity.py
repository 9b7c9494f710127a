from datetime import datetime
from typing import Any

from dealtracker.schemas.base import CamelModel
from dealtracker.schemas.deal import DealResponse
from dealtracker.schemas.user import UserResponse


class ActivityLogResponse(CamelModel):
    id: int
    deal_id: int
    user_id: int | None = None
    action: str
    details: dict[str, Any] | None = None
    created_at: datetime


class ActivityFeedItem(ActivityLogResponse):
    """Activity entry in the recent-activity feed"""
    deal: DealResponse
    user: UserResponse | None = None
