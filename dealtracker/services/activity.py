import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from dealtracker.models import ActivityLog

logger = logging.getLogger(__name__)

# Activity labels
CREATED_DEAL = "Created deal"
UPDATED_DEAL = "Updated deal"
ADDED_RESOURCE = "Added resource"
ADDED_COMMENT = "Added comment"
GENERATED_SUMMARY = "Generated AI summary"
GENERATED_MARKET_RESEARCH = "Generated market research"


def log_activity(
    db: Session,
    deal_id: int,
    action: str,
    user_id: Optional[int] = None,
    details: Optional[Dict[str, Any]] = None,
) -> ActivityLog:
    """Append an activity row. The caller owns the commit."""
    entry = ActivityLog(deal_id=deal_id, user_id=user_id, action=action, details=details or {})
    db.add(entry)
    db.flush()
    logger.debug(f"Logged activity '{action}' for deal {deal_id}")
    return entry


def get_recent_activity(db: Session, limit: int = 10) -> List[ActivityLog]:
    """Most recent activity entries first, each with its deal and user loaded."""
    return (
        db.query(ActivityLog)
        .options(joinedload(ActivityLog.deal), joinedload(ActivityLog.user))
        .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
        .limit(limit)
        .all()
    )
