from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from dealtracker.db.session import get_db
from dealtracker.schemas import ActivityFeedItem, DashboardStats
from dealtracker.services.activity import get_recent_activity
from dealtracker.services.dashboard import get_dashboard_stats

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard/stats", response_model=DashboardStats)
def dashboard_stats(db: Session = Depends(get_db)):
    """Deal counts and total investment for the dashboard"""
    return DashboardStats(**get_dashboard_stats(db))


@router.get("/activity", response_model=List[ActivityFeedItem])
def recent_activity(
    limit: int = Query(10, ge=1, le=200),
    db: Session = Depends(get_db)
):
    """Most recent activity across all deals"""
    return get_recent_activity(db, limit)
