from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from dealtracker.db.base import utcnow
from dealtracker.models import Deal
from dealtracker.models.deal import DealStage


def first_day_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def get_dashboard_stats(db: Session, now: datetime | None = None) -> dict:
    """
    Aggregate counters for the dashboard header.

    closedThisMonth counts "Closed Won" deals touched since the first day of
    the current (UTC) month.
    """
    month_start = first_day_of_month(now or utcnow())

    total_deals = db.query(func.count(Deal.id)).scalar()
    active_negotiations = (
        db.query(func.count(Deal.id))
        .filter(Deal.stage == DealStage.NEGOTIATION)
        .scalar()
    )
    total_investment = (
        db.query(func.coalesce(func.sum(Deal.investment_size), 0))
        .filter(Deal.investment_size.isnot(None))
        .scalar()
    )
    closed_this_month = (
        db.query(func.count(Deal.id))
        .filter(Deal.stage == DealStage.CLOSED_WON, Deal.last_updated >= month_start)
        .scalar()
    )

    return {
        "total_deals": total_deals or 0,
        "active_negotiations": active_negotiations or 0,
        "total_investment": int(total_investment or 0),
        "closed_this_month": closed_this_month or 0,
    }
