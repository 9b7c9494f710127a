"""
AI-derived narrative fields on deals.

The summary is regenerated on deal creation (when notes are given), on any
update touching a summary field, and on explicit request. Market research is
only produced on explicit request; the report body goes back to the caller and
the deal keeps just a label pointing at it.
"""
import logging
from typing import Any, Dict, Iterable, Optional

from sqlalchemy.orm import Session

from dealtracker.models import Deal
from dealtracker.services.activity import (
    GENERATED_MARKET_RESEARCH,
    GENERATED_SUMMARY,
    log_activity,
)
from dealtracker.services.ai_generator import DealNarrativeGenerator, is_fallback_text

logger = logging.getLogger(__name__)

# Updates touching any of these regenerate the summary
SUMMARY_TRIGGER_FIELDS = frozenset(
    {"notes", "company", "deal_type", "use_case", "business_unit_id"}
)


def should_regenerate_summary(changed_fields: Iterable[str]) -> bool:
    return not SUMMARY_TRIGGER_FIELDS.isdisjoint(changed_fields)


def market_report_label(deal: Deal) -> str:
    return f"Generated Market Report: {deal.company}"


def build_deal_context(deal: Deal) -> Dict[str, Any]:
    """Build context dictionary from a deal loaded with its relations"""
    return {
        "company": deal.company,
        "website": deal.website,
        "internal_contact": deal.internal_contact,
        "business_unit": deal.business_unit.name if deal.business_unit else None,
        "deal_type": deal.deal_type,
        "investment_size": deal.investment_size,
        "use_case": deal.use_case,
        "notes": deal.notes,
        "tags": [tag.name for tag in deal.tags],
    }


def refresh_deal_summary(
    db: Session,
    deal: Deal,
    generator: DealNarrativeGenerator,
    user_id: Optional[int] = None,
) -> str:
    """
    Regenerate and store ``deal.ai_summary`` from the deal's current state.

    Generation failures store the fallback text instead. An activity row is
    appended only when generation succeeded. ``last_updated`` is left alone.
    """
    summary = generator.generate_deal_summary(build_deal_context(deal))
    deal.ai_summary = summary

    if is_fallback_text(summary):
        logger.warning(f"Stored fallback summary for deal {deal.id}")
    else:
        log_activity(db, deal.id, GENERATED_SUMMARY, user_id=user_id)

    db.commit()
    logger.info(f"Refreshed AI summary for deal {deal.id}")
    return summary


def generate_deal_market_report(
    db: Session,
    deal: Deal,
    generator: DealNarrativeGenerator,
    industry: Optional[str] = None,
    user_id: Optional[int] = None,
) -> str:
    """
    Produce a market research report for the deal and return its body.

    Only a label is persisted on ``deal.ai_market_report_link``.
    """
    context = build_deal_context(deal)
    context["industry"] = industry
    report = generator.generate_market_research(context)

    deal.ai_market_report_link = market_report_label(deal)
    if is_fallback_text(report):
        logger.warning(f"Market research for deal {deal.id} fell back to placeholder text")
    else:
        log_activity(
            db, deal.id, GENERATED_MARKET_RESEARCH, user_id=user_id,
            details={"industry": industry} if industry else None,
        )

    db.commit()
    logger.info(f"Generated market research for deal {deal.id} ({len(report)} chars)")
    return report
