"""
Deal reads and tag-link writes.

Every read returns deals with the same enrichment: business unit, lead owner,
tags and resources. The single-deal read also carries comments with their
authors. Relations are batch-loaded with ``selectinload`` so a listing costs a
fixed number of queries regardless of how many deals match.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload

from dealtracker.db.base import utcnow
from dealtracker.models import Comment, Deal, DealTag, Tag
from dealtracker.models.deal import CLOSED_STAGES, STAGE_FILTER_ACTIVE, STAGE_FILTER_CLOSED

logger = logging.getLogger(__name__)


@dataclass
class DealFilters:
    lead_owner_id: Optional[int] = None
    business_unit_id: Optional[int] = None
    stage: Optional[str] = None
    deal_type: Optional[str] = None
    search: Optional[str] = None


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches as a literal substring."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _with_relations(query):
    return query.options(
        joinedload(Deal.business_unit),
        joinedload(Deal.lead_owner),
        selectinload(Deal.tags),
        selectinload(Deal.resources),
    )


def list_deals(db: Session, filters: DealFilters | None = None) -> List[Deal]:
    """
    List deals matching every active filter, most recently updated first.

    ``stage`` accepts two pseudo-values: "active" (anything but Closed Won /
    Closed Lost) and "closed" (exactly those two). Any other value is matched
    literally. ``search`` is a case-insensitive substring match across
    company, stage, deal type, notes, use case and internal contact.
    """
    filters = filters or DealFilters()
    query = _with_relations(db.query(Deal))

    if filters.lead_owner_id is not None:
        query = query.filter(Deal.lead_owner_id == filters.lead_owner_id)
    if filters.business_unit_id is not None:
        query = query.filter(Deal.business_unit_id == filters.business_unit_id)
    if filters.stage:
        if filters.stage == STAGE_FILTER_ACTIVE:
            query = query.filter(Deal.stage.notin_(CLOSED_STAGES))
        elif filters.stage == STAGE_FILTER_CLOSED:
            query = query.filter(Deal.stage.in_(CLOSED_STAGES))
        else:
            query = query.filter(Deal.stage == filters.stage)
    if filters.deal_type:
        query = query.filter(Deal.deal_type == filters.deal_type)
    if filters.search:
        search_term = f"%{escape_like(filters.search)}%"
        query = query.filter(
            or_(
                Deal.company.ilike(search_term, escape="\\"),
                Deal.stage.ilike(search_term, escape="\\"),
                Deal.deal_type.ilike(search_term, escape="\\"),
                Deal.notes.ilike(search_term, escape="\\"),
                Deal.use_case.ilike(search_term, escape="\\"),
                Deal.internal_contact.ilike(search_term, escape="\\"),
            )
        )

    return query.order_by(Deal.last_updated.desc(), Deal.id.desc()).all()


def get_deal(db: Session, deal_id: int) -> Deal | None:
    """Fetch a bare deal row, or None."""
    return db.query(Deal).filter(Deal.id == deal_id).first()


def get_deal_with_relations(db: Session, deal_id: int) -> Deal | None:
    """
    Fetch one deal with business unit, lead owner, tags, resources and
    comments (each with its author). Returns None when the id is unknown.
    """
    return (
        _with_relations(db.query(Deal))
        .options(selectinload(Deal.comments).joinedload(Comment.user))
        .filter(Deal.id == deal_id)
        .first()
    )


def touch_deal(deal: Deal) -> None:
    deal.last_updated = utcnow()


def get_deal_tags(db: Session, deal_id: int) -> List[Tag]:
    return (
        db.query(Tag)
        .join(DealTag, DealTag.tag_id == Tag.id)
        .filter(DealTag.deal_id == deal_id)
        .all()
    )


def add_tag_to_deal(db: Session, deal_id: int, tag_id: int) -> DealTag:
    """
    Link a tag to a deal. Idempotent: an existing link is returned as-is, so
    repeating the call never creates a second junction row.
    """
    existing = (
        db.query(DealTag)
        .filter(DealTag.deal_id == deal_id, DealTag.tag_id == tag_id)
        .first()
    )
    if existing:
        return existing

    deal_tag = DealTag(deal_id=deal_id, tag_id=tag_id)
    db.add(deal_tag)
    db.flush()
    return deal_tag


def remove_tag_from_deal(db: Session, deal_id: int, tag_id: int) -> bool:
    """Delete the (deal, tag) link. Returns False when no link existed."""
    deleted = (
        db.query(DealTag)
        .filter(DealTag.deal_id == deal_id, DealTag.tag_id == tag_id)
        .delete(synchronize_session="fetch")
    )
    return deleted > 0


def replace_deal_tags(db: Session, deal_id: int, tag_ids: Iterable[int]) -> None:
    """Make the deal's tag set exactly ``tag_ids``."""
    wanted = set(tag_ids)
    current = {
        deal_tag.tag_id
        for deal_tag in db.query(DealTag).filter(DealTag.deal_id == deal_id).all()
    }
    for tag_id in current - wanted:
        remove_tag_from_deal(db, deal_id, tag_id)
    for tag_id in wanted - current:
        add_tag_to_deal(db, deal_id, tag_id)


def missing_tag_ids(db: Session, tag_ids: Iterable[int]) -> List[int]:
    """Return the ids in ``tag_ids`` that have no Tag row."""
    wanted = set(tag_ids)
    if not wanted:
        return []
    found = {row.id for row in db.query(Tag.id).filter(Tag.id.in_(wanted)).all()}
    return sorted(wanted - found)
