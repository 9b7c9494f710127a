from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from dealtracker.db.session import get_db
from dealtracker.models import BusinessUnit, Deal, Tag, User
from dealtracker.schemas import (
    DealCreate,
    DealUpdate,
    DealWithRelationsResponse,
    DealDetailResponse,
    DealTagResponse,
    TagResponse,
    GenerateSummaryRequest,
    GenerateSummaryResponse,
    MarketResearchRequest,
    MarketResearchResponse,
    MarketReport,
)
from dealtracker.services.activity import CREATED_DEAL, UPDATED_DEAL, log_activity
from dealtracker.services.ai_generator import DealNarrativeGenerator, get_narrative_generator
from dealtracker.services.custom_fields import (
    CustomFieldValidationError,
    validate_custom_field_values,
)
from dealtracker.services.deal_narratives import (
    generate_deal_market_report,
    refresh_deal_summary,
    should_regenerate_summary,
)
from dealtracker.services.deal_queries import (
    DealFilters,
    add_tag_to_deal,
    get_deal,
    get_deal_tags,
    get_deal_with_relations,
    list_deals,
    missing_tag_ids,
    remove_tag_from_deal,
    replace_deal_tags,
    touch_deal,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/deals", tags=["deals"])


def _get_deal_or_404(db: Session, deal_id: int) -> Deal:
    deal = get_deal(db, deal_id)
    if not deal:
        raise HTTPException(status_code=404, detail="Deal not found")
    return deal


def _check_references(
    db: Session,
    business_unit_id: Optional[int] = None,
    lead_owner_id: Optional[int] = None,
    user_id: Optional[int] = None,
    tag_ids: Optional[List[int]] = None,
) -> None:
    """Reject unknown foreign keys with a 400 before anything is written."""
    if business_unit_id is not None and db.get(BusinessUnit, business_unit_id) is None:
        raise HTTPException(status_code=400, detail=f"Business unit {business_unit_id} does not exist")
    if lead_owner_id is not None and db.get(User, lead_owner_id) is None:
        raise HTTPException(status_code=400, detail=f"Lead owner {lead_owner_id} does not exist")
    if user_id is not None and db.get(User, user_id) is None:
        raise HTTPException(status_code=400, detail=f"User {user_id} does not exist")
    missing = missing_tag_ids(db, tag_ids or [])
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown tag ids: {', '.join(str(tag_id) for tag_id in missing)}"
        )


def _validated_custom_fields(db: Session, values: Optional[dict]) -> dict:
    try:
        return validate_custom_field_values(values, db)
    except CustomFieldValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=List[DealWithRelationsResponse])
def list_deals_endpoint(
    lead_owner_id: Optional[int] = Query(None, alias="leadOwnerId"),
    business_unit_id: Optional[int] = Query(None, alias="businessUnitId"),
    stage: Optional[str] = None,
    deal_type: Optional[str] = Query(None, alias="dealType"),
    search: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    List deals with optional filters, most recently updated first.
    stage=active / stage=closed select open and closed deals respectively.
    """
    filters = DealFilters(
        lead_owner_id=lead_owner_id,
        business_unit_id=business_unit_id,
        stage=stage,
        deal_type=deal_type,
        search=search,
    )
    return list_deals(db, filters)


@router.get("/{deal_id}", response_model=DealDetailResponse)
def get_deal_endpoint(deal_id: int, db: Session = Depends(get_db)):
    """Get a deal with its business unit, lead owner, tags, resources and comments"""
    deal = get_deal_with_relations(db, deal_id)
    if not deal:
        raise HTTPException(status_code=404, detail="Deal not found")
    return deal


@router.post("", response_model=DealWithRelationsResponse, status_code=201)
def create_deal(
    deal: DealCreate,
    db: Session = Depends(get_db),
    generator: DealNarrativeGenerator = Depends(get_narrative_generator),
):
    """
    Create a deal, link its tags and log the activity in one transaction.
    When notes are supplied an AI summary is generated before responding.
    """
    _check_references(
        db,
        business_unit_id=deal.business_unit_id,
        lead_owner_id=deal.lead_owner_id,
        user_id=deal.user_id,
        tag_ids=deal.tag_ids,
    )
    deal_data = deal.model_dump(exclude={"tag_ids", "user_id"})
    deal_data["custom_field_values"] = _validated_custom_fields(db, deal.custom_field_values)

    db_deal = Deal(**deal_data)
    db.add(db_deal)
    db.flush()

    for tag_id in dict.fromkeys(deal.tag_ids):
        add_tag_to_deal(db, db_deal.id, tag_id)

    log_activity(
        db, db_deal.id, CREATED_DEAL, user_id=deal.user_id,
        details={"deal": deal.model_dump(mode="json", by_alias=True, exclude={"user_id"})},
    )
    db.commit()
    logger.info(f"Created deal {db_deal.id} ({db_deal.company})")

    deal_id = db_deal.id
    if deal.notes:
        refresh_deal_summary(db, get_deal_with_relations(db, deal_id), generator, user_id=deal.user_id)

    return get_deal_with_relations(db, deal_id)


@router.put("/{deal_id}", response_model=DealWithRelationsResponse)
def update_deal(
    deal_id: int,
    deal_update: DealUpdate,
    db: Session = Depends(get_db),
    generator: DealNarrativeGenerator = Depends(get_narrative_generator),
):
    """
    Partially update a deal. tagIds, when present, replaces the tag set.
    Touching notes, company, dealType, useCase or businessUnitId regenerates
    the AI summary.
    """
    deal = _get_deal_or_404(db, deal_id)

    update_data = deal_update.model_dump(exclude_unset=True, exclude={"tag_ids", "user_id"})
    _check_references(
        db,
        business_unit_id=update_data.get("business_unit_id"),
        lead_owner_id=update_data.get("lead_owner_id"),
        user_id=deal_update.user_id,
        tag_ids=deal_update.tag_ids,
    )
    if "custom_field_values" in update_data:
        update_data["custom_field_values"] = _validated_custom_fields(
            db, update_data["custom_field_values"]
        )

    for field, value in update_data.items():
        setattr(deal, field, value)

    if deal_update.tag_ids is not None:
        replace_deal_tags(db, deal_id, deal_update.tag_ids)

    touch_deal(deal)
    log_activity(
        db, deal_id, UPDATED_DEAL, user_id=deal_update.user_id,
        details={
            "changes": deal_update.model_dump(
                mode="json", by_alias=True, exclude_unset=True, exclude={"user_id"}
            )
        },
    )
    db.commit()
    logger.info(f"Updated deal {deal_id}: {sorted(update_data)}")

    if should_regenerate_summary(update_data):
        refresh_deal_summary(
            db, get_deal_with_relations(db, deal_id), generator, user_id=deal_update.user_id
        )

    return get_deal_with_relations(db, deal_id)


@router.delete("/{deal_id}", status_code=204)
def delete_deal(deal_id: int, db: Session = Depends(get_db)):
    """Delete a deal along with its tag links, resources, comments and activity"""
    deal = _get_deal_or_404(db, deal_id)

    db.delete(deal)
    db.commit()
    logger.info(f"Deleted deal {deal_id}")
    return None


@router.get("/{deal_id}/tags", response_model=List[TagResponse])
def list_deal_tags(deal_id: int, db: Session = Depends(get_db)):
    """List the tags attached to a deal"""
    _get_deal_or_404(db, deal_id)
    return get_deal_tags(db, deal_id)


@router.post("/{deal_id}/tags/{tag_id}", response_model=DealTagResponse, status_code=201)
def link_tag(deal_id: int, tag_id: int, db: Session = Depends(get_db)):
    """Attach a tag to a deal. Repeating the call returns the existing link."""
    deal = _get_deal_or_404(db, deal_id)
    if db.get(Tag, tag_id) is None:
        raise HTTPException(status_code=404, detail="Tag not found")

    deal_tag = add_tag_to_deal(db, deal_id, tag_id)
    touch_deal(deal)
    db.commit()
    db.refresh(deal_tag)
    return deal_tag


@router.delete("/{deal_id}/tags/{tag_id}", status_code=204)
def unlink_tag(deal_id: int, tag_id: int, db: Session = Depends(get_db)):
    """Detach a tag from a deal"""
    if not remove_tag_from_deal(db, deal_id, tag_id):
        raise HTTPException(status_code=404, detail="Deal tag not found")

    deal = get_deal(db, deal_id)
    if deal:
        touch_deal(deal)
    db.commit()
    return None


@router.post("/{deal_id}/generate-summary", response_model=GenerateSummaryResponse)
def generate_summary(
    deal_id: int,
    payload: Optional[GenerateSummaryRequest] = None,
    db: Session = Depends(get_db),
    generator: DealNarrativeGenerator = Depends(get_narrative_generator),
):
    """Regenerate the AI summary from the deal's current state"""
    deal = get_deal_with_relations(db, deal_id)
    if not deal:
        raise HTTPException(status_code=404, detail="Deal not found")

    user_id = payload.user_id if payload else None
    _check_references(db, user_id=user_id)

    logger.info(f"Manual summary generation requested for deal {deal_id}")
    summary = refresh_deal_summary(db, deal, generator, user_id=user_id)
    return GenerateSummaryResponse(ai_summary=summary)


@router.post("/{deal_id}/generate-market-research", response_model=MarketResearchResponse)
def generate_market_research(
    deal_id: int,
    payload: Optional[MarketResearchRequest] = None,
    db: Session = Depends(get_db),
    generator: DealNarrativeGenerator = Depends(get_narrative_generator),
):
    """
    Generate a market research report for the deal.
    The full report is returned; the deal only keeps a label referencing it.
    """
    deal = get_deal_with_relations(db, deal_id)
    if not deal:
        raise HTTPException(status_code=404, detail="Deal not found")

    payload = payload or MarketResearchRequest()
    _check_references(db, user_id=payload.user_id)

    logger.info(f"Market research requested for deal {deal_id}")
    report = generate_deal_market_report(
        db, deal, generator, industry=payload.industry, user_id=payload.user_id
    )
    return MarketResearchResponse(report=MarketReport(content=report))
