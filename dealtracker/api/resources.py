from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
import logging

from dealtracker.db.session import get_db
from dealtracker.models import Deal, Resource, User
from dealtracker.schemas import ResourceCreate, ResourceResponse
from dealtracker.services.activity import ADDED_RESOURCE, log_activity
from dealtracker.services.deal_queries import touch_deal

logger = logging.getLogger(__name__)

router = APIRouter(tags=["resources"])


@router.get("/deals/{deal_id}/resources", response_model=List[ResourceResponse])
def list_resources(deal_id: int, db: Session = Depends(get_db)):
    """List the files and links attached to a deal"""
    deal = db.query(Deal).filter(Deal.id == deal_id).first()
    if not deal:
        raise HTTPException(status_code=404, detail="Deal not found")

    return (
        db.query(Resource)
        .filter(Resource.deal_id == deal_id)
        .order_by(Resource.created_at.desc(), Resource.id.desc())
        .all()
    )


@router.post("/deals/{deal_id}/resources", response_model=ResourceResponse, status_code=201)
def create_resource(
    deal_id: int,
    resource_data: ResourceCreate,
    db: Session = Depends(get_db)
):
    """Attach a file or link to a deal"""
    deal = db.query(Deal).filter(Deal.id == deal_id).first()
    if not deal:
        raise HTTPException(status_code=404, detail="Deal not found")
    if resource_data.user_id is not None and db.get(User, resource_data.user_id) is None:
        raise HTTPException(status_code=400, detail=f"User {resource_data.user_id} does not exist")

    resource = Resource(deal_id=deal_id, **resource_data.model_dump(exclude={"user_id"}))
    db.add(resource)
    db.flush()

    log_activity(
        db, deal_id, ADDED_RESOURCE, user_id=resource_data.user_id,
        details={"resource": resource_data.model_dump(mode="json", exclude={"user_id"})},
    )
    touch_deal(deal)
    db.commit()
    db.refresh(resource)

    logger.info(f"Created resource {resource.id} for deal {deal_id}")
    return resource


@router.delete("/resources/{resource_id}", status_code=204)
def delete_resource(resource_id: int, db: Session = Depends(get_db)):
    """Delete a resource"""
    resource = db.query(Resource).filter(Resource.id == resource_id).first()
    if not resource:
        raise HTTPException(status_code=404, detail="Resource not found")

    db.delete(resource)
    db.commit()

    logger.info(f"Deleted resource {resource_id}")
    return None
