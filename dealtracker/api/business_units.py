from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
import logging

from dealtracker.api.common import commit_unique_name
from dealtracker.db.session import get_db
from dealtracker.models import BusinessUnit
from dealtracker.schemas import BusinessUnitCreate, BusinessUnitUpdate, BusinessUnitResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/business-units", tags=["business-units"])


@router.get("", response_model=List[BusinessUnitResponse])
def list_business_units(db: Session = Depends(get_db)):
    """List all business units"""
    return db.query(BusinessUnit).order_by(BusinessUnit.id).all()


@router.get("/{unit_id}", response_model=BusinessUnitResponse)
def get_business_unit(unit_id: int, db: Session = Depends(get_db)):
    """Get a specific business unit by ID"""
    unit = db.query(BusinessUnit).filter(BusinessUnit.id == unit_id).first()
    if not unit:
        raise HTTPException(status_code=404, detail="Business unit not found")
    return unit


@router.post("", response_model=BusinessUnitResponse, status_code=201)
def create_business_unit(unit: BusinessUnitCreate, db: Session = Depends(get_db)):
    """Create a new business unit"""
    db_unit = BusinessUnit(**unit.model_dump())
    db.add(db_unit)
    commit_unique_name(db, "Business unit", unit.name)
    db.refresh(db_unit)
    logger.info(f"Created business unit {db_unit.id}")
    return db_unit


@router.put("/{unit_id}", response_model=BusinessUnitResponse)
def update_business_unit(
    unit_id: int,
    unit_update: BusinessUnitUpdate,
    db: Session = Depends(get_db)
):
    """Update a business unit"""
    unit = db.query(BusinessUnit).filter(BusinessUnit.id == unit_id).first()
    if not unit:
        raise HTTPException(status_code=404, detail="Business unit not found")

    update_data = unit_update.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(unit, field, value)

    commit_unique_name(db, "Business unit", update_data.get("name"))
    db.refresh(unit)
    return unit


@router.delete("/{unit_id}", status_code=204)
def delete_business_unit(unit_id: int, db: Session = Depends(get_db)):
    """Delete a business unit. Deals in the unit keep existing without one."""
    unit = db.query(BusinessUnit).filter(BusinessUnit.id == unit_id).first()
    if not unit:
        raise HTTPException(status_code=404, detail="Business unit not found")

    db.delete(unit)
    db.commit()
    logger.info(f"Deleted business unit {unit_id}")
    return None
