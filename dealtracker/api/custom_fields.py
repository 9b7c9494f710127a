from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from dealtracker.api.common import commit_unique_name
from dealtracker.db.session import get_db
from dealtracker.models import CustomField
from dealtracker.schemas import CustomFieldCreate, CustomFieldUpdate, CustomFieldResponse

router = APIRouter(prefix="/custom-fields", tags=["custom-fields"])


@router.get("", response_model=List[CustomFieldResponse])
def list_custom_fields(db: Session = Depends(get_db)):
    """List all custom field definitions"""
    return db.query(CustomField).order_by(CustomField.id).all()


@router.get("/{field_id}", response_model=CustomFieldResponse)
def get_custom_field(field_id: int, db: Session = Depends(get_db)):
    """Get a specific custom field by ID"""
    field = db.query(CustomField).filter(CustomField.id == field_id).first()
    if not field:
        raise HTTPException(status_code=404, detail="Custom field not found")
    return field


@router.post("", response_model=CustomFieldResponse, status_code=201)
def create_custom_field(field: CustomFieldCreate, db: Session = Depends(get_db)):
    """Create a new custom field definition"""
    db_field = CustomField(**field.model_dump())
    db.add(db_field)
    commit_unique_name(db, "Custom field", field.name)
    db.refresh(db_field)
    return db_field


@router.put("/{field_id}", response_model=CustomFieldResponse)
def update_custom_field(
    field_id: int,
    field_update: CustomFieldUpdate,
    db: Session = Depends(get_db)
):
    """
    Update a custom field definition.
    Switching to enum requires options; switching away from enum clears them.
    """
    field = db.query(CustomField).filter(CustomField.id == field_id).first()
    if not field:
        raise HTTPException(status_code=404, detail="Custom field not found")

    update_data = field_update.model_dump(exclude_unset=True)
    for key in ("name", "type", "required"):
        if key in update_data and update_data[key] is None:
            raise HTTPException(status_code=400, detail=f"{key}: may not be null")

    for key, value in update_data.items():
        setattr(field, key, value)

    if field.type == "enum":
        if not field.options:
            db.rollback()
            raise HTTPException(status_code=400, detail="enum fields require a non-empty options list")
    else:
        field.options = None

    commit_unique_name(db, "Custom field", update_data.get("name"))
    db.refresh(field)
    return field


@router.delete("/{field_id}", status_code=204)
def delete_custom_field(field_id: int, db: Session = Depends(get_db)):
    """Delete a custom field definition. Stored deal values are left as-is."""
    field = db.query(CustomField).filter(CustomField.id == field_id).first()
    if not field:
        raise HTTPException(status_code=404, detail="Custom field not found")

    db.delete(field)
    db.commit()
    return None
