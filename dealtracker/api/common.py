from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session


def commit_unique_name(db: Session, entity: str, name: str | None) -> None:
    """Commit, turning a unique-name violation into a 400."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"{entity} '{name}' already exists")
