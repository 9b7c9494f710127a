from typing import Generator

from sqlalchemy.orm import Session

from dealtracker.db.database import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session for FastAPI ``Depends()``."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
