from typing import Optional
from sqlalchemy import Text, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import JSONB

from dealtracker.db.base import Base

CUSTOM_FIELD_TYPES = ("text", "number", "enum")


class CustomField(Base):
    __tablename__ = "custom_fields"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    type: Mapped[str] = mapped_column(Text, nullable=False)  # text, number, enum
    required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Only set for enum fields
    options: Mapped[Optional[list]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=True
    )
