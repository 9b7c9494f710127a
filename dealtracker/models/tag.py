from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dealtracker.db.base import Base


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)

    deal_tags: Mapped[list["DealTag"]] = relationship(
        "DealTag", back_populates="tag", cascade="all, delete-orphan"
    )
