from sqlalchemy import Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dealtracker.db.base import Base


class DealTag(Base):
    __tablename__ = "deal_tags"
    __table_args__ = (UniqueConstraint("deal_id", "tag_id", name="uq_deal_tag"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    deal_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("deals.id", ondelete="CASCADE"), nullable=False
    )
    tag_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False
    )

    # Relationships
    deal: Mapped["Deal"] = relationship("Deal", back_populates="deal_tags")
    tag: Mapped["Tag"] = relationship("Tag", back_populates="deal_tags")
