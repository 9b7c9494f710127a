from datetime import datetime
from typing import Optional
from sqlalchemy import Text, DateTime, Integer, BigInteger, ForeignKey, JSON, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import JSONB

from dealtracker.db.base import Base, utcnow


class DealStage:
    """Conventional stage labels. The column itself accepts any string."""
    INITIAL_CONTACT = "Initial Contact"
    FOLLOWING = "Following"
    DISCOVERY = "Discovery"
    PROPOSAL = "Proposal"
    DUE_DILIGENCE = "Due Diligence"
    NEGOTIATION = "Negotiation"
    CLOSED = "Closed"
    CLOSED_WON = "Closed Won"
    CLOSED_LOST = "Closed Lost"


# Filter pseudo-values, never stored
STAGE_FILTER_ACTIVE = "active"
STAGE_FILTER_CLOSED = "closed"

CLOSED_STAGES = (DealStage.CLOSED_WON, DealStage.CLOSED_LOST)


class Deal(Base):
    __tablename__ = "deals"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    company: Mapped[str] = mapped_column(Text, nullable=False)
    website: Mapped[str | None] = mapped_column(Text, nullable=True)
    internal_contact: Mapped[str | None] = mapped_column(Text, nullable=True)
    business_unit_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("business_units.id", ondelete="SET NULL"), nullable=True
    )
    deal_type: Mapped[str] = mapped_column(Text, nullable=False)
    investment_size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)  # USD
    use_case: Mapped[str | None] = mapped_column(Text, nullable=True)
    lead_owner_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    stage: Mapped[str] = mapped_column(Text, nullable=False, default=DealStage.FOLLOWING)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    ai_summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    ai_market_report_link: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    custom_field_values: Mapped[Optional[dict]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=True
    )

    # Relationships
    business_unit: Mapped[Optional["BusinessUnit"]] = relationship(
        "BusinessUnit", back_populates="deals"
    )
    lead_owner: Mapped[Optional["User"]] = relationship("User", back_populates="deals")
    deal_tags: Mapped[list["DealTag"]] = relationship(
        "DealTag", back_populates="deal", cascade="all, delete-orphan"
    )
    tags: Mapped[list["Tag"]] = relationship("Tag", secondary="deal_tags", viewonly=True)
    resources: Mapped[list["Resource"]] = relationship(
        "Resource", back_populates="deal", cascade="all, delete-orphan"
    )
    comments: Mapped[list["Comment"]] = relationship(
        "Comment", back_populates="deal", cascade="all, delete-orphan",
        order_by="Comment.created_at.desc()",
    )
    activity_logs: Mapped[list["ActivityLog"]] = relationship(
        "ActivityLog", back_populates="deal", cascade="all, delete-orphan"
    )
