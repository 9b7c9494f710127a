from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dealtracker.db.base import Base


class BusinessUnit(Base):
    __tablename__ = "business_units"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    color: Mapped[str] = mapped_column(Text, nullable=False)  # display hint, e.g. "#0747A6"

    deals: Mapped[list["Deal"]] = relationship("Deal", back_populates="business_unit")
