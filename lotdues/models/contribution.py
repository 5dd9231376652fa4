"""Contribution model - lot payment records."""

from datetime import date as date_type
from enum import Enum

from sqlalchemy import Date, ForeignKey, Integer, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lotdues.models import Base, BaseModel


class FundType(str, Enum):
    """Fund a contribution is credited to."""

    MAINTENANCE = "maintenance"
    WORKS = "works"
    OTHERS = "others"


class Contribution(Base, BaseModel):
    """Lot contribution (payment) record.

    Attributes:
        lot_id: Lot making the payment
        type: Fund the payment belongs to (never split across funds)
        amount: Amount in smallest currency unit
        date: Date of payment
        description: Free-text notes
        receipt_number: Optional receipt reference
    """

    __tablename__ = "contributions"

    lot_id: Mapped[str] = mapped_column(
        ForeignKey("lots.id"), nullable=False, index=True
    )
    type: Mapped[FundType] = mapped_column(SQLEnum(FundType), nullable=False, index=True)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(Text(), nullable=False, default="")
    receipt_number: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Relationships
    lot: Mapped["Lot"] = relationship("Lot", back_populates="contributions")  # noqa: F821

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<Contribution(id={self.id}, lot_id={self.lot_id!r}, "
            f"type={self.type}, amount={self.amount})>"
        )
