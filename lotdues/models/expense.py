"""Expense model - general community expense records."""

from datetime import date as date_type
from enum import Enum

from sqlalchemy import Date, Integer, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from lotdues.models import Base, BaseModel


class ExpenseType(str, Enum):
    """Fund an expense was recorded against."""

    MAINTENANCE = "maintenance"
    WORKS = "works"


class Expense(Base, BaseModel):
    """Community expense record, not attributable to a single lot.

    Expenses only reduce the consolidated balance; per-fund balances are
    income-only.

    Attributes:
        type: Fund the expense was recorded against
        amount: Amount in smallest currency unit
        date: Date of expense
        category: Grouping label (e.g. gardening, security)
        description: Detailed description
        receipt_number: Optional receipt reference
    """

    __tablename__ = "expenses"

    type: Mapped[ExpenseType] = mapped_column(SQLEnum(ExpenseType), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text(), nullable=False, default="")
    receipt_number: Mapped[str | None] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Expense(id={self.id}, amount={self.amount}, type={self.type})>"
