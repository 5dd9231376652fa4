"""Quota configuration model for the community-wide dues schedule."""

from datetime import date
from enum import Enum

from sqlalchemy import Date, Integer, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from lotdues.models import Base, BaseModel


class QuotaType(str, Enum):
    """Fund a scheduled quota is owed to."""

    MAINTENANCE = "maintenance"
    WORKS = "works"


class QuotaConfig(Base, BaseModel):
    """Model representing a scheduled due applied uniformly to every lot.

    A quota applies once its due_date has been reached. Quotas without a
    due_date are drafts and never apply.
    """

    __tablename__ = "quota_configs"

    quota_type: Mapped[QuotaType] = mapped_column(
        SQLEnum(QuotaType),
        nullable=False,
        index=True,
    )
    amount: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Amount owed by each lot in smallest currency unit",
    )
    due_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
        index=True,
        comment="Date from which the quota is owed",
    )
    description: Mapped[str] = mapped_column(Text(), nullable=False, default="")

    def __repr__(self) -> str:
        return (
            f"<QuotaConfig(id={self.id}, quota_type={self.quota_type}, "
            f"amount={self.amount}, due_date={self.due_date})>"
        )


__all__ = ["QuotaConfig", "QuotaType"]
