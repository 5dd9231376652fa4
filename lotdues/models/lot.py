"""Lot ORM model for community parcels with legacy works debt and exemption status."""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lotdues.models import Base, BaseModel


class Lot(Base, BaseModel):
    """Model representing a parcel of the community and its owner.

    The initial_works_debt field holds debt that predates the quota schedule. It is
    always attributed to the works fund when a lot's debt is broken down by fund.

    Exempt lots still count as income when they contribute, but they are excluded
    from every outstanding-balance and payment-status computation.
    """

    __tablename__ = "lots"

    # Stable identifier chosen by the administrator (e.g. "22", "E2-1")
    id: Mapped[str] = mapped_column(String(50), primary_key=True)

    lot_number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
        comment="Display number of the lot",
    )
    owner: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    owner_email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    # Amount in smallest currency unit
    initial_works_debt: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
        comment="Debt from works carried over from before the quota schedule",
    )

    is_exempt: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        index=True,
        comment="Whether the lot is excluded from quota debt",
    )
    exemption_reason: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )

    # Relationships
    contributions: Mapped[list["Contribution"]] = relationship(  # noqa: F821
        "Contribution",
        back_populates="lot",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return (
            f"<Lot(id={self.id!r}, lot_number={self.lot_number!r}, owner={self.owner!r}, "
            f"initial_works_debt={self.initial_works_debt}, is_exempt={self.is_exempt})>"
        )


__all__ = ["Lot"]
