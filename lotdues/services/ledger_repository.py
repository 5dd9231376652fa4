"""Read-only access to lots, contributions, expenses and quota configurations.

This is the storage collaborator of the reconciliation engine: it returns plain
collections of ORM rows and performs no calculation of its own. Each read is an
independent query, so a run may observe a lot list newer than its contribution
list; reports accept that staleness.
"""

import logging
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lotdues.models import Contribution, Expense, Lot, QuotaConfig

logger = logging.getLogger(__name__)


class LedgerRepository:
    """Fetch snapshots of the community ledger."""

    def __init__(self, session: AsyncSession):
        """Initialize with database session.

        Args:
            session: AsyncSession for database operations
        """
        self.session = session

    async def list_lots(self) -> Sequence[Lot]:
        """List all lots ordered by lot number."""
        result = await self.session.execute(select(Lot).order_by(Lot.lot_number.asc()))
        return result.scalars().all()

    async def get_lot(self, lot_id: str) -> Optional[Lot]:
        """Get a lot by its identifier.

        Returns:
            Lot or None if not found
        """
        return await self.session.get(Lot, lot_id)

    async def list_contributions(self) -> Sequence[Contribution]:
        """List all contributions, most recent first."""
        result = await self.session.execute(
            select(Contribution).order_by(Contribution.date.desc(), Contribution.id.desc())
        )
        return result.scalars().all()

    async def list_contributions_for_lot(self, lot_id: str) -> Sequence[Contribution]:
        """List contributions of a single lot, most recent first."""
        result = await self.session.execute(
            select(Contribution)
            .filter(Contribution.lot_id == lot_id)
            .order_by(Contribution.date.desc(), Contribution.id.desc())
        )
        return result.scalars().all()

    async def list_expenses(self) -> Sequence[Expense]:
        """List all expenses, newest record first."""
        result = await self.session.execute(select(Expense).order_by(Expense.id.desc()))
        return result.scalars().all()

    async def list_quota_configs(self) -> Sequence[QuotaConfig]:
        """List the quota schedule ordered by due date (drafts last)."""
        result = await self.session.execute(
            select(QuotaConfig).order_by(
                QuotaConfig.due_date.is_(None),
                QuotaConfig.due_date.asc(),
                QuotaConfig.id.asc(),
            )
        )
        return result.scalars().all()


__all__ = ["LedgerRepository"]
