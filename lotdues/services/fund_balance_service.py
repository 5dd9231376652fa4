"""Fund balance aggregation for the community's income and expenses.

Fund model:
- Individual funds (maintenance/works/others): track income only, expenses = 0
- Consolidated: all income minus all expenses, regardless of expense type

Expenses are general (not attributable to a single fund), so they are deducted
from total income rather than allocated per fund. The consolidated balance is the
only balance that may be negative: it is the community's net cash position.
"""

import logging
from typing import Any, Iterable, NamedTuple

from lotdues.models import FundType
from lotdues.services.ledger_repository import LedgerRepository

logger = logging.getLogger(__name__)


class FundBalance(NamedTuple):
    """Income, expenses and balance of a single fund or of all funds combined."""

    income: int
    expenses: int
    balance: int

    @classmethod
    def zero(cls) -> "FundBalance":
        return cls(income=0, expenses=0, balance=0)


class FundsBalances(NamedTuple):
    """Balances of every fund plus the consolidated position."""

    maintenance: FundBalance
    works: FundBalance
    others: FundBalance
    consolidated: FundBalance

    @classmethod
    def zero(cls) -> "FundsBalances":
        """All buckets zeroed; returned whenever inputs cannot be read."""
        return cls(
            maintenance=FundBalance.zero(),
            works=FundBalance.zero(),
            others=FundBalance.zero(),
            consolidated=FundBalance.zero(),
        )


def sum_amounts(records: Iterable[Any]) -> int:
    """Sum the amount attribute of records, skipping empty amounts."""
    return sum(record.amount for record in records if record.amount) or 0


def fund_balance(fund_type: FundType | str, contributions: Iterable[Any]) -> FundBalance:
    """Calculate the balance of a single fund.

    Args:
        fund_type: Fund to total (FundType or its string value)
        contributions: All contributions; only those of the fund are counted

    Returns:
        FundBalance with income, expenses (always 0) and balance (equal to income)

    Raises:
        ValueError: If fund_type is not a known fund

    Example:
        >>> fund_balance(FundType.MAINTENANCE, [])
        FundBalance(income=0, expenses=0, balance=0)
    """
    fund = FundType(fund_type)
    income = sum_amounts(c for c in contributions if c.type == fund)
    return FundBalance(income=income, expenses=0, balance=income)


def all_funds_balances(
    lots: Iterable[Any],
    contributions: Iterable[Any],
    expenses: Iterable[Any],
) -> FundsBalances:
    """Calculate balances for all fund types and the consolidated totals.

    Lots are accepted for symmetry with the other reports; exempt lots still
    count as income when they contribute, so no lot filtering happens here.

    Args:
        lots: All lots
        contributions: All contributions
        expenses: All expenses

    Returns:
        FundsBalances; all zeros if the inputs could not be read
    """
    try:
        contributions = list(contributions)

        maintenance = fund_balance(FundType.MAINTENANCE, contributions)
        works = fund_balance(FundType.WORKS, contributions)
        others = fund_balance(FundType.OTHERS, contributions)

        total_income = maintenance.income + works.income + others.income
        total_expenses = sum_amounts(expenses)

        consolidated = FundBalance(
            income=total_income,
            expenses=total_expenses,
            balance=total_income - total_expenses,
        )
    except Exception as e:
        logger.error("Error calculating all funds balances: %s", e, exc_info=True)
        return FundsBalances.zero()

    return FundsBalances(
        maintenance=maintenance,
        works=works,
        others=others,
        consolidated=consolidated,
    )


class FundBalanceService:
    """Fetch the ledger and aggregate fund balances."""

    def __init__(self, repository: LedgerRepository):
        """Initialize with a ledger repository.

        Args:
            repository: Storage collaborator providing read-only collections
        """
        self.repository = repository

    async def get_fund_balance(self, fund_type: FundType | str) -> FundBalance:
        """Balance of one fund, or zeros if contributions cannot be read."""
        try:
            contributions = await self.repository.list_contributions()
            return fund_balance(fund_type, contributions)
        except Exception as e:
            logger.error(
                "Error calculating fund balance for type %s: %s", fund_type, e, exc_info=True
            )
            return FundBalance.zero()

    async def get_all_funds_balances(self) -> FundsBalances:
        """Balances of every fund, or all zeros if any read fails."""
        try:
            lots = await self.repository.list_lots()
            contributions = await self.repository.list_contributions()
            expenses = await self.repository.list_expenses()
        except Exception as e:
            logger.error("Error loading ledger for fund balances: %s", e, exc_info=True)
            return FundsBalances.zero()

        return all_funds_balances(lots, contributions, expenses)


__all__ = [
    "FundBalance",
    "FundsBalances",
    "FundBalanceService",
    "all_funds_balances",
    "fund_balance",
    "sum_amounts",
]
