"""Quota debt calculation for lots of the community.

Debt formula (per non-exempt lot):
    balance = applicable quotas + initial works debt - contributions
    outstanding_balance = max(0, balance)
    status = OVERDUE if balance > 0 else CURRENT

A quota is applicable once its due date is on or before the evaluation date.
Quotas without a due date are drafts and never apply. The evaluation date is
always passed in explicitly; only the QuotaService wrapper reads the clock.

Overpayment is never reported: a lot that paid more than it owes is CURRENT with
an outstanding balance of 0, and the surplus is not carried forward.
"""

import logging
from collections import defaultdict
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Iterable, NamedTuple, Optional

from lotdues.models import FundType, QuotaType
from lotdues.services.fund_balance_service import sum_amounts
from lotdues.services.ledger_repository import LedgerRepository
from lotdues.services.localizer import t

logger = logging.getLogger(__name__)


class PaymentStatus(str, Enum):
    """Payment status of a lot. Deliberately two-state: no credit/advance status."""

    CURRENT = "current"
    OVERDUE = "overdue"


STATUS_ICONS = {
    PaymentStatus.CURRENT: "🟢",
    PaymentStatus.OVERDUE: "🔴",
}
UNKNOWN_STATUS_ICON = "⚪"


class LotBalance(NamedTuple):
    """Outstanding balance of a lot across all funds."""

    lot_id: str
    lot_number: str
    owner: str
    total_contributions: int
    total_quotas: int  # applicable quotas + initial works debt
    initial_works_debt: int
    outstanding_balance: int
    status: PaymentStatus


class LotDebtDetail(NamedTuple):
    """Debt of a lot broken down by maintenance and works funds."""

    lot_id: str
    initial_works_debt: int
    maintenance_debt: int
    works_debt: int
    total_debt: int
    total_contributions: int
    total_quotas: int
    outstanding_balance: int
    status: PaymentStatus


class QuotaSummary(NamedTuple):
    """Dashboard summary of all lot balances."""

    total_lots: int
    total_debt: int
    overdue_count: int
    current_count: int


def to_date(value: date | datetime) -> date:
    """Normalize a date or datetime to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def applicable_quotas(quota_configs: Iterable[Any], now: date | datetime) -> list[Any]:
    """Select the quotas owed as of the evaluation date.

    Args:
        quota_configs: Full quota schedule
        now: Evaluation date or datetime

    Returns:
        Quotas with a due date on or before now, in input order
    """
    today = to_date(now)
    return [
        quota
        for quota in quota_configs
        if quota.due_date is not None and to_date(quota.due_date) <= today
    ]


def payment_status(balance: int) -> PaymentStatus:
    """Derive payment status from a signed balance (positive = owes money)."""
    return PaymentStatus.OVERDUE if balance > 0 else PaymentStatus.CURRENT


def status_text(status: PaymentStatus | str) -> str:
    """Localized label for a payment status ("Al día", "Atrasado")."""
    try:
        return t(f"status.{PaymentStatus(status).value}")
    except ValueError:
        return t("status.unknown")


def status_icon(status: PaymentStatus | str) -> str:
    """Icon for a payment status."""
    try:
        return STATUS_ICONS[PaymentStatus(status)]
    except ValueError:
        return UNKNOWN_STATUS_ICON


def contributions_for_lot(contributions: Iterable[Any], lot_id: str) -> list[Any]:
    """Contributions belonging to a single lot."""
    return [c for c in contributions if c.lot_id == lot_id]


def _contribution_totals_by_lot(contributions: Iterable[Any]) -> dict[str, int]:
    totals: dict[str, int] = defaultdict(int)
    for contribution in contributions:
        if contribution.amount:
            totals[contribution.lot_id] += contribution.amount
    return totals


def calculate_lot_balances(
    lots: Iterable[Any],
    contributions: Iterable[Any],
    quota_configs: Iterable[Any],
    now: date | datetime,
) -> list[LotBalance]:
    """Calculate outstanding balance and status for every non-exempt lot.

    Contributions of all fund types are netted jointly against the applicable
    quotas plus the lot's initial works debt.

    Args:
        lots: All lots (exempt lots are skipped)
        contributions: All contributions
        quota_configs: Full quota schedule
        now: Evaluation date

    Returns:
        LotBalance list sorted by outstanding balance, largest debtors first.
        Empty list if the inputs could not be read.
    """
    try:
        quotas_total = sum_amounts(applicable_quotas(quota_configs, now))
        contribution_totals = _contribution_totals_by_lot(contributions)

        balances = []
        for lot in lots:
            if lot.is_exempt:
                continue

            initial_works_debt = lot.initial_works_debt or 0
            total_contributions = contribution_totals.get(lot.id, 0)
            total_quotas = quotas_total + initial_works_debt
            balance = total_quotas - total_contributions

            balances.append(
                LotBalance(
                    lot_id=lot.id,
                    lot_number=lot.lot_number,
                    owner=lot.owner,
                    total_contributions=total_contributions,
                    total_quotas=total_quotas,
                    initial_works_debt=initial_works_debt,
                    outstanding_balance=max(0, balance),
                    status=payment_status(balance),
                )
            )
    except Exception as e:
        logger.error("Error calculating lot balances: %s", e, exc_info=True)
        return []

    return sorted(balances, key=lambda b: b.outstanding_balance, reverse=True)


def calculate_lot_debt_detail(
    lot: Optional[Any],
    contributions: Iterable[Any],
    quota_configs: Iterable[Any],
    now: date | datetime,
) -> Optional[LotDebtDetail]:
    """Break down a lot's debt by maintenance and works funds.

    Each fund is clamped at zero separately, so total_debt can exceed
    outstanding_balance when one fund is overpaid and the other is not.
    The initial works debt is always charged to the works fund.

    Args:
        lot: Lot to inspect (None when the lot does not exist)
        contributions: Contributions (of this lot or of all lots)
        quota_configs: Full quota schedule
        now: Evaluation date

    Returns:
        LotDebtDetail, or None for a missing or exempt lot or unreadable inputs
    """
    if lot is None or lot.is_exempt:
        return None

    try:
        quotas = applicable_quotas(quota_configs, now)
        lot_contributions = contributions_for_lot(contributions, lot.id)
        initial_works_debt = lot.initial_works_debt or 0

        maintenance_contributions = sum_amounts(
            c for c in lot_contributions if c.type == FundType.MAINTENANCE
        )
        works_contributions = sum_amounts(
            c for c in lot_contributions if c.type == FundType.WORKS
        )
        maintenance_quotas = sum_amounts(
            q for q in quotas if q.quota_type == QuotaType.MAINTENANCE
        )
        works_quotas = sum_amounts(q for q in quotas if q.quota_type == QuotaType.WORKS)

        maintenance_debt = max(0, maintenance_quotas - maintenance_contributions)
        works_debt = max(0, (works_quotas + initial_works_debt) - works_contributions)

        total_contributions = maintenance_contributions + works_contributions
        total_quotas = maintenance_quotas + works_quotas + initial_works_debt
        balance = total_quotas - total_contributions
    except Exception as e:
        logger.error("Error calculating lot debt detail for lot %s: %s", lot.id, e, exc_info=True)
        return None

    return LotDebtDetail(
        lot_id=lot.id,
        initial_works_debt=initial_works_debt,
        maintenance_debt=maintenance_debt,
        works_debt=works_debt,
        total_debt=maintenance_debt + works_debt,
        total_contributions=total_contributions,
        total_quotas=total_quotas,
        outstanding_balance=max(0, balance),
        status=payment_status(balance),
    )


def summarize_lot_balances(balances: Iterable[LotBalance]) -> QuotaSummary:
    """Count lots by status and total their outstanding balances."""
    balances = list(balances)
    return QuotaSummary(
        total_lots=len(balances),
        total_debt=sum(b.outstanding_balance for b in balances),
        overdue_count=sum(1 for b in balances if b.status == PaymentStatus.OVERDUE),
        current_count=sum(1 for b in balances if b.status == PaymentStatus.CURRENT),
    )


def resolve_now(now: Optional[date | datetime] = None) -> date | datetime:
    """Evaluation time: the given value, or the current UTC time."""
    return now if now is not None else datetime.now(timezone.utc)


class QuotaService:
    """Fetch the ledger and calculate lot debts as of a given date."""

    def __init__(self, repository: LedgerRepository):
        """Initialize with a ledger repository.

        Args:
            repository: Storage collaborator providing read-only collections
        """
        self.repository = repository

    async def get_lot_balances(
        self, now: Optional[date | datetime] = None
    ) -> list[LotBalance]:
        """Balances of all non-exempt lots, or an empty list if any read fails."""
        try:
            lots = await self.repository.list_lots()
            contributions = await self.repository.list_contributions()
            quota_configs = await self.repository.list_quota_configs()
        except Exception as e:
            logger.error("Error loading ledger for lot balances: %s", e, exc_info=True)
            return []

        return calculate_lot_balances(lots, contributions, quota_configs, resolve_now(now))

    async def load_lot_debt_detail(
        self, lot_id: str, now: Optional[date | datetime] = None
    ) -> Optional[LotDebtDetail]:
        """Debt breakdown of one lot; None if missing or exempt.

        Storage read errors propagate so callers can tell them apart from
        a lot with nothing to report.
        """
        lot = await self.repository.get_lot(lot_id)
        if lot is None:
            logger.debug("Lot %s not found for debt detail", lot_id)
            return None
        contributions = await self.repository.list_contributions_for_lot(lot_id)
        quota_configs = await self.repository.list_quota_configs()

        return calculate_lot_debt_detail(
            lot, contributions, quota_configs, resolve_now(now)
        )

    async def get_lot_debt_detail(
        self, lot_id: str, now: Optional[date | datetime] = None
    ) -> Optional[LotDebtDetail]:
        """Debt breakdown of one lot; None if missing, exempt or unreadable."""
        try:
            return await self.load_lot_debt_detail(lot_id, now)
        except Exception as e:
            logger.error("Error loading ledger for lot %s: %s", lot_id, e, exc_info=True)
            return None

    async def get_quota_summary(self, now: Optional[date | datetime] = None) -> QuotaSummary:
        """Summary counts over the lot balances."""
        return summarize_lot_balances(await self.get_lot_balances(now))


__all__ = [
    "PaymentStatus",
    "LotBalance",
    "LotDebtDetail",
    "QuotaSummary",
    "QuotaService",
    "applicable_quotas",
    "calculate_lot_balances",
    "calculate_lot_debt_detail",
    "contributions_for_lot",
    "payment_status",
    "resolve_now",
    "status_icon",
    "status_text",
    "summarize_lot_balances",
    "to_date",
]
