"""Read-only report endpoints over the reconciliation engine."""

import logging
import time
from datetime import date
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from lotdues.services import get_async_session
from lotdues.services.fund_balance_service import FundBalance, FundBalanceService
from lotdues.services.ledger_repository import LedgerRepository
from lotdues.services.locale_service import format_amount
from lotdues.services.localizer import t
from lotdues.services.quota_service import (
    LotBalance,
    PaymentStatus,
    QuotaService,
    status_icon,
    status_text,
)

logger = logging.getLogger(__name__)


def _log_debug(endpoint: str, start_time: float, **kwargs: Any) -> None:
    """Log API request with timing at DEBUG level."""
    duration_ms = int((time.time() - start_time) * 1000)
    extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
    logger.debug(
        "reports.%s: %sduration_ms=%d",
        endpoint,
        f"{extra} " if extra else "",
        duration_ms,
    )


router = APIRouter(prefix="/api/reports", tags=["reports"])


# Response schemas
class FundBalanceResponse(BaseModel):
    """Balance of one fund (or of all funds combined)."""

    income: int
    expenses: int
    balance: int
    formatted_balance: str

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_balance(cls, balance: FundBalance) -> "FundBalanceResponse":
        return cls(**balance._asdict(), formatted_balance=format_amount(balance.balance))


class FundsBalancesResponse(BaseModel):
    """Response schema for /funds."""

    maintenance: FundBalanceResponse
    works: FundBalanceResponse
    others: FundBalanceResponse
    consolidated: FundBalanceResponse


class LotBalanceResponse(BaseModel):
    """Outstanding balance of a single lot."""

    lot_id: str
    lot_number: str
    owner: str
    total_contributions: int
    total_quotas: int
    initial_works_debt: int
    outstanding_balance: int
    status: PaymentStatus
    status_text: str
    status_icon: str

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_balance(cls, balance: LotBalance) -> "LotBalanceResponse":
        return cls(
            **balance._asdict(),
            status_text=status_text(balance.status),
            status_icon=status_icon(balance.status),
        )


class LotBalancesResponse(BaseModel):
    """Response schema for /lots/balances."""

    lots: list[LotBalanceResponse]


class QuotaSummaryResponse(BaseModel):
    """Response schema for /lots/summary."""

    total_lots: int
    total_debt: int
    overdue_count: int
    current_count: int
    formatted_total_debt: str


class LotDebtDetailResponse(BaseModel):
    """Response schema for /lots/{lot_id}/debt."""

    lot_id: str
    initial_works_debt: int
    maintenance_debt: int
    works_debt: int
    total_debt: int
    total_contributions: int
    total_quotas: int
    outstanding_balance: int
    status: PaymentStatus
    status_text: str

    model_config = ConfigDict(from_attributes=True)


def _loading_error(endpoint: str, error: Exception) -> HTTPException:
    logger.error(f"Error in /api/reports/{endpoint}: {error}", exc_info=True)
    return HTTPException(status_code=503, detail=t("errors.loading_data"))


@router.get("/funds", response_model=FundsBalancesResponse)
async def get_funds(
    session: AsyncSession = Depends(get_async_session),  # noqa: B008
) -> FundsBalancesResponse:
    """
    Get income, expenses and balance for every fund and the consolidated total.

    Raises:
        503: Data could not be loaded
    """
    start_time = time.time()
    try:
        service = FundBalanceService(LedgerRepository(session))
        balances = await service.get_all_funds_balances()
        response = FundsBalancesResponse(
            maintenance=FundBalanceResponse.from_balance(balances.maintenance),
            works=FundBalanceResponse.from_balance(balances.works),
            others=FundBalanceResponse.from_balance(balances.others),
            consolidated=FundBalanceResponse.from_balance(balances.consolidated),
        )
        _log_debug("funds", start_time, consolidated=balances.consolidated.balance)
        return response
    except Exception as e:
        raise _loading_error("funds", e) from e


@router.get("/lots/balances", response_model=LotBalancesResponse)
async def get_lot_balances(
    as_of: date | None = None,
    session: AsyncSession = Depends(get_async_session),  # noqa: B008
) -> LotBalancesResponse:
    """
    Get outstanding balance and status of every non-exempt lot.

    Args:
        as_of: Evaluation date (default: today)

    Raises:
        503: Data could not be loaded
    """
    start_time = time.time()
    try:
        balances = await QuotaService(LedgerRepository(session)).get_lot_balances(as_of)
        response = LotBalancesResponse(
            lots=[LotBalanceResponse.from_balance(balance) for balance in balances]
        )
        _log_debug("lot_balances", start_time, count=len(balances), as_of=as_of)
        return response
    except Exception as e:
        raise _loading_error("lots/balances", e) from e


@router.get("/lots/summary", response_model=QuotaSummaryResponse)
async def get_quota_summary(
    as_of: date | None = None,
    session: AsyncSession = Depends(get_async_session),  # noqa: B008
) -> QuotaSummaryResponse:
    """
    Get lot counts by status and the total outstanding debt.

    Raises:
        503: Data could not be loaded
    """
    start_time = time.time()
    try:
        summary = await QuotaService(LedgerRepository(session)).get_quota_summary(as_of)
        response = QuotaSummaryResponse(
            **summary._asdict(),
            formatted_total_debt=format_amount(summary.total_debt),
        )
        _log_debug("lot_summary", start_time, total_lots=summary.total_lots, as_of=as_of)
        return response
    except Exception as e:
        raise _loading_error("lots/summary", e) from e


@router.get("/lots/{lot_id}/debt", response_model=LotDebtDetailResponse)
async def get_lot_debt(
    lot_id: str,
    as_of: date | None = None,
    session: AsyncSession = Depends(get_async_session),  # noqa: B008
) -> LotDebtDetailResponse:
    """
    Get the maintenance/works debt breakdown of a lot.

    Raises:
        404: Lot not found or exempt
        503: Data could not be loaded
    """
    start_time = time.time()
    try:
        detail = await QuotaService(LedgerRepository(session)).load_lot_debt_detail(lot_id, as_of)
        if detail is None:
            raise HTTPException(status_code=404, detail=t("errors.lot_not_found", lot_id=lot_id))

        response = LotDebtDetailResponse(**detail._asdict(), status_text=status_text(detail.status))
        _log_debug("lot_debt", start_time, lot_id=lot_id, as_of=as_of)
        return response
    except HTTPException:
        raise
    except Exception as e:
        raise _loading_error(f"lots/{lot_id}/debt", e) from e
