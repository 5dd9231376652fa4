"""CLI entry point for printing fund balances and lot debts.

Usage:
    python -m lotdues.cli.report
    python -m lotdues.cli.report --as-of 2025-06-30

Exit Codes:
    0 - Success: Report printed
    1 - Failure: Error encountered

Logging:
    Level from LOG_LEVEL; logs to both stdout and the configured log file
"""

import argparse
import asyncio
import logging
import sys
from datetime import date
from typing import Optional, Sequence

from lotdues.services import AsyncSessionLocal, init_db, init_engines
from lotdues.services.config import load_config
from lotdues.services.fund_balance_service import FundBalanceService
from lotdues.services.ledger_repository import LedgerRepository
from lotdues.services.locale_service import format_amount, format_local_date
from lotdues.services.localizer import t
from lotdues.services.logging import setup_server_logging
from lotdues.services.quota_service import (
    QuotaService,
    resolve_now,
    status_icon,
    status_text,
    summarize_lot_balances,
    to_date,
)

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Print lot dues report")
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Evaluation date in ISO format (default: today)",
    )
    return parser.parse_args(argv)


def render_report(funds, balances, summary, as_of: date) -> str:
    """Render fund balances, lot balances and summary as plain text."""
    lines = [t("app.title"), f"{t('labels.as_of')}: {format_local_date(as_of)}", ""]

    for key in ("maintenance", "works", "others", "consolidated"):
        balance = getattr(funds, key)
        lines.append(
            f"{t(f'funds.{key}'):<15} "
            f"{t('labels.income')}: {format_amount(balance.income)}  "
            f"{t('labels.expenses')}: {format_amount(balance.expenses)}  "
            f"{t('labels.balance')}: {format_amount(balance.balance)}"
        )

    lines.append("")
    lines.append(
        f"{t('labels.lot'):<8} {t('labels.owner'):<30} "
        f"{t('labels.outstanding_balance'):>15}  {t('labels.status')}"
    )
    for lot in balances:
        lines.append(
            f"{lot.lot_number:<8} {lot.owner:<30} "
            f"{format_amount(lot.outstanding_balance):>15}  {status_icon(lot.status)} {status_text(lot.status)}"
        )

    lines.append("")
    lines.append(
        f"{t('labels.total_lots')}: {summary.total_lots}  "
        f"{t('labels.total_debt')}: {format_amount(summary.total_debt)}  "
        f"{t('labels.overdue')}: {summary.overdue_count}  "
        f"{t('labels.current')}: {summary.current_count}"
    )
    return "\n".join(lines)


async def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the report CLI.

    Returns:
        Exit code: 0 for success, 1 for failure
    """
    try:
        args = parse_args(argv)
        config = load_config()
        setup_server_logging(config.log_file, config.log_level)

        init_engines(config.database_url)
        init_db()
        as_of = to_date(resolve_now(args.as_of))

        async with AsyncSessionLocal() as session:
            repository = LedgerRepository(session)
            funds = await FundBalanceService(repository).get_all_funds_balances()
            balances = await QuotaService(repository).get_lot_balances(as_of)

        print(render_report(funds, balances, summarize_lot_balances(balances), as_of))
        return 0

    except KeyboardInterrupt:
        logger.warning("Report interrupted by user")
        return 1
    except Exception as e:
        logger.error(f"Report failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
