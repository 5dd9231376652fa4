"""Pytest configuration and shared record builders."""

import os

# Set test database URL BEFORE any imports from lotdues
# This ensures the module-level engines use an in-memory database
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["LOCALE"] = "es_CO"

from datetime import date  # noqa: E402
from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402


def make_lot(
    lot_id: str = "1",
    lot_number: str | None = None,
    owner: str = "JOHN DOE",
    initial_works_debt: int = 0,
    is_exempt: bool = False,
    exemption_reason: str | None = None,
) -> SimpleNamespace:
    return SimpleNamespace(
        id=lot_id,
        lot_number=lot_number or lot_id,
        owner=owner,
        owner_email=None,
        initial_works_debt=initial_works_debt,
        is_exempt=is_exempt,
        exemption_reason=exemption_reason,
    )


def make_contribution(
    lot_id: str, type: str, amount: int, on: date = date(2025, 1, 5)
) -> SimpleNamespace:
    return SimpleNamespace(lot_id=lot_id, type=type, amount=amount, date=on, description="")


def make_expense(type: str, amount: int, on: date = date(2025, 1, 10)) -> SimpleNamespace:
    return SimpleNamespace(
        type=type, amount=amount, date=on, category="General", description=""
    )


def make_quota(
    quota_type: str, amount: int, due_date: date | None = None
) -> SimpleNamespace:
    return SimpleNamespace(
        quota_type=quota_type, amount=amount, due_date=due_date, description=""
    )


@pytest.fixture
def lot_factory():
    """Build lot records."""
    return make_lot


@pytest.fixture
def contribution_factory():
    """Build contribution records."""
    return make_contribution


@pytest.fixture
def expense_factory():
    """Build expense records."""
    return make_expense


@pytest.fixture
def quota_factory():
    """Build quota configuration records."""
    return make_quota
