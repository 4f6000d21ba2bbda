"""Shared pytest configuration for the project test suite."""
from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

import pytest


# Ensure the repository root (which contains the ``finance_projection`` package) is importable.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from finance_projection.config import ProjectionSettings  # noqa: E402
from finance_projection.finance_service import DataFetchError  # noqa: E402
from finance_projection.models import (  # noqa: E402
    Budget,
    FinancialSummary,
    Goal,
    Transaction,
    TransactionKind,
    TransactionPage,
)

TODAY = date(2024, 6, 15)


class FakeProvider:
    """In-memory finance data provider that records its calls."""

    def __init__(
        self,
        transactions: Optional[List[Transaction]] = None,
        goals: Optional[List[Goal]] = None,
        budgets: Optional[List[Budget]] = None,
        balance: float = 0.0,
        page_size: int = 100,
        reported_pages: Optional[int] = None,
        fail_on: Optional[str] = None,
    ) -> None:
        self.transactions = transactions or []
        self.goals = goals or []
        self.budgets = budgets or []
        self.summary = FinancialSummary(balance=balance)
        self.page_size = page_size
        self.reported_pages = reported_pages
        self.fail_on = fail_on
        self.calls: Dict[str, int] = {}

    def _record(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1
        if self.fail_on == name:
            raise DataFetchError(f"Failed to fetch {name}")

    async def fetch_transactions(self, page: int = 1, limit: int = 100) -> TransactionPage:
        self._record("transactions")
        if self.reported_pages is not None:
            # Inconsistent backend: every page claims more data remains
            return TransactionPage(items=self.transactions[:1], page=page, pages=self.reported_pages)
        start = (page - 1) * self.page_size
        pages = max(1, -(-len(self.transactions) // self.page_size))
        return TransactionPage(
            items=self.transactions[start:start + self.page_size],
            page=page,
            pages=pages,
        )

    async def fetch_active_goals(self, limit: int = 100) -> List[Goal]:
        self._record("goals")
        return self.goals[:limit]

    async def fetch_active_budgets(self, limit: int = 100) -> List[Budget]:
        self._record("budgets")
        return self.budgets[:limit]

    async def fetch_financial_summary(self) -> FinancialSummary:
        self._record("summary")
        return self.summary


def monthly_history(incomes: List[float], expenses: List[float], first_month: date) -> List[Transaction]:
    """One income and one expense transaction on the 20th of consecutive months."""
    transactions = []
    year, month = first_month.year, first_month.month
    for income, expense in zip(incomes, expenses):
        when = date(year, month, 20)
        transactions.append(Transaction(date=when, amount=income, kind=TransactionKind.INCOME))
        transactions.append(Transaction(date=when, amount=expense, kind=TransactionKind.EXPENSE))
        month += 1
        if month > 12:
            month, year = 1, year + 1
    return transactions


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def settings() -> ProjectionSettings:
    return ProjectionSettings()


@pytest.fixture
def six_month_history() -> List[Transaction]:
    """Dec 2023 - May 2024 with flat income and repeating expenses."""
    return monthly_history(
        [5000.0] * 6,
        [3000.0, 4000.0, 3500.0, 3000.0, 4000.0, 3500.0],
        date(2023, 12, 1),
    )


@pytest.fixture
def make_provider():
    return FakeProvider


@pytest.fixture
def make_history():
    return monthly_history
