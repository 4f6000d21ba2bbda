"""
Projection Engine
Fetches finance data concurrently and assembles projection reports
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Protocol

from dateutil.relativedelta import relativedelta

from .aggregator import MonthlyAggregator
from .budget_alerts import BudgetAlertEngine
from .config import ProjectionSettings
from .goal_projector import GoalProjector
from .insights import InsightGenerator, burn_rate, savings_rate
from .models import (
    Budget,
    FinancialProjection,
    FinancialSummary,
    Goal,
    Transaction,
    TransactionPage,
    WhatIfScenario,
)
from .projector import MonthlyProjector
from .scenario import ScenarioSimulator

LOGGER = logging.getLogger(__name__)


class FinanceDataProvider(Protocol):
    """Data collaborators consumed by the engine."""

    async def fetch_transactions(self, page: int = 1, limit: int = 100) -> TransactionPage: ...

    async def fetch_active_goals(self, limit: int = 100) -> List[Goal]: ...

    async def fetch_active_budgets(self, limit: int = 100) -> List[Budget]: ...

    async def fetch_financial_summary(self) -> FinancialSummary: ...


@dataclass(frozen=True)
class ProjectionInputs:
    """Immutable snapshot shared by every engine during one run."""

    today: date
    summary: FinancialSummary
    transactions: List[Transaction]
    goals: List[Goal]
    budgets: List[Budget]


class ProjectionEngine:
    """Entry points for full projection reports and what-if scenarios."""

    def __init__(
        self,
        provider: FinanceDataProvider,
        *,
        settings: Optional[ProjectionSettings] = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.provider = provider
        self.settings = settings or ProjectionSettings.from_environment()
        self.clock = clock

        policy = self.settings.policy
        self.aggregator = MonthlyAggregator()
        self.monthly_projector = MonthlyProjector(policy)
        self.goal_projector = GoalProjector(policy)
        self.budget_alerts = BudgetAlertEngine(policy)
        self.insights = InsightGenerator(policy, currency=self.settings.currency)
        self.simulator = ScenarioSimulator(self.goal_projector, currency=self.settings.currency)

    async def historical_transactions(self, today: date) -> List[Transaction]:
        """Page through the transaction listing, keeping the history window."""

        start = today - relativedelta(months=self.settings.history_months)
        collected: List[Transaction] = []
        page = 1

        while True:
            result = await self.provider.fetch_transactions(page=page, limit=self.settings.page_size)
            collected.extend(t for t in result.items if t.date >= start)

            if not result.items or not result.has_more:
                break
            if page >= self.settings.max_pages:
                LOGGER.warning(
                    "Stopped paging transactions after %d pages (reported %d)", page, result.pages
                )
                break
            page += 1

        return collected

    async def load_inputs(self) -> ProjectionInputs:
        today = self.clock()
        limit = self.settings.entity_limit
        summary, transactions, goals, budgets = await asyncio.gather(
            self.provider.fetch_financial_summary(),
            self.historical_transactions(today),
            self.provider.fetch_active_goals(limit),
            self.provider.fetch_active_budgets(limit),
        )
        LOGGER.info(
            "Loaded %d transactions, %d goals and %d budgets for projection",
            len(transactions), len(goals), len(budgets),
        )
        return ProjectionInputs(
            today=today,
            summary=summary,
            transactions=list(transactions),
            goals=list(goals),
            budgets=list(budgets),
        )

    def _months_ahead(self, months_ahead: Optional[int]) -> int:
        if months_ahead is None:
            return self.settings.default_months_ahead
        if isinstance(months_ahead, bool) or not isinstance(months_ahead, int) or months_ahead < 1:
            raise ValueError(f"months_ahead must be a positive integer, got {months_ahead!r}")
        return months_ahead

    def build_report(self, inputs: ProjectionInputs, months_ahead: int) -> FinancialProjection:
        buckets = self.aggregator.group_by_month(inputs.transactions)
        monthly = self.monthly_projector.project(buckets, months_ahead, inputs.today)
        goals = self.goal_projector.project(inputs.goals, buckets, inputs.today)
        alerts = self.budget_alerts.alerts(inputs.budgets, inputs.today)

        return FinancialProjection(
            current_balance=inputs.summary.balance,
            monthly_projections=monthly,
            goal_projections=goals,
            budget_alerts=alerts,
            insights=self.insights.generate(buckets, monthly, goals, alerts),
            savings_rate=savings_rate(buckets),
            burn_rate=burn_rate(buckets),
        )

    def build_scenario(self, inputs: ProjectionInputs, additional_monthly_savings: float) -> WhatIfScenario:
        buckets = self.aggregator.group_by_month(inputs.transactions)
        months_ahead = self.settings.default_months_ahead

        return self.simulator.simulate(
            additional=additional_monthly_savings,
            current_balance=inputs.summary.balance,
            net_flows=self.monthly_projector.net_flows(buckets, months_ahead),
            goals=self.goal_projector.project(inputs.goals, buckets, inputs.today),
            avg_monthly_savings=self.goal_projector.average_monthly_savings(buckets),
            today=inputs.today,
        )

    async def generate_projections(self, months_ahead: Optional[int] = None) -> FinancialProjection:
        """
        Build the full projection report

        Args:
            months_ahead: Number of future months (default from settings, 6)

        Returns:
            FinancialProjection bundling every engine's output

        Raises:
            ValueError: months_ahead is not a positive integer
            DataFetchError: a collaborator fetch failed
        """
        months = self._months_ahead(months_ahead)
        LOGGER.info("Generating financial projections for %d months", months)
        inputs = await self.load_inputs()
        return self.build_report(inputs, months)

    async def simulate_scenario(self, additional_monthly_savings: float) -> WhatIfScenario:
        """
        Recompute projected balance and goal timelines with an extra saving

        Args:
            additional_monthly_savings: Extra amount saved each month (may be negative)

        Returns:
            WhatIfScenario for the default horizon
        """
        LOGGER.info("Simulating scenario with %.2f additional monthly savings", additional_monthly_savings)
        inputs = await self.load_inputs()
        return self.build_scenario(inputs, float(additional_monthly_savings))
