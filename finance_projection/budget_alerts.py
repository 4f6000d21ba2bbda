"""
Budget Alert Module
Projects month-end spend per active budget and keeps the ones at risk
"""

import calendar
from datetime import date
from typing import List, Optional, Sequence

from .config import ProjectionPolicy
from .models import Budget, BudgetAlert, round_money


class BudgetAlertEngine:
    """Flags budgets with high utilization or a projected overrun"""

    def __init__(self, policy: Optional[ProjectionPolicy] = None):
        self.policy = policy or ProjectionPolicy()

    @staticmethod
    def days_remaining(today: date) -> int:
        days_in_month = calendar.monthrange(today.year, today.month)[1]
        return days_in_month - today.day

    @staticmethod
    def project_month_end(spent: float, days_elapsed: int, days_remaining: int) -> float:
        """
        Project month-end spend from the pace so far

        Args:
            spent: Amount spent so far this month
            days_elapsed: Days of the month already passed
            days_remaining: Days left in the month

        Returns:
            Projected spend at month end; no pace is assumed before day one
        """
        if days_elapsed <= 0:
            return spent

        spent_per_day = spent / days_elapsed
        return spent + spent_per_day * days_remaining

    @staticmethod
    def utilization(budget: Budget) -> float:
        if budget.monthly_limit <= 0:
            return 0.0
        return budget.spent / budget.monthly_limit * 100

    def evaluate(self, budget: Budget, today: date) -> BudgetAlert:
        days_remaining = self.days_remaining(today)
        days_elapsed = today.day
        limit = budget.monthly_limit
        spent = budget.spent

        utilization = self.utilization(budget)
        projected = self.project_month_end(spent, days_elapsed, days_remaining)

        if days_remaining > 0:
            recommended_daily = max(0.0, (limit - spent) / days_remaining)
        else:
            recommended_daily = 0.0

        return BudgetAlert(
            budget_id=budget.id,
            budget_name=budget.name,
            current_spent=round_money(spent),
            limit=limit,
            utilization=round_money(utilization),
            days_remaining=days_remaining,
            projected_end_of_month=round_money(projected),
            will_exceed=projected > limit,
            recommended_daily_limit=round_money(recommended_daily),
        )

    def alerts(self, budgets: Sequence[Budget], today: date) -> List[BudgetAlert]:
        """
        Evaluate active budgets for the month containing ``today``

        Args:
            budgets: Budgets for the current month
            today: Reference date

        Returns:
            Alerts for budgets above the utilization threshold or projected
            to exceed their limit
        """
        threshold = self.policy.alert_utilization_threshold
        results = []

        for budget in budgets:
            if not budget.is_active:
                continue
            alert = self.evaluate(budget, today)
            if alert.utilization > threshold or alert.will_exceed:
                results.append(alert)

        return results
