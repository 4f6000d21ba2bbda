"""
Insight Generator Module
Turns projection results into short, ordered observations
"""

from typing import List, Optional, Sequence

from .config import ProjectionPolicy
from .models import BudgetAlert, GoalProjection, MonthBucket, MonthlyProjection
from .stats import average


def savings_rate(buckets: Sequence[MonthBucket]) -> float:
    """Percentage of average income not spent, 0 without income"""
    avg_income = average([bucket.total_income for bucket in buckets])
    avg_expenses = average([bucket.total_expense for bucket in buckets])
    if avg_income <= 0:
        return 0.0
    return (avg_income - avg_expenses) / avg_income * 100


def burn_rate(buckets: Sequence[MonthBucket]) -> float:
    """Average monthly expense over the history window"""
    return average([bucket.total_expense for bucket in buckets])


class InsightGenerator:
    """Applies a fixed sequence of insight rules; each adds at most one line"""

    def __init__(self, policy: Optional[ProjectionPolicy] = None, currency: str = "$"):
        self.policy = policy or ProjectionPolicy()
        self.currency = currency

    def spending_trend(self, buckets: Sequence[MonthBucket]) -> Optional[str]:
        if len(buckets) < 2:
            return None

        previous = buckets[-2].total_expense
        latest = buckets[-1].total_expense
        if previous <= 0:
            return None

        change = (latest - previous) / previous * 100
        threshold = self.policy.insight_change_threshold
        if change > threshold:
            return f"Your spending rose {change:.0f}% compared with the previous month"
        if change < -threshold:
            return f"You spent {abs(change):.0f}% less than the previous month"
        return None

    def balance_outlook(self, monthly: Sequence[MonthlyProjection]) -> Optional[str]:
        if not monthly:
            return None

        balance = monthly[-1].projected_balance
        if balance >= 0:
            return f"In {len(monthly)} month(s) you will have saved about {self.currency}{balance:,}"
        return f"Warning: at the current pace your balance may be negative in {len(monthly)} month(s)"

    @staticmethod
    def goals_behind(goals: Sequence[GoalProjection]) -> Optional[str]:
        behind = sum(1 for goal in goals if goal.needs_acceleration)
        if not behind:
            return None
        return f"{behind} goal(s) need more saving to be reached on time"

    @staticmethod
    def budgets_at_risk(alerts: Sequence[BudgetAlert]) -> Optional[str]:
        at_risk = sum(1 for alert in alerts if alert.will_exceed)
        if not at_risk:
            return None
        return f"{at_risk} budget(s) may be exceeded before the end of the month"

    def savings_outlook(self, buckets: Sequence[MonthBucket]) -> Optional[str]:
        rate = savings_rate(buckets)
        if rate > self.policy.excellent_savings_rate:
            return f"Excellent! You save {rate:.0f}% of your income"
        if rate > 0:
            return f"Try to raise your current savings rate of {rate:.0f}%"
        return None

    def generate(self,
                 buckets: Sequence[MonthBucket],
                 monthly: Sequence[MonthlyProjection],
                 goals: Sequence[GoalProjection],
                 alerts: Sequence[BudgetAlert]) -> List[str]:
        """
        Build the insight list in rule order

        Args:
            buckets: Historical month buckets, oldest first
            monthly: Monthly projections
            goals: Goal projections
            alerts: Budget alerts

        Returns:
            Insight strings, possibly empty
        """
        candidates = [
            self.spending_trend(buckets),
            self.balance_outlook(monthly),
            self.goals_behind(goals),
            self.budgets_at_risk(alerts),
            self.savings_outlook(buckets),
        ]
        return [insight for insight in candidates if insight]
