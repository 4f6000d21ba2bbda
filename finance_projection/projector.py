"""
Monthly Projector Module
Extrapolates income, expenses and cumulative balance month by month
"""

from datetime import date
from typing import List, Optional, Sequence

from dateutil.relativedelta import relativedelta

from .config import ProjectionPolicy
from .models import Confidence, MonthBucket, MonthlyProjection, round_money
from .stats import average, dispersion


class MonthlyProjector:
    """Projects future months from historical month buckets and a trend term"""

    LABEL_FORMAT = "%b %Y"

    def __init__(self, policy: Optional[ProjectionPolicy] = None):
        self.policy = policy or ProjectionPolicy()

    def calculate_trend(self, values: Sequence[float]) -> float:
        """
        Difference between the recent window average and the window before it

        Args:
            values: Chronologically ordered monthly values

        Returns:
            Trend term; with a short history the older window averages to 0
        """
        window = self.policy.trend_window
        recent = values[-window:]
        older = values[-2 * window:-window]
        return average(recent) - average(older)

    def calculate_confidence(self, buckets: Sequence[MonthBucket]) -> Confidence:
        expenses = [bucket.total_expense for bucket in buckets]
        avg_expenses = average(expenses)
        spread = dispersion(expenses)

        if spread < avg_expenses * self.policy.high_confidence_ratio:
            return Confidence.HIGH
        if spread < avg_expenses * self.policy.medium_confidence_ratio:
            return Confidence.MEDIUM
        return Confidence.LOW

    def _projected_flows(self, buckets: Sequence[MonthBucket], months_ahead: int):
        if months_ahead < 1:
            raise ValueError(f"months_ahead must be a positive integer, got {months_ahead}")

        incomes = [bucket.total_income for bucket in buckets]
        expenses = [bucket.total_expense for bucket in buckets]
        avg_income = average(incomes)
        avg_expenses = average(expenses)
        income_trend = self.calculate_trend(incomes)
        expenses_trend = self.calculate_trend(expenses)

        for i in range(1, months_ahead + 1):
            # Trend correction grows linearly per trend_divisor months
            factor = i / self.policy.trend_divisor
            yield (
                avg_income + income_trend * factor,
                avg_expenses + expenses_trend * factor,
            )

    def net_flows(self, buckets: Sequence[MonthBucket], months_ahead: int) -> List[float]:
        """Unrounded projected income minus expenses for each future month"""
        return [income - expenses for income, expenses in self._projected_flows(buckets, months_ahead)]

    def project(self,
                buckets: Sequence[MonthBucket],
                months_ahead: int,
                today: date) -> List[MonthlyProjection]:
        """
        Project the next ``months_ahead`` calendar months

        Args:
            buckets: Historical month buckets, oldest first
            months_ahead: Number of future months to project
            today: Reference date; month 1 is the month after it

        Returns:
            Chronological list of monthly projections with cumulative balance
        """
        confidence = self.calculate_confidence(buckets)
        projections = []
        cumulative_balance = 0.0

        flows = self._projected_flows(buckets, months_ahead)
        for i, (projected_income, projected_expenses) in enumerate(flows, start=1):
            cumulative_balance += projected_income - projected_expenses
            month = today + relativedelta(months=i)

            projections.append(MonthlyProjection(
                month=month.strftime(self.LABEL_FORMAT),
                month_key=month.strftime("%Y-%m"),
                projected_income=round_money(projected_income),
                projected_expenses=round_money(projected_expenses),
                projected_balance=round_money(cumulative_balance),
                confidence=confidence,
            ))

        return projections
