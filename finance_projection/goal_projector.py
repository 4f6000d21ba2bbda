"""
Goal Projector Module
Estimates time to completion and required saving rate per active goal
"""

import math
from datetime import date
from typing import List, Optional, Sequence

from dateutil.relativedelta import relativedelta

from .config import ProjectionPolicy
from .models import (
    Achievable,
    CompletionEstimate,
    Goal,
    GoalProjection,
    GoalStatus,
    MonthBucket,
    Unreachable,
    round_money,
)
from .stats import average


class GoalProjector:
    """Projects goal completion from a single shared monthly saving rate"""

    def __init__(self, policy: Optional[ProjectionPolicy] = None):
        self.policy = policy or ProjectionPolicy()

    @staticmethod
    def average_monthly_savings(buckets: Sequence[MonthBucket]) -> float:
        return average([bucket.net for bucket in buckets])

    @staticmethod
    def estimate_completion(remaining: float, monthly_rate: float) -> CompletionEstimate:
        """
        Months needed to save ``remaining`` at ``monthly_rate``

        Args:
            remaining: Amount still to be saved
            monthly_rate: Expected saving per month

        Returns:
            Achievable estimate, or Unreachable when the rate is not positive
        """
        if remaining <= 0:
            return Achievable(0)
        if monthly_rate <= 0:
            return Unreachable()
        return Achievable(math.ceil(remaining / monthly_rate))

    @staticmethod
    def completion_date(estimate: CompletionEstimate, today: date) -> Optional[date]:
        if isinstance(estimate, Achievable):
            return today + relativedelta(months=estimate.months)
        return None

    def months_until_target(self, target_date: date, today: date) -> float:
        days = (target_date - today).days
        return max(1.0, days / self.policy.days_per_month)

    def project_goal(self, goal: Goal, avg_monthly_savings: float, today: date) -> GoalProjection:
        remaining = max(0.0, goal.target_amount - goal.current_amount)
        estimate = self.estimate_completion(remaining, avg_monthly_savings)
        monthly_required = remaining / self.months_until_target(goal.target_date, today)

        return GoalProjection(
            goal_id=goal.id,
            goal_title=goal.title,
            current_amount=goal.current_amount,
            target_amount=goal.target_amount,
            months_to_complete=estimate,
            estimated_completion_date=self.completion_date(estimate, today),
            monthly_required=round_money(monthly_required),
            current_monthly_average=round_money(avg_monthly_savings),
            needs_acceleration=monthly_required > avg_monthly_savings,
            suggested_monthly_amount=round_money(monthly_required * self.policy.goal_safety_buffer),
        )

    def project(self,
                goals: Sequence[Goal],
                buckets: Sequence[MonthBucket],
                today: date) -> List[GoalProjection]:
        """Project every active goal, preserving input order"""
        avg_monthly_savings = self.average_monthly_savings(buckets)
        return [
            self.project_goal(goal, avg_monthly_savings, today)
            for goal in goals
            if goal.status == GoalStatus.ACTIVE
        ]
