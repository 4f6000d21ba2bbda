"""
Scenario Simulator Module
What-if recomputation under an additional fixed monthly saving
"""

from datetime import date
from typing import List, Optional, Sequence

from .goal_projector import GoalProjector
from .models import Achievable, GoalImpact, GoalProjection, WhatIfScenario, round_money


class ScenarioSimulator:
    """Re-applies the projection path with an adjusted monthly saving"""

    def __init__(self, goal_projector: Optional[GoalProjector] = None, currency: str = "$"):
        self.goal_projector = goal_projector or GoalProjector()
        self.currency = currency

    def describe(self, additional: float) -> str:
        if additional >= 0:
            return f"Saving {self.currency}{additional:,.2f} more per month"
        return f"Spending {self.currency}{abs(additional):,.2f} more per month"

    def goal_impact(self,
                    goal: GoalProjection,
                    new_rate: float,
                    today: date) -> GoalImpact:
        remaining = max(0.0, goal.target_amount - goal.current_amount)
        new_estimate = self.goal_projector.estimate_completion(remaining, new_rate)

        months_reduced = None
        if isinstance(goal.months_to_complete, Achievable) and isinstance(new_estimate, Achievable):
            months_reduced = goal.months_to_complete.months - new_estimate.months

        return GoalImpact(
            goal_title=goal.goal_title,
            months_reduced=months_reduced,
            new_completion=new_estimate,
            new_completion_date=self.goal_projector.completion_date(new_estimate, today),
        )

    def simulate(self,
                 additional: float,
                 current_balance: float,
                 net_flows: Sequence[float],
                 goals: Sequence[GoalProjection],
                 avg_monthly_savings: float,
                 today: date) -> WhatIfScenario:
        """
        Simulate an additional monthly saving

        Args:
            additional: Extra saving per month; negative means extra spending
            current_balance: Starting balance
            net_flows: Unrounded projected income minus expenses per month
            goals: Baseline goal projections
            avg_monthly_savings: Baseline average monthly saving
            today: Reference date

        Returns:
            Scenario with the new projected balance and per-goal impact
        """
        projected_balance = current_balance + sum(flow + additional for flow in net_flows)
        new_rate = avg_monthly_savings + additional

        impacts: List[GoalImpact] = [self.goal_impact(goal, new_rate, today) for goal in goals]

        return WhatIfScenario(
            scenario=self.describe(additional),
            monthly_savings=additional,
            projected_balance=round_money(projected_balance),
            goals_impact=impacts,
        )
