"""
Projection Data Model
Input records, derived month buckets and the report types returned to callers
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict, List, Optional, Union


def round_money(value: float) -> int:
    """Round to the nearest whole currency unit, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class TransactionKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class GoalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Transaction:
    date: date
    amount: float
    kind: TransactionKind


@dataclass(frozen=True)
class Goal:
    id: str
    title: str
    current_amount: float
    target_amount: float
    target_date: date
    status: GoalStatus = GoalStatus.ACTIVE


@dataclass(frozen=True)
class Budget:
    id: str
    name: str
    monthly_limit: float
    spent: float = 0.0
    is_active: bool = True


@dataclass(frozen=True)
class FinancialSummary:
    income: float = 0.0
    expense: float = 0.0
    balance: float = 0.0


@dataclass(frozen=True)
class TransactionPage:
    """One page of the remote transaction listing."""

    items: List[Transaction]
    page: int = 1
    pages: int = 1

    @property
    def has_more(self) -> bool:
        return self.page < self.pages


@dataclass(frozen=True)
class MonthBucket:
    month_key: str
    total_income: float = 0.0
    total_expense: float = 0.0

    @property
    def net(self) -> float:
        return self.total_income - self.total_expense


@dataclass(frozen=True)
class Achievable:
    months: int

    @property
    def reachable(self) -> bool:
        return True


@dataclass(frozen=True)
class Unreachable:
    """The goal cannot be reached at the current saving rate."""

    @property
    def reachable(self) -> bool:
        return False


CompletionEstimate = Union[Achievable, Unreachable]


def estimate_to_dict(estimate: CompletionEstimate) -> Dict[str, Any]:
    months = estimate.months if isinstance(estimate, Achievable) else None
    return {"reachable": estimate.reachable, "months": months}


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class MonthlyProjection:
    month: str
    month_key: str
    projected_income: int
    projected_expenses: int
    projected_balance: int
    confidence: Confidence

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "month_key": self.month_key,
            "projected_income": self.projected_income,
            "projected_expenses": self.projected_expenses,
            "projected_balance": self.projected_balance,
            "confidence": self.confidence.value,
        }


@dataclass
class GoalProjection:
    goal_id: str
    goal_title: str
    current_amount: float
    target_amount: float
    months_to_complete: CompletionEstimate
    estimated_completion_date: Optional[date]
    monthly_required: int
    current_monthly_average: int
    needs_acceleration: bool
    suggested_monthly_amount: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "goal_id": self.goal_id,
            "goal_title": self.goal_title,
            "current_amount": self.current_amount,
            "target_amount": self.target_amount,
            "months_to_complete": estimate_to_dict(self.months_to_complete),
            "estimated_completion_date": _iso(self.estimated_completion_date),
            "monthly_required": self.monthly_required,
            "current_monthly_average": self.current_monthly_average,
            "needs_acceleration": self.needs_acceleration,
            "suggested_monthly_amount": self.suggested_monthly_amount,
        }


@dataclass
class BudgetAlert:
    budget_id: str
    budget_name: str
    current_spent: int
    limit: float
    utilization: int
    days_remaining: int
    projected_end_of_month: int
    will_exceed: bool
    recommended_daily_limit: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "budget_id": self.budget_id,
            "budget_name": self.budget_name,
            "current_spent": self.current_spent,
            "limit": self.limit,
            "utilization": self.utilization,
            "days_remaining": self.days_remaining,
            "projected_end_of_month": self.projected_end_of_month,
            "will_exceed": self.will_exceed,
            "recommended_daily_limit": self.recommended_daily_limit,
        }


@dataclass
class FinancialProjection:
    current_balance: float
    monthly_projections: List[MonthlyProjection]
    goal_projections: List[GoalProjection]
    budget_alerts: List[BudgetAlert]
    insights: List[str]
    savings_rate: float
    burn_rate: float
    generated_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_balance": self.current_balance,
            "monthly_projections": [p.to_dict() for p in self.monthly_projections],
            "goal_projections": [g.to_dict() for g in self.goal_projections],
            "budget_alerts": [a.to_dict() for a in self.budget_alerts],
            "insights": list(self.insights),
            "savings_rate": self.savings_rate,
            "burn_rate": self.burn_rate,
            "generated_at": self.generated_at.isoformat(),
        }


@dataclass
class GoalImpact:
    goal_title: str
    months_reduced: Optional[int]
    new_completion: CompletionEstimate
    new_completion_date: Optional[date]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "goal_title": self.goal_title,
            "months_reduced": self.months_reduced,
            "new_completion": estimate_to_dict(self.new_completion),
            "new_completion_date": _iso(self.new_completion_date),
        }


@dataclass
class WhatIfScenario:
    scenario: str
    monthly_savings: float
    projected_balance: int
    goals_impact: List[GoalImpact]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scenario": self.scenario,
            "monthly_savings": self.monthly_savings,
            "projected_balance": self.projected_balance,
            "goals_impact": [impact.to_dict() for impact in self.goals_impact],
        }
