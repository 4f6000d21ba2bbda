"""
Test Suite: Goal completion estimates
"""

from datetime import date, timedelta

import pytest

from finance_projection.config import ProjectionPolicy
from finance_projection.goal_projector import GoalProjector
from finance_projection.models import Achievable, Goal, GoalStatus, MonthBucket, Unreachable


def saving_buckets(net_per_month, months=3):
    return [
        MonthBucket(month_key=f"2024-{i + 1:02d}", total_income=3000.0, total_expense=3000.0 - net_per_month)
        for i in range(months)
    ]


class TestGoalProjections:

    @pytest.fixture
    def projector(self):
        return GoalProjector()

    @pytest.fixture
    def house_goal(self, today):
        return Goal(
            id='goal-1',
            title='House deposit',
            current_amount=4000.0,
            target_amount=10000.0,
            target_date=today + timedelta(days=300),
        )

    def test_achievable_goal(self, projector, house_goal, today):
        [projection] = projector.project([house_goal], saving_buckets(1000.0), today)

        assert projection.goal_id == 'goal-1'
        assert projection.goal_title == 'House deposit'
        assert projection.months_to_complete == Achievable(6)
        assert projection.estimated_completion_date == date(2024, 12, 15)
        assert projection.monthly_required == 600
        assert projection.current_monthly_average == 1000
        assert projection.needs_acceleration is False
        assert projection.suggested_monthly_amount == 660

    def test_months_round_up(self, projector, house_goal, today):
        [projection] = projector.project([house_goal], saving_buckets(700.0), today)
        assert projection.months_to_complete == Achievable(9)

    def test_needs_acceleration_when_deadline_is_close(self, projector, today):
        goal = Goal('goal-2', 'Holiday', 0.0, 3000.0, today + timedelta(days=60))
        [projection] = projector.project([goal], saving_buckets(1000.0), today)

        assert projection.monthly_required == 1500
        assert projection.needs_acceleration is True
        assert projection.suggested_monthly_amount == 1650

    def test_unreachable_without_savings(self, projector, house_goal, today):
        [projection] = projector.project([house_goal], saving_buckets(-200.0), today)

        assert isinstance(projection.months_to_complete, Unreachable)
        assert projection.estimated_completion_date is None
        assert projection.needs_acceleration is True
        assert projection.to_dict()['months_to_complete'] == {'reachable': False, 'months': None}

    def test_unreachable_with_empty_history(self, projector, house_goal, today):
        [projection] = projector.project([house_goal], [], today)

        assert isinstance(projection.months_to_complete, Unreachable)
        assert projection.current_monthly_average == 0

    def test_past_deadline_uses_one_month(self, projector, today):
        goal = Goal('goal-3', 'Overdue', 500.0, 2500.0, today - timedelta(days=45))
        [projection] = projector.project([goal], saving_buckets(1000.0), today)
        assert projection.monthly_required == 2000

    def test_goal_already_reached(self, projector, today):
        goal = Goal('goal-4', 'Done', 1200.0, 1000.0, today + timedelta(days=90))
        [projection] = projector.project([goal], [], today)

        assert projection.months_to_complete == Achievable(0)
        assert projection.estimated_completion_date == today
        assert projection.monthly_required == 0
        assert projection.needs_acceleration is False

    def test_only_active_goals_in_input_order(self, projector, house_goal, today):
        paused = Goal('p', 'Paused', 0.0, 100.0, today, status=GoalStatus.PAUSED)
        completed = Goal('c', 'Completed', 100.0, 100.0, today, status=GoalStatus.COMPLETED)
        second = Goal('goal-9', 'Car', 0.0, 5000.0, today + timedelta(days=365))

        projections = projector.project([second, paused, house_goal, completed], saving_buckets(500.0), today)
        assert [p.goal_id for p in projections] == ['goal-9', 'goal-1']

    def test_safety_buffer_is_configurable(self, house_goal, today):
        projector = GoalProjector(ProjectionPolicy(goal_safety_buffer=1.25))
        [projection] = projector.project([house_goal], saving_buckets(1000.0), today)
        assert projection.suggested_monthly_amount == 750

    @pytest.mark.parametrize('remaining,rate,expected', [
        (1000.0, 250.0, Achievable(4)),
        (1000.0, 300.0, Achievable(4)),
        (0.0, 0.0, Achievable(0)),
        (1000.0, 0.0, Unreachable()),
        (1000.0, -50.0, Unreachable()),
    ])
    def test_estimate_completion(self, remaining, rate, expected):
        assert GoalProjector.estimate_completion(remaining, rate) == expected
