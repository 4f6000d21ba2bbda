"""
Unit tests for coercing finance API records into model types.
"""

from datetime import date

import pytest

from finance_projection.models import GoalStatus, TransactionKind
from finance_projection.normalization import (
    normalise_budget,
    normalise_budgets,
    normalise_goal,
    normalise_summary,
    normalise_transaction,
    normalise_transactions,
    parse_date,
)


class TestTransactions:

    def test_api_record(self):
        record = {
            '_id': '65a1',
            'description': 'Salary',
            'amount': '4200.50',
            'type': 'income',
            'date': '2024-01-15T10:30:00.000Z',
        }
        transaction = normalise_transaction(record)

        assert transaction.date == date(2024, 1, 15)
        assert transaction.amount == 4200.5
        assert transaction.kind == TransactionKind.INCOME

    def test_negative_amount_is_made_positive(self):
        transaction = normalise_transaction({'amount': -30, 'type': 'Expense', 'date': '2024-02-01'})
        assert transaction.amount == 30.0
        assert transaction.kind == TransactionKind.EXPENSE

    def test_unusable_records_are_dropped(self, caplog):
        records = [
            {'id': 'no-date', 'amount': 10, 'type': 'expense'},
            {'id': 'bad-date', 'amount': 10, 'type': 'expense', 'date': 'yesterday'},
            {'id': 'bad-type', 'amount': 10, 'type': 'refund', 'date': '2024-02-01'},
            'not a record',
            {'id': 'ok', 'amount': 10, 'type': 'expense', 'date': '2024-02-01'},
        ]
        transactions = normalise_transactions(records)

        assert len(transactions) == 1
        assert 'bad-type' in caplog.text

    def test_none_input(self):
        assert normalise_transactions(None) == []

    def test_non_string_type_is_dropped(self, caplog):
        records = [
            {'id': 'numeric-type', 'date': '2024-05-01', 'amount': 5, 'type': 1},
            {'id': 'list-kind', 'date': '2024-05-01', 'amount': 5, 'kind': ['income']},
        ]
        assert normalise_transactions(records) == []
        assert 'numeric-type' in caplog.text

    @pytest.mark.parametrize('amount', ['NaN', 'inf', '-Infinity', float('nan')])
    def test_non_finite_amount_becomes_zero(self, amount):
        transaction = normalise_transaction({'amount': amount, 'type': 'expense', 'date': '2024-02-01'})
        assert transaction.amount == 0.0


class TestGoals:

    def test_compatibility_fields(self):
        goal = normalise_goal({
            '_id': 'g-1',
            'name': 'Trip',
            'currentAmount': 250,
            'targetAmount': '1000',
            'endDate': '2024-12-31',
            'status': 'active',
        })

        assert goal.id == 'g-1'
        assert goal.title == 'Trip'
        assert goal.target_amount == 1000.0
        assert goal.target_date == date(2024, 12, 31)
        assert goal.status == GoalStatus.ACTIVE

    def test_target_date_preferred_over_end_date(self):
        goal = normalise_goal({'id': 'g', 'title': 'T', 'targetDate': '2025-01-01', 'endDate': '2024-01-01'})
        assert goal.target_date == date(2025, 1, 1)

    def test_missing_title_and_unknown_status(self):
        goal = normalise_goal({'id': 'g', 'endDate': '2024-12-31', 'status': 'archived'})
        assert goal.title == 'Untitled goal'
        assert goal.status == GoalStatus.PAUSED

    def test_goal_without_dates_is_dropped(self):
        assert normalise_goal({'id': 'g', 'title': 'No date'}) is None

    def test_non_string_status_is_paused(self):
        goal = normalise_goal({'id': 'g', 'endDate': '2024-12-31', 'status': 3})
        assert goal.status == GoalStatus.PAUSED

    def test_non_finite_amounts_become_zero(self):
        goal = normalise_goal({'id': 'g', 'endDate': '2024-12-31', 'currentAmount': 'inf', 'targetAmount': 'NaN'})
        assert goal.current_amount == 0.0
        assert goal.target_amount == 0.0


class TestBudgets:

    def test_amount_fallback_and_missing_spent(self):
        budget = normalise_budget({'_id': 'b-1', 'name': 'Food', 'amount': 400, 'isActive': True})
        assert budget.monthly_limit == 400.0
        assert budget.spent == 0.0
        assert budget.is_active is True

    def test_non_positive_limit_is_dropped(self):
        assert normalise_budgets([{'id': 'b', 'monthlyLimit': 0}, {'id': 'c', 'monthlyLimit': 'x'}]) == []

    @pytest.mark.parametrize('limit', ['NaN', 'inf', float('nan')])
    def test_non_finite_limit_is_dropped(self, limit):
        assert normalise_budgets([{'id': 'b', 'monthlyLimit': limit, 'spent': 10}]) == []

    def test_non_finite_spent_becomes_zero(self):
        budget = normalise_budget({'id': 'b', 'monthlyLimit': 300, 'spent': 'Infinity'})
        assert budget.spent == 0.0


def test_summary_defaults():
    summary = normalise_summary({'balance': '1520.75'})
    assert summary.balance == 1520.75
    assert summary.income == 0.0
    assert normalise_summary(None).balance == 0.0


@pytest.mark.parametrize('value,expected', [
    ('2024-03-09', date(2024, 3, 9)),
    ('2024-03-09T23:59:59+00:00', date(2024, 3, 9)),
    (date(2024, 3, 9), date(2024, 3, 9)),
    ('', None),
    (None, None),
    ('not-a-date', None),
])
def test_parse_date(value, expected):
    assert parse_date(value) == expected
