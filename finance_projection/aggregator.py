"""
Monthly Aggregator Module
Groups transactions into per-calendar-month income and expense totals
"""

from collections import defaultdict
from typing import Dict, Iterable, List

from .models import MonthBucket, Transaction, TransactionKind


class MonthlyAggregator:
    """Builds sparse, chronologically ordered month buckets"""

    @staticmethod
    def month_key(transaction: Transaction) -> str:
        return f"{transaction.date.year:04d}-{transaction.date.month:02d}"

    def group_by_month(self, transactions: Iterable[Transaction]) -> List[MonthBucket]:
        """
        Sum income and expense transactions per calendar month

        Args:
            transactions: Transaction records in any order

        Returns:
            One bucket per month that holds any record,
            sorted by ``YYYY-MM`` key
        """
        totals: Dict[str, Dict[str, float]] = defaultdict(lambda: {"income": 0.0, "expense": 0.0})

        for transaction in transactions:
            month = totals[self.month_key(transaction)]
            if transaction.kind == TransactionKind.INCOME:
                month["income"] += transaction.amount
            elif transaction.kind == TransactionKind.EXPENSE:
                month["expense"] += transaction.amount

        return [
            MonthBucket(
                month_key=key,
                total_income=totals[key]["income"],
                total_expense=totals[key]["expense"],
            )
            for key in sorted(totals)
        ]
