"""
Record Normalization
Coerces loosely shaped finance API records into projection model types
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from dateutil import parser as date_parser

from .models import (
    Budget,
    FinancialSummary,
    Goal,
    GoalStatus,
    Transaction,
    TransactionKind,
)

LOGGER = logging.getLogger(__name__)


def parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date_parser.isoparse(str(value)).date()
    except (TypeError, ValueError):
        return None


def parse_amount(value: Any) -> float:
    """Coerce an amount field to a finite float, 0.0 when it is missing or unusable."""
    if value is None or value == "" or isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def _label(value: Any) -> str:
    return str(value).strip().lower() if value is not None else ""


def _record_id(record: Dict[str, Any]) -> str:
    return str(record.get("id") or record.get("_id") or "")


def normalise_transaction(record: Dict[str, Any]) -> Optional[Transaction]:
    """Build a Transaction, or None when the record has no usable date or kind."""
    when = parse_date(record.get("date"))
    if when is None:
        LOGGER.warning("Skipping transaction %s without a valid date", _record_id(record))
        return None

    raw_kind = _label(record.get("type") or record.get("kind"))
    try:
        kind = TransactionKind(raw_kind)
    except ValueError:
        LOGGER.warning("Skipping transaction %s with unknown type %r", _record_id(record), raw_kind)
        return None

    return Transaction(date=when, amount=abs(parse_amount(record.get("amount"))), kind=kind)


def normalise_goal(record: Dict[str, Any]) -> Optional[Goal]:
    target_date = parse_date(record.get("targetDate") or record.get("endDate"))
    if target_date is None:
        LOGGER.warning("Skipping goal %s without a target date", _record_id(record))
        return None

    raw_status = _label(record.get("status") or GoalStatus.ACTIVE.value)
    try:
        status = GoalStatus(raw_status)
    except ValueError:
        LOGGER.warning("Goal %s has unknown status %r, treating as paused", _record_id(record), raw_status)
        status = GoalStatus.PAUSED

    return Goal(
        id=_record_id(record),
        title=record.get("title") or record.get("name") or "Untitled goal",
        current_amount=max(0.0, parse_amount(record.get("currentAmount"))),
        target_amount=max(0.0, parse_amount(record.get("targetAmount"))),
        target_date=target_date,
        status=status,
    )


def normalise_budget(record: Dict[str, Any]) -> Optional[Budget]:
    limit = record.get("monthlyLimit")
    if limit is None:
        limit = record.get("amount")
    monthly_limit = parse_amount(limit)
    if monthly_limit <= 0:
        LOGGER.warning("Skipping budget %s without a positive monthly limit", _record_id(record))
        return None

    return Budget(
        id=_record_id(record),
        name=record.get("name") or "Unnamed budget",
        monthly_limit=monthly_limit,
        spent=max(0.0, parse_amount(record.get("spent"))),
        is_active=bool(record.get("isActive", True)),
    )


def normalise_summary(record: Optional[Dict[str, Any]]) -> FinancialSummary:
    record = record or {}
    return FinancialSummary(
        income=parse_amount(record.get("income")),
        expense=parse_amount(record.get("expense")),
        balance=parse_amount(record.get("balance")),
    )


def _collect(records: Iterable[Dict[str, Any]], normaliser) -> List[Any]:
    collected = []
    for record in records or []:
        if not isinstance(record, dict):
            LOGGER.warning("Skipping non-object record: %r", record)
            continue
        item = normaliser(record)
        if item is not None:
            collected.append(item)
    return collected


def normalise_transactions(records: Iterable[Dict[str, Any]]) -> List[Transaction]:
    return _collect(records, normalise_transaction)


def normalise_goals(records: Iterable[Dict[str, Any]]) -> List[Goal]:
    return _collect(records, normalise_goal)


def normalise_budgets(records: Iterable[Dict[str, Any]]) -> List[Budget]:
    return _collect(records, normalise_budget)
