"""Async-friendly data provider backed by the finance REST API."""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Callable, List, Optional

import requests

from .config import ProjectionSettings
from .finance_api import FinanceApiClient, FinanceApiError
from .models import Budget, FinancialSummary, Goal, TransactionPage
from .normalization import (
    normalise_budgets,
    normalise_goals,
    normalise_summary,
    normalise_transactions,
)

LOGGER = logging.getLogger(__name__)


class DataFetchError(RuntimeError):
    """A collaborator fetch failed; the projection run is aborted."""


class FinanceDataService:
    """Coroutine wrapper that fetches and normalises finance records."""

    def __init__(
        self,
        *,
        settings: Optional[ProjectionSettings] = None,
        client: Optional[FinanceApiClient] = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings or ProjectionSettings.from_environment()
        self.client = client or FinanceApiClient(
            base_url=self.settings.api_url,
            token=self.settings.api_token,
            timeout=self.settings.api_timeout,
        )
        self.clock = clock

    @classmethod
    def from_environment(cls) -> "FinanceDataService":
        return cls()

    async def _call(self, description: str, func, *args, **kwargs):
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except (requests.RequestException, FinanceApiError) as exc:
            LOGGER.error("Finance API %s call failed: %s", description, exc)
            raise DataFetchError(f"Failed to fetch {description}") from exc

    async def fetch_transactions(self, page: int = 1, limit: int = 100) -> TransactionPage:
        payload = await self._call("transactions", self.client.get_transactions, page, limit)
        return TransactionPage(
            items=normalise_transactions(payload["data"]),
            page=payload["page"],
            pages=payload["pages"],
        )

    async def fetch_active_goals(self, limit: int = 100) -> List[Goal]:
        records = await self._call("goals", self.client.get_active_goals, limit)
        return normalise_goals(records)

    async def fetch_active_budgets(self, limit: int = 100) -> List[Budget]:
        records = await self._call("budgets", self.client.get_current_budgets, limit, self.clock())
        return normalise_budgets(records)

    async def fetch_financial_summary(self) -> FinancialSummary:
        record = await self._call("financial summary", self.client.get_financial_summary)
        return normalise_summary(record)
