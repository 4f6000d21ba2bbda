"""
Finance API Client
Synchronous client for the personal-finance REST backend
"""

import requests
from datetime import date
from typing import Any, Dict, List, Optional

from .config import ProjectionSettings


class FinanceApiError(Exception):
    """Raised when the backend answers with an unsuccessful payload"""


class FinanceApiClient:
    """Client for the transactions, goals and budgets endpoints"""

    def __init__(self, base_url: str = None, token: str = None, timeout: float = None):
        """
        Initialize finance API client

        Args:
            base_url: Backend root URL (defaults to FINANCE_API_URL)
            token: Bearer token (defaults to FINANCE_API_TOKEN)
            timeout: Request timeout in seconds
        """
        settings = ProjectionSettings.from_environment()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.token = token if token is not None else settings.api_token
        self.timeout = timeout or settings.api_timeout

    def _headers(self) -> Dict[str, str]:
        headers = {
            'Accept': 'application/json',
            'Content-Type': 'application/json'
        }
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        response = requests.get(
            f"{self.base_url}{endpoint}",
            headers=self._headers(),
            params=params,
            timeout=self.timeout
        )
        response.raise_for_status()

        payload = response.json() if response.text else {}
        if not payload.get('success', False):
            raise FinanceApiError(f"{endpoint} failed: {payload.get('message', 'unsuccessful response')}")
        return payload

    def get_transactions(self, page: int = 1, limit: int = 100) -> Dict[str, Any]:
        """
        Get one page of transactions

        Args:
            page: 1-based page number
            limit: Page size

        Returns:
            Dict with ``data`` records and ``pagination`` info
        """
        payload = self._get('/api/transactions', params={'page': page, 'limit': limit})
        pagination = payload.get('pagination') or {}
        try:
            current = int(pagination.get('current', page))
            pages = int(pagination.get('pages', page))
        except (TypeError, ValueError) as exc:
            raise FinanceApiError(f"/api/transactions returned malformed pagination: {pagination!r}") from exc
        return {
            'data': payload.get('data') or [],
            'page': current,
            'pages': pages,
        }

    def get_financial_summary(self) -> Dict[str, Any]:
        payload = self._get('/api/transactions/summary')
        return payload.get('summary') or {}

    def get_active_goals(self, limit: int = 10) -> List[Dict[str, Any]]:
        payload = self._get('/api/goals/active', params={'limit': limit})
        return payload.get('goals') or []

    def get_current_budgets(self, limit: int = None, today: date = None) -> List[Dict[str, Any]]:
        """
        Get active budgets for the current month

        Args:
            limit: Optional maximum number of budgets
            today: Reference date for the month/year filter

        Returns:
            List of budget records
        """
        today = today or date.today()
        params = {
            'month': today.month,
            'year': today.year,
            'isActive': 'true'
        }
        if limit:
            params['limit'] = limit

        payload = self._get('/api/budgets', params=params)
        return payload.get('budgets') or []
