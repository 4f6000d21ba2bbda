"""
Projection Configuration
Tunable projection policy and environment-driven runtime settings
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProjectionPolicy:
    """Constants that shape the projections.

    The trend divisor and goal safety buffer reproduce the long-standing
    behaviour of the mobile client; they are heuristics, not fitted values.
    """

    trend_window: int = 3
    trend_divisor: float = 3.0
    high_confidence_ratio: float = 0.2
    medium_confidence_ratio: float = 0.4
    goal_safety_buffer: float = 1.1
    days_per_month: float = 30.0
    alert_utilization_threshold: float = 70.0
    insight_change_threshold: float = 10.0
    excellent_savings_rate: float = 20.0


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


@dataclass
class ProjectionSettings:
    """Runtime settings for the finance API client and projection engine"""

    api_url: str = "http://localhost:5000"
    api_token: str = ""
    api_timeout: float = 10.0
    history_months: int = 6
    page_size: int = 100
    max_pages: int = 50
    entity_limit: int = 100
    default_months_ahead: int = 6
    currency: str = "$"
    host: str = "127.0.0.1"
    port: int = 8080
    policy: ProjectionPolicy = field(default_factory=ProjectionPolicy)

    @classmethod
    def from_environment(cls) -> "ProjectionSettings":
        return cls(
            api_url=os.getenv("FINANCE_API_URL", "http://localhost:5000").rstrip("/"),
            api_token=os.getenv("FINANCE_API_TOKEN", ""),
            api_timeout=_env_float("FINANCE_API_TIMEOUT", 10.0),
            history_months=_env_int("PROJECTION_HISTORY_MONTHS", 6),
            page_size=_env_int("PROJECTION_PAGE_SIZE", 100),
            max_pages=_env_int("PROJECTION_MAX_PAGES", 50),
            entity_limit=_env_int("PROJECTION_ENTITY_LIMIT", 100),
            default_months_ahead=_env_int("PROJECTION_MONTHS_AHEAD", 6),
            currency=os.getenv("PROJECTION_CURRENCY", "$"),
            host=os.getenv("PROJECTION_HOST", "127.0.0.1"),
            port=_env_int("PROJECTION_PORT", 8080),
        )
