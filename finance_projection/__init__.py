"""
Personal Finance Projection - Core Modules
"""

from .aggregator import MonthlyAggregator
from .budget_alerts import BudgetAlertEngine
from .config import ProjectionPolicy, ProjectionSettings
from .engine import FinanceDataProvider, ProjectionEngine
from .finance_service import DataFetchError, FinanceDataService
from .goal_projector import GoalProjector
from .insights import InsightGenerator
from .projector import MonthlyProjector
from .scenario import ScenarioSimulator

__all__ = [
    'MonthlyAggregator',
    'BudgetAlertEngine',
    'ProjectionPolicy',
    'ProjectionSettings',
    'FinanceDataProvider',
    'ProjectionEngine',
    'DataFetchError',
    'FinanceDataService',
    'GoalProjector',
    'InsightGenerator',
    'MonthlyProjector',
    'ScenarioSimulator',
]

__version__ = '0.1.0'
