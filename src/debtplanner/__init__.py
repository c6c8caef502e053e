"""Multi-debt payoff planner: avalanche, snowball and custom priority."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .errors import PayoffConvergenceError, PayoffError, PlanValidationError, ValidationIssue
from .models import Debt, DebtBook, DebtCategory, PayoffResult, ScheduleEntry
from .services.baseline import baseline_interest, baseline_months
from .services.consolidation import ConsolidationAnalysis, compare_consolidation
from .services.debts import compare_strategies, simulate_payoff
from .services.strategy import Avalanche, Custom, Snowball, parse_strategy
from .services.validation import ensure_valid, validate_plan

__version__ = "0.1.0"

__all__ = [
    "Avalanche",
    "BaseConfig",
    "ConsolidationAnalysis",
    "Custom",
    "Debt",
    "DebtBook",
    "DebtCategory",
    "DevConfig",
    "PayoffConvergenceError",
    "PayoffError",
    "PayoffResult",
    "PlanValidationError",
    "ScheduleEntry",
    "Snowball",
    "ValidationIssue",
    "baseline_interest",
    "baseline_months",
    "compare_consolidation",
    "compare_strategies",
    "ensure_valid",
    "parse_strategy",
    "simulate_payoff",
    "validate_plan",
]
