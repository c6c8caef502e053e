"""Domain model exports."""

from .debt import (
    CATEGORY_DEFAULTS,
    Debt,
    DebtBook,
    DebtCategory,
    suggested_rate,
    total_balance,
    total_minimum_payment,
    weighted_average_rate,
)
from .payoff import (
    AllocationRound,
    DebtSnapshot,
    PaymentAllocation,
    PayoffResult,
    ScheduleEntry,
)

__all__ = [
    "AllocationRound",
    "CATEGORY_DEFAULTS",
    "Debt",
    "DebtBook",
    "DebtCategory",
    "DebtSnapshot",
    "PaymentAllocation",
    "PayoffResult",
    "ScheduleEntry",
    "suggested_rate",
    "total_balance",
    "total_minimum_payment",
    "weighted_average_rate",
]
