"""Engine state and payoff output records."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from .debt import Debt


@dataclass(slots=True)
class DebtSnapshot:
    """Working copy of a debt for one simulation; ``balance`` is mutated per round."""

    debt_id: str
    balance: Decimal
    annual_rate: Decimal
    minimum_payment: Decimal
    priority: int
    position: int

    @classmethod
    def from_debt(cls, debt: Debt, *, position: int, priority: Optional[int] = None) -> "DebtSnapshot":
        return cls(
            debt_id=debt.id,
            balance=debt.balance,
            annual_rate=debt.annual_rate,
            minimum_payment=debt.minimum_payment,
            priority=priority if priority is not None else (debt.priority or 0),
            position=position,
        )

    @property
    def is_active(self) -> bool:
        return self.balance > 0


@dataclass(frozen=True, slots=True)
class PaymentAllocation:
    debt_id: str
    amount: Decimal
    is_extra: bool


@dataclass(frozen=True, slots=True)
class AllocationRound:
    """Allocator output for one month."""

    allocations: tuple[PaymentAllocation, ...]
    completed: tuple[str, ...]

    def total_for(self, debt_id: str) -> Decimal:
        return sum(
            (a.amount for a in self.allocations if a.debt_id == debt_id), Decimal("0")
        )

    def extra_for(self, debt_id: str) -> Decimal:
        return sum(
            (a.amount for a in self.allocations if a.debt_id == debt_id and a.is_extra),
            Decimal("0"),
        )


@dataclass(frozen=True, slots=True)
class ScheduleEntry:
    """One debt's activity in one simulated month (amounts in dollars)."""

    debt_id: str
    month: int
    payment_date: date
    starting_balance: float
    payment: float
    extra_payment: float
    interest: float
    principal: float
    ending_balance: float
    completed: bool


@dataclass(frozen=True, slots=True)
class PayoffResult:
    """Summary and full schedule of a payoff simulation."""

    strategy: str
    extra_payment: float
    total_payment: float
    minimum_payment_total: float
    total_interest_paid: float
    baseline_interest: float
    total_interest_saved: float
    payoff_date: date
    months: int
    schedule: tuple[ScheduleEntry, ...]
    payoff_order: tuple[str, ...]

    @property
    def monthly_payment(self) -> float:
        """Minimums plus extra: what the caller commits to each month."""

        return round(self.minimum_payment_total + self.extra_payment, 2)

    def rows_for(self, debt_id: str) -> list[ScheduleEntry]:
        return [row for row in self.schedule if row.debt_id == debt_id]

    def rows_for_month(self, month: int) -> list[ScheduleEntry]:
        return [row for row in self.schedule if row.month == month]

    def debt_payoff_month(self, debt_id: str) -> Optional[int]:
        for row in self.schedule:
            if row.debt_id == debt_id and row.completed:
                return row.month
        return None

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation (dates as ISO strings)."""

        data = asdict(self)
        data["payoff_date"] = self.payoff_date.isoformat()
        data["monthly_payment"] = self.monthly_payment
        data["schedule"] = [
            {**row, "payment_date": row["payment_date"].isoformat()} for row in data["schedule"]
        ]
        data["payoff_order"] = list(self.payoff_order)
        return data
