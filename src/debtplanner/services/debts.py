"""Debt payoff simulation (avalanche, snowball and custom priority)."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping, Union

from ..constants import DEFAULT_MAX_MONTHS
from ..errors import PayoffConvergenceError
from ..logging_config import get_logger
from ..models.debt import Debt, DebtBook, coerce_debt
from ..models.payoff import DebtSnapshot, PayoffResult, ScheduleEntry
from ..money import ZERO, MoneyLike, money_max, money_sum, monthly_rate, to_decimal, to_float
from .allocator import allocate
from .baseline import total_baseline_interest
from .strategy import Avalanche, Custom, Snowball, Strategy, parse_strategy

logger = get_logger(__name__)

DebtInput = Union[DebtBook, Iterable[Union[Debt, Mapping[str, Any]]]]


def _as_debts(debts: DebtInput) -> list[Debt]:
    if isinstance(debts, DebtBook):
        return debts.debts()
    return [coerce_debt(debt) for debt in debts]


def add_months(value: date, months: int) -> date:
    """Return the first of the month *months* after *value*."""

    index = value.month - 1 + months
    year = value.year + index // 12
    month = index % 12 + 1
    return date(year, month, 1)


def simulate_payoff(
    debts: DebtInput,
    extra_payment: MoneyLike = 0,
    strategy: "Strategy | str" = "avalanche",
    *,
    start_date: date | None = None,
    max_months: int = DEFAULT_MAX_MONTHS,
    priorities: Mapping[str, int] | None = None,
) -> PayoffResult:
    """Simulate paying off *debts* month by month.

    Each month every open debt accrues ``balance * rate / 12``, then the pool
    (all minimum payments plus *extra_payment*) is split by the allocator:
    minimums first, the rest in strategy order. Minimums of retired debts stay
    in the pool, so they roll onto the debts still open.

    Args:
        debts: Debts in input order; ties in strategy order keep this order.
        extra_payment: Monthly amount on top of the minimums.
        strategy: A strategy variant or one of ``avalanche``, ``snowball``,
            ``custom``.
        start_date: Month the plan starts; defaults to the current month.
        max_months: Round ceiling; exceeding it raises
            ``PayoffConvergenceError``.
        priorities: Debt id to priority for the custom strategy.

    Returns:
        The immutable ``PayoffResult`` with schedule rows per debt and month.
    """

    plan = parse_strategy(strategy, priorities)
    items = _as_debts(debts)
    start = (start_date or date.today()).replace(day=1)
    extra = money_max(to_decimal(extra_payment), ZERO)

    snapshots = [DebtSnapshot.from_debt(debt, position=idx) for idx, debt in enumerate(items)]
    minimum_total = money_sum(snap.minimum_payment for snap in snapshots)
    pool = minimum_total + extra

    logger.debug(
        "Starting payoff simulation",
        extra={"strategy": plan.name, "debts": len(snapshots), "pool": pool},
    )

    schedule: list[ScheduleEntry] = []
    payoff_order: list[str] = []
    total_interest = ZERO
    total_paid = ZERO
    month = 0

    while any(snap.is_active for snap in snapshots):
        if month >= max_months:
            remaining = money_sum(snap.balance for snap in snapshots if snap.is_active)
            logger.error(
                "Payoff schedule did not converge",
                extra={"strategy": plan.name, "months": month, "remaining": remaining},
            )
            raise PayoffConvergenceError(months=month, remaining_balance=remaining)

        month += 1
        payment_date = add_months(start, month)
        active = [snap for snap in snapshots if snap.is_active]

        opening: dict[str, Decimal] = {}
        interest: dict[str, Decimal] = {}
        for snap in active:
            opening[snap.debt_id] = snap.balance
            charge = snap.balance * monthly_rate(snap.annual_rate)
            interest[snap.debt_id] = charge
            snap.balance += charge
            total_interest += charge

        allocation = allocate(snapshots, pool, plan)

        for snap in active:
            paid = allocation.total_for(snap.debt_id)
            snap.balance = money_max(snap.balance - paid, ZERO)
            total_paid += paid
            schedule.append(
                ScheduleEntry(
                    debt_id=snap.debt_id,
                    month=month,
                    payment_date=payment_date,
                    starting_balance=to_float(opening[snap.debt_id]),
                    payment=to_float(paid),
                    extra_payment=to_float(allocation.extra_for(snap.debt_id)),
                    interest=to_float(interest[snap.debt_id]),
                    principal=to_float(paid - interest[snap.debt_id]),
                    ending_balance=to_float(snap.balance),
                    completed=snap.debt_id in allocation.completed,
                )
            )

        for debt_id in allocation.completed:
            if debt_id not in payoff_order:
                payoff_order.append(debt_id)

    baseline = total_baseline_interest(items, horizon_months=max_months)
    result = PayoffResult(
        strategy=plan.name,
        extra_payment=to_float(extra),
        total_payment=to_float(total_paid),
        minimum_payment_total=to_float(minimum_total),
        total_interest_paid=to_float(total_interest),
        baseline_interest=to_float(baseline),
        total_interest_saved=to_float(baseline - total_interest),
        payoff_date=add_months(start, month),
        months=month,
        schedule=tuple(schedule),
        payoff_order=tuple(payoff_order),
    )
    logger.info(
        "Payoff simulation complete",
        extra={
            "strategy": plan.name,
            "months": month,
            "total_interest": result.total_interest_paid,
            "interest_saved": result.total_interest_saved,
        },
    )
    return result


def avalanche_schedule(*, debts: DebtInput, surplus: MoneyLike, **kwargs) -> PayoffResult:
    """Return payoff prioritizing highest APR first."""
    return simulate_payoff(debts, surplus, Avalanche(), **kwargs)


def snowball_schedule(*, debts: DebtInput, surplus: MoneyLike, **kwargs) -> PayoffResult:
    """Return payoff prioritizing smallest balances first."""
    return simulate_payoff(debts, surplus, Snowball(), **kwargs)


def compare_strategies(
    debts: DebtInput,
    extra_payment: MoneyLike = 0,
    *,
    start_date: date | None = None,
    max_months: int = DEFAULT_MAX_MONTHS,
    priorities: Mapping[str, int] | None = None,
) -> dict[str, PayoffResult]:
    """Run every applicable strategy on the same inputs, keyed by name.

    ``custom`` is included only when *priorities* are given or some debt
    carries its own priority.
    """

    items = _as_debts(debts)
    start = start_date or date.today()
    strategies: list[Strategy] = [Avalanche(), Snowball()]
    if priorities or any(debt.priority is not None for debt in items):
        strategies.append(Custom(priorities or {}))
    return {
        plan.name: simulate_payoff(
            items, extra_payment, plan, start_date=start, max_months=max_months
        )
        for plan in strategies
    }


__all__ = [
    "add_months",
    "avalanche_schedule",
    "compare_strategies",
    "simulate_payoff",
    "snowball_schedule",
]
