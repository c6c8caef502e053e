"""Split one month's payment pool across debts."""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ..models.payoff import AllocationRound, DebtSnapshot, PaymentAllocation
from ..money import ZERO, money_min
from .strategy import Strategy, order_by_priority


def allocate(
    snapshots: Sequence[DebtSnapshot], pool: Decimal, strategy: Strategy
) -> AllocationRound:
    """Allocate *pool* to minimums first, then extra in strategy order.

    Snapshot balances are read, never written. Every allocation is capped at
    what the debt still owes this round. A pool too small to cover the
    minimums is spent in input order and the shortfall simply stays on the
    balances; raising is left to input validation.
    """

    remaining = pool if pool > 0 else ZERO
    allocations: list[PaymentAllocation] = []
    paid: dict[str, Decimal] = {}
    active = [snap for snap in snapshots if snap.is_active]

    for snap in active:
        amount = money_min(snap.minimum_payment, snap.balance, remaining)
        if amount <= 0:
            paid.setdefault(snap.debt_id, ZERO)
            continue
        allocations.append(PaymentAllocation(snap.debt_id, amount, False))
        paid[snap.debt_id] = amount
        remaining -= amount

    if remaining > 0:
        for snap in order_by_priority(active, strategy):
            if remaining <= 0:
                break
            owed = snap.balance - paid.get(snap.debt_id, ZERO)
            if owed <= 0:
                continue
            extra = money_min(remaining, owed)
            allocations.append(PaymentAllocation(snap.debt_id, extra, True))
            paid[snap.debt_id] = paid.get(snap.debt_id, ZERO) + extra
            remaining -= extra

    completed = tuple(
        snap.debt_id for snap in active if paid.get(snap.debt_id, ZERO) >= snap.balance
    )
    return AllocationRound(allocations=tuple(allocations), completed=completed)


__all__ = ["allocate"]
