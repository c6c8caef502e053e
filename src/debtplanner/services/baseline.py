"""Minimum-payment-only interest estimate, used to report interest saved.

Closed form, one debt at a time. For balance ``B``, payment ``P`` and
monthly rate ``r``::

    months = ceil(-ln(1 - B*r/P) / ln(1 + r))

The last month only pays what is left, so total interest is
``P * (months - 1) + final - B`` where ``final`` is the closed-form balance
after ``months - 1`` payments plus one month of interest. With a zero rate the
debt takes ``ceil(B / P)`` months and costs nothing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from ..constants import DEFAULT_MAX_MONTHS
from ..logging_config import get_logger
from ..models.debt import Debt
from ..money import ONE, ZERO, money_sum, monthly_rate

logger = get_logger(__name__)

DEFAULT_HORIZON_MONTHS = DEFAULT_MAX_MONTHS


@dataclass(frozen=True, slots=True)
class BaselineEstimate:
    debt_id: str
    months: int
    interest: Decimal
    amortizes: bool


def _residual(balance: Decimal, payment: Decimal, rate: Decimal, payments: int) -> Decimal:
    """Balance left after *payments* full payments (annuity identity)."""

    growth = (ONE + rate) ** payments
    return balance * growth - payment * (growth - ONE) / rate


def estimate(debt: Debt, *, horizon_months: int = DEFAULT_HORIZON_MONTHS) -> BaselineEstimate:
    """Months and interest to retire *debt* paying only its minimum.

    A debt whose minimum never covers its interest is reported over
    *horizon_months* with ``amortizes=False``.
    """

    balance = debt.balance
    payment = debt.minimum_payment
    rate = monthly_rate(debt.annual_rate)

    if balance <= 0:
        return BaselineEstimate(debt.id, 0, ZERO, True)

    if payment <= 0 or (rate > 0 and payment <= balance * rate):
        logger.warning(
            "Minimum payment never amortizes debt",
            extra={"debt_id": debt.id, "horizon_months": horizon_months},
        )
        if rate == 0:
            return BaselineEstimate(debt.id, horizon_months, ZERO, False)
        remaining = _residual(balance, payment, rate, horizon_months)
        interest = payment * horizon_months - balance + remaining
        return BaselineEstimate(debt.id, horizon_months, interest, False)

    if rate == 0:
        return BaselineEstimate(debt.id, math.ceil(balance / payment), ZERO, True)

    months = math.ceil(-(ONE - balance * rate / payment).ln() / (ONE + rate).ln())
    months = max(months, 1)
    # logs are approximate near whole-month boundaries; settle on the exact month
    while months > 1 and _residual(balance, payment, rate, months - 1) <= 0:
        months -= 1
    while _residual(balance, payment, rate, months - 1) * (ONE + rate) > payment:
        months += 1

    final_payment = _residual(balance, payment, rate, months - 1) * (ONE + rate)
    interest = payment * (months - 1) + final_payment - balance
    return BaselineEstimate(debt.id, months, interest, True)


def baseline_months(debt: Debt, *, horizon_months: int = DEFAULT_HORIZON_MONTHS) -> int:
    return estimate(debt, horizon_months=horizon_months).months


def baseline_interest(debt: Debt, *, horizon_months: int = DEFAULT_HORIZON_MONTHS) -> Decimal:
    """Total interest *debt* accrues on minimum payments alone."""

    return estimate(debt, horizon_months=horizon_months).interest


def total_baseline_interest(
    debts: Iterable[Debt], *, horizon_months: int = DEFAULT_HORIZON_MONTHS
) -> Decimal:
    return money_sum(baseline_interest(debt, horizon_months=horizon_months) for debt in debts)


__all__ = [
    "BaselineEstimate",
    "baseline_interest",
    "baseline_months",
    "estimate",
    "total_baseline_interest",
]
