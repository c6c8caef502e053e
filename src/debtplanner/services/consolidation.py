"""Debt consolidation analysis: one fixed-term loan against the current minimums."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..constants import (
    CONSOLIDATION_MIN_SAVINGS,
    CONSOLIDATION_TERM_MONTHS,
    DEFAULT_MAX_MONTHS,
)
from ..logging_config import get_logger
from ..models.debt import total_balance, total_minimum_payment
from ..money import HUNDRED, ONE, ZERO, MoneyLike, monthly_rate, to_decimal, to_float
from .baseline import total_baseline_interest
from .debts import DebtInput, _as_debts, add_months

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ConsolidationAnalysis:
    """Outcome of rolling every debt into one loan (amounts in dollars)."""

    annual_rate: float
    term_months: int
    total_balance: float
    consolidated_payment: float
    current_minimum_payment: float
    current_interest: float
    consolidated_interest: float
    potential_savings: float
    monthly_payment_difference: float
    is_recommended: bool
    payoff_date: date


def amortized_payment(principal, annual_rate, months: int):
    """Level monthly payment retiring *principal* in *months* at *annual_rate* percent."""

    rate = monthly_rate(annual_rate)
    if rate == 0:
        return principal / months
    growth = (ONE + rate) ** months
    return principal * rate * growth / (growth - ONE)


def compare_consolidation(
    debts: DebtInput,
    annual_rate: MoneyLike,
    term_months: int = CONSOLIDATION_TERM_MONTHS,
    *,
    start_date: date | None = None,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> ConsolidationAnalysis:
    """Compare a consolidation loan with paying the current minimums.

    Current interest is the minimum-only baseline of each debt. Consolidation
    is recommended when it saves more than ``CONSOLIDATION_MIN_SAVINGS`` in
    interest without raising the monthly payment.
    """

    rate = to_decimal(annual_rate)
    if rate < 0 or rate > HUNDRED:
        raise ValueError("Consolidation rate must be between 0 and 100")
    if term_months <= 0:
        raise ValueError("Consolidation term must be at least one month")

    items = _as_debts(debts)
    balance = total_balance(items)
    current_payment = total_minimum_payment(items)
    current_interest = total_baseline_interest(items, horizon_months=max_months)

    if balance > 0:
        payment = amortized_payment(balance, rate, term_months)
        consolidated_interest = payment * term_months - balance
    else:
        payment = consolidated_interest = ZERO

    savings = current_interest - consolidated_interest
    difference = payment - current_payment
    recommended = bool(items) and savings > CONSOLIDATION_MIN_SAVINGS and difference <= 0
    start = (start_date or date.today()).replace(day=1)

    logger.debug(
        "Consolidation analysed",
        extra={"rate": rate, "term_months": term_months, "savings": savings},
    )
    return ConsolidationAnalysis(
        annual_rate=to_float(rate),
        term_months=term_months,
        total_balance=to_float(balance),
        consolidated_payment=to_float(payment),
        current_minimum_payment=to_float(current_payment),
        current_interest=to_float(current_interest),
        consolidated_interest=to_float(consolidated_interest),
        potential_savings=to_float(savings),
        monthly_payment_difference=to_float(difference),
        is_recommended=recommended,
        payoff_date=add_months(start, term_months),
    )


__all__ = ["ConsolidationAnalysis", "amortized_payment", "compare_consolidation"]
