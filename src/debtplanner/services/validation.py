"""Input checks run before the payoff engine.

Every rule is evaluated, so a form can show all problems at once. Field names
follow the ``debt-<id>-<field>`` convention used by the input form.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Union

from ..errors import PlanValidationError, ValidationIssue
from ..models.debt import Debt, DebtBook
from ..money import HUNDRED, ZERO, MoneyLike, monthly_rate, to_decimal


def validate_debt(debt: Debt) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    prefix = f"debt-{debt.id}"

    if not debt.name or not debt.name.strip():
        issues.append(ValidationIssue(f"{prefix}-name", "Name is required"))

    if debt.balance <= 0:
        issues.append(ValidationIssue(f"{prefix}-balance", "Balance must be greater than 0"))

    if debt.annual_rate < 0 or debt.annual_rate > HUNDRED:
        issues.append(
            ValidationIssue(f"{prefix}-rate", "Interest rate must be between 0 and 100")
        )

    if debt.minimum_payment <= 0:
        issues.append(
            ValidationIssue(f"{prefix}-minimum", "Minimum payment must be greater than 0")
        )
    elif debt.balance > 0 and debt.minimum_payment > debt.balance:
        issues.append(
            ValidationIssue(f"{prefix}-minimum", "Minimum payment cannot exceed balance")
        )
    elif debt.balance > 0 and debt.minimum_payment <= debt.balance * monthly_rate(
        debt.annual_rate
    ):
        issues.append(
            ValidationIssue(
                f"{prefix}-minimum", "Minimum payment must be more than the monthly interest"
            )
        )

    return issues


def validate_plan(
    debts: Union[DebtBook, Iterable[Debt]], extra_payment: MoneyLike = 0
) -> list[ValidationIssue]:
    """Return every violated rule for a payoff plan (empty list when valid)."""

    items = debts.debts() if isinstance(debts, DebtBook) else list(debts)
    issues: list[ValidationIssue] = []

    if not items:
        issues.append(ValidationIssue("debts", "Add at least one debt"))

    for debt in items:
        issues.extend(validate_debt(debt))

    try:
        extra = to_decimal(extra_payment)
    except (TypeError, ValueError):
        issues.append(ValidationIssue("extra_payment", "Extra payment must be a number"))
    else:
        if extra < ZERO:
            issues.append(ValidationIssue("extra_payment", "Extra payment cannot be negative"))

    return issues


def ensure_valid(
    debts: Union[DebtBook, Iterable[Debt]], extra_payment: MoneyLike = 0
) -> None:
    """Raise ``PlanValidationError`` carrying every issue, if any."""

    items = debts.debts() if isinstance(debts, DebtBook) else list(debts)
    issues = validate_plan(items, extra_payment)
    if issues:
        raise PlanValidationError(issues)


def issues_by_field(issues: Iterable[ValidationIssue]) -> Mapping[str, list[str]]:
    """Group messages by field for form display."""

    grouped: dict[str, list[str]] = {}
    for issue in issues:
        grouped.setdefault(issue.field, []).append(issue.message)
    return grouped


__all__ = ["ensure_valid", "issues_by_field", "validate_debt", "validate_plan"]
