"""Exceptions raised by the payoff planner."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single violated input rule, addressed by form field."""

    field: str
    message: str


class PayoffError(Exception):
    """Base class for planner failures."""


class PlanValidationError(PayoffError, ValueError):
    """Raised by ``ensure_valid`` with every issue found in one pass."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = list(issues)
        summary = "; ".join(f"{issue.field}: {issue.message}" for issue in self.issues)
        super().__init__(f"Invalid payoff plan ({len(self.issues)} issue(s)): {summary}")


class PayoffConvergenceError(PayoffError, RuntimeError):
    """The driver loop hit its month ceiling with balances outstanding.

    Validated inputs always converge, so this points at an input that slipped
    past validation rather than a slow payoff.
    """

    def __init__(self, *, months: int, remaining_balance: Decimal):
        self.months = months
        self.remaining_balance = remaining_balance
        super().__init__(
            f"Payoff schedule did not converge after {months} months; "
            f"{remaining_balance:.2f} still outstanding"
        )
