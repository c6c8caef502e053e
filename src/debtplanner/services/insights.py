"""Plain-language takeaways shown next to a payoff plan."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Mapping

from ..constants import (
    DEFAULT_MAX_MONTHS,
    FREEDOM_WITHIN_MONTHS,
    HIGH_INTEREST_RATE,
    LARGE_EXTRA_PAYMENT,
)
from ..models.debt import Debt
from ..models.payoff import PayoffResult
from .baseline import baseline_months
from .consolidation import ConsolidationAnalysis

InsightKind = Literal["success", "warning", "info"]


@dataclass(frozen=True, slots=True)
class Insight:
    kind: InsightKind
    title: str
    message: str
    category: str


def _dollars(amount: float) -> str:
    return f"${amount:,.0f}"


def generate_insights(
    debts: Iterable[Debt],
    result: PayoffResult,
    comparison: Mapping[str, PayoffResult] | None = None,
    *,
    consolidation: ConsolidationAnalysis | None = None,
    horizon_months: int = DEFAULT_MAX_MONTHS,
) -> list[Insight]:
    """Build insights for *result*.

    *comparison* adds the strategy trade-off and *consolidation* a
    consolidation recommendation. *horizon_months* should match the ceiling
    the plan ran with, so minimum-only months agree with it.
    """

    items = list(debts)
    insights: list[Insight] = []

    high_interest = [debt for debt in items if debt.annual_rate > HIGH_INTEREST_RATE]
    if high_interest:
        insights.append(
            Insight(
                "warning",
                "High-Interest Debt Alert",
                f"You have {len(high_interest)} debt(s) above {HIGH_INTEREST_RATE}% interest. "
                "These should be your top priority for extra payments.",
                "high-interest",
            )
        )

    if result.extra_payment > LARGE_EXTRA_PAYMENT and items:
        minimum_only_months = max(
            baseline_months(debt, horizon_months=horizon_months) for debt in items
        )
        months_saved = max(0, minimum_only_months - result.months)
        insights.append(
            Insight(
                "success",
                "Extra Payments Pay Off",
                f"Your {_dollars(result.extra_payment)} extra payment saves about "
                f"{months_saved} months and {_dollars(result.total_interest_saved)} in interest.",
                "extra-payment",
            )
        )

    if 0 < result.months <= FREEDOM_WITHIN_MONTHS:
        years, months = divmod(result.months, 12)
        insights.append(
            Insight(
                "info",
                "Debt Freedom is Within Reach",
                f"You're just {years} years and {months} months away from being debt free!",
                "timeline",
            )
        )

    if result.strategy == "avalanche":
        insights.append(
            Insight(
                "success",
                "Smart Mathematical Choice",
                "Debt avalanche minimizes total interest paid.",
                "strategy",
            )
        )
    elif result.strategy == "snowball":
        insights.append(
            Insight(
                "info",
                "Psychological Victory Approach",
                "Debt snowball builds momentum with quick wins.",
                "strategy",
            )
        )
    else:
        insights.append(
            Insight(
                "info",
                "Your Own Order",
                "Extra payments follow the priorities you set.",
                "strategy",
            )
        )

    if comparison and "avalanche" in comparison and "snowball" in comparison:
        difference = (
            comparison["snowball"].total_interest_paid
            - comparison["avalanche"].total_interest_paid
        )
        if difference > 0:
            insights.append(
                Insight(
                    "info",
                    "Strategy Trade-off",
                    f"Avalanche saves {_dollars(difference)} in interest compared to snowball.",
                    "comparison",
                )
            )
        elif difference < 0:
            insights.append(
                Insight(
                    "info",
                    "Strategy Trade-off",
                    f"Snowball saves {_dollars(-difference)} in interest compared to avalanche.",
                    "comparison",
                )
            )
        else:
            insights.append(
                Insight(
                    "info",
                    "Strategy Trade-off",
                    "Avalanche and snowball cost the same interest for these debts.",
                    "comparison",
                )
            )

    if consolidation is not None and consolidation.is_recommended:
        insights.append(
            Insight(
                "info",
                "Consider Consolidating",
                f"Debt consolidation could save {_dollars(consolidation.potential_savings)}",
                "consolidation",
            )
        )

    return insights


__all__ = ["Insight", "generate_insights"]
