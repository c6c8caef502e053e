"""Chart rendering for payoff plans."""

from __future__ import annotations

from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Mapping

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker

from .models.payoff import PayoffResult

PALETTE = ["#4F46E5", "#F59E0B", "#10B981", "#EF4444", "#8B5CF6", "#0EA5E9", "#EC4899"]


def balance_series(result: PayoffResult) -> dict[str, list[float]]:
    """Remaining balance per debt per month (index 0 = before month 1).

    Retired debts contribute 0 for the rest of the plan.
    """

    series: dict[str, list[float]] = {}
    for row in result.schedule:
        if row.debt_id not in series:
            series[row.debt_id] = [0.0] * (result.months + 1)
            series[row.debt_id][0] = row.starting_balance
        series[row.debt_id][row.month] = row.ending_balance
    return series


def debt_payoff_chart_png(
    result: PayoffResult,
    *,
    output_path: Path | None = None,
    names: Mapping[str, str] | None = None,
) -> Path:
    """Render remaining balances stacked by debt and return the PNG path."""

    series = balance_series(result)
    lookup = names or {}
    fig, ax = plt.subplots(figsize=(10, 6))

    if series:
        x_vals = list(range(result.months + 1))
        labels = [lookup.get(debt_id, debt_id) for debt_id in series]
        colors = [PALETTE[i % len(PALETTE)] for i in range(len(series))]
        ax.stackplot(x_vals, *series.values(), labels=labels, colors=colors, alpha=0.75)

        totals = [sum(values) for values in zip(*series.values())]
        ax.plot(x_vals, totals, color="#1F2937", linewidth=1.5)

        # Mark the month each debt is retired
        for debt_id in result.payoff_order:
            month = result.debt_payoff_month(debt_id)
            if month is None:
                continue
            ax.axvline(x=month, color="#22C55E", linestyle="--", alpha=0.5, linewidth=1)
            ax.annotate(
                f"{lookup.get(debt_id, debt_id)} paid",
                (month, totals[month]),
                xytext=(5, 20),
                textcoords="offset points",
                fontsize=8,
                color="#16A34A",
                rotation=45,
            )

        ax.grid(True, linestyle="--", alpha=0.3)
        ax.set_axisbelow(True)
        ax.set_title(
            f"Debt Payoff Projection ({result.strategy.title()})",
            fontsize=14,
            fontweight="bold",
            pad=15,
        )
        ax.set_ylabel("Remaining Balance ($)", fontsize=11)
        ax.set_xlabel("Month", fontsize=11)
        ax.set_xlim(0, max(result.months, 1))
        ax.yaxis.set_major_formatter(mticker.FuncFormatter(lambda x, p: f"${x:,.0f}"))
        ax.legend(loc="upper right", fontsize=9)

        textstr = (
            f"Starting Debt: ${totals[0]:,.0f}\n"
            f"Months to Payoff: {result.months}\n"
            f"Interest Paid: ${result.total_interest_paid:,.0f}"
        )
        props = dict(boxstyle="round", facecolor="lavender", alpha=0.8)
        ax.text(0.02, 0.98, textstr, transform=ax.transAxes, fontsize=9,
                verticalalignment="top", bbox=props)
    else:
        ax.text(0.5, 0.5, "No payoff schedule", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")

    plt.tight_layout()

    if output_path is None:
        with NamedTemporaryFile(delete=False, suffix=".png") as tmp:
            output_path = Path(tmp.name)
    else:
        output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, bbox_inches="tight", dpi=100)
    plt.close(fig)
    return output_path


__all__ = ["balance_series", "debt_payoff_chart_png"]
