"""Command line interface for debtplanner."""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional

import click

from .config import BaseConfig, DevConfig
from .constants import CONSOLIDATION_TERM_MONTHS, STRATEGY_NAMES
from .errors import PayoffConvergenceError
from .logging_config import setup_logging
from .models.debt import DebtBook, total_balance, weighted_average_rate
from .models.payoff import PayoffResult
from .money import to_decimal
from .services.consolidation import compare_consolidation
from .services.debts import compare_strategies, simulate_payoff
from .services.import_csv import load_debts
from .services.insights import generate_insights
from .services.validation import validate_plan

EXIT_INVALID = 1
EXIT_NOT_CONVERGED = 2


class MoneyParam(click.ParamType):
    """Parses amounts like ``200``, ``1,250.50`` or ``$75`` into Decimal."""

    name = "amount"

    def convert(self, value, param, ctx) -> Decimal:
        if isinstance(value, Decimal):
            return value
        try:
            return to_decimal(value)
        except (TypeError, ValueError):
            self.fail(f"{value!r} is not a valid amount", param, ctx)


def _parse_priorities(values: tuple[str, ...]) -> dict[str, int]:
    priorities: dict[str, int] = {}
    for raw in values:
        debt_id, sep, number = raw.partition("=")
        if not sep or not debt_id.strip():
            raise click.BadParameter(f"expected ID=PRIORITY, got {raw!r}", param_hint="--priority")
        try:
            priorities[debt_id.strip()] = int(number)
        except ValueError as exc:
            raise click.BadParameter(
                f"priority for {debt_id!r} must be an integer", param_hint="--priority"
            ) from exc
    return priorities


def _load_checked(csv_path: Path, extra: Decimal) -> DebtBook:
    """Load the CSV and exit with every validation issue when it is unusable."""

    try:
        book = load_debts(csv_path=csv_path)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    issues = validate_plan(book, extra)
    if issues:
        for issue in issues:
            click.echo(f"{issue.field}: {issue.message}", err=True)
        click.get_current_context().exit(EXIT_INVALID)
    return book


def _start_month(value: Optional[datetime]):
    return value.date().replace(day=1) if value else None


def _echo_summary(result: PayoffResult, book: DebtBook) -> None:
    click.echo(f"Strategy:          {result.strategy}")
    click.echo(f"Monthly payment:   ${result.monthly_payment:,.2f}")
    click.echo(f"Months to payoff:  {result.months}")
    click.echo(f"Payoff date:       {result.payoff_date:%B %Y}")
    click.echo(f"Total paid:        ${result.total_payment:,.2f}")
    click.echo(f"Interest paid:     ${result.total_interest_paid:,.2f}")
    click.echo(f"Interest saved:    ${result.total_interest_saved:,.2f}")
    click.echo("Payoff order:")
    for position, debt_id in enumerate(result.payoff_order, start=1):
        debt = book[debt_id]
        click.echo(
            f"  {position}. {debt.name} (month {result.debt_payoff_month(debt_id)}, "
            f"${debt.balance:,.2f} at {debt.annual_rate}%)"
        )


@click.group()
@click.option("--verbose", is_flag=True, default=False, help="Verbose console logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Plan debt payoff with avalanche, snowball or custom priorities."""

    try:
        config = DevConfig() if verbose else BaseConfig()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(config)
    ctx.obj = config


def _plan_options(func):
    func = click.option(
        "--start",
        type=click.DateTime(formats=["%Y-%m", "%Y-%m-%d"]),
        default=None,
        help="First month of the plan (defaults to the current month).",
    )(func)
    func = click.option(
        "--extra", type=MoneyParam(), default="0", show_default=True,
        help="Extra amount paid each month on top of all minimums.",
    )(func)
    func = click.argument(
        "csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
    )(func)
    return func


@main.command("plan")
@_plan_options
@click.option("--strategy", type=click.Choice(STRATEGY_NAMES), default=None,
              help="Extra payment order (defaults to DEBTPLANNER_DEFAULT_STRATEGY).")
@click.option("--priority", "priority_values", multiple=True, metavar="ID=N",
              help="Priority for the custom strategy; higher is paid first.")
@click.option("--schedule-out", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write the month-by-debt schedule to this CSV file.")
@click.option("--chart-out", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Render a payoff chart PNG to this path.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as JSON.")
@click.pass_obj
def plan_command(
    config: BaseConfig,
    csv_path: Path,
    extra: Decimal,
    start: Optional[datetime],
    strategy: Optional[str],
    priority_values: tuple[str, ...],
    schedule_out: Optional[Path],
    chart_out: Optional[Path],
    as_json: bool,
) -> None:
    """Simulate paying off the debts listed in CSV_PATH."""

    priorities = _parse_priorities(priority_values)
    book = _load_checked(csv_path, extra)
    try:
        result = simulate_payoff(
            book,
            extra,
            strategy or config.DEFAULT_STRATEGY,
            start_date=_start_month(start),
            max_months=config.MAX_MONTHS,
            priorities=priorities,
        )
    except PayoffConvergenceError as exc:
        click.echo(f"Error: {exc}", err=True)
        click.get_current_context().exit(EXIT_NOT_CONVERGED)

    names = {debt_id: debt.name for debt_id, debt in book.items()}
    if schedule_out is not None:
        from .services.export_csv import export_schedule_csv

        export_schedule_csv(result=result, output_path=schedule_out, names=names)
    if chart_out is not None:
        # matplotlib is only loaded when a chart is requested
        from .charts import debt_payoff_chart_png

        debt_payoff_chart_png(result, output_path=chart_out, names=names)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    _echo_summary(result, book)
    for insight in generate_insights(book.debts(), result, horizon_months=config.MAX_MONTHS):
        click.echo(f"[{insight.kind}] {insight.title}: {insight.message}")
    if schedule_out is not None:
        click.echo(f"Schedule written: {schedule_out}")
    if chart_out is not None:
        click.echo(f"Chart written: {chart_out}")


@main.command("compare")
@_plan_options
@click.option("--consolidation-rate", type=click.FloatRange(0, 100), default=None,
              help="Also compare one consolidation loan at this APR.")
@click.option("--consolidation-term", type=click.IntRange(min=1),
              default=CONSOLIDATION_TERM_MONTHS, show_default=True,
              help="Consolidation loan term in months.")
@click.pass_obj
def compare_command(
    config: BaseConfig,
    csv_path: Path,
    extra: Decimal,
    start: Optional[datetime],
    consolidation_rate: Optional[float],
    consolidation_term: int,
) -> None:
    """Compare avalanche and snowball for the debts in CSV_PATH."""

    book = _load_checked(csv_path, extra)
    try:
        results = compare_strategies(
            book, extra, start_date=_start_month(start), max_months=config.MAX_MONTHS
        )
    except PayoffConvergenceError as exc:
        click.echo(f"Error: {exc}", err=True)
        click.get_current_context().exit(EXIT_NOT_CONVERGED)

    click.echo(
        f"Total debt ${total_balance(book.values()):,.2f} at "
        f"{weighted_average_rate(book.values()):.2f}% average APR"
    )
    click.echo(f"{'Strategy':<10} {'Months':>6} {'Interest':>14} {'Saved':>14}  Order")
    for name, result in results.items():
        order = ", ".join(book[debt_id].name for debt_id in result.payoff_order)
        click.echo(
            f"{name:<10} {result.months:>6} {result.total_interest_paid:>14,.2f} "
            f"{result.total_interest_saved:>14,.2f}  {order}"
        )

    consolidation = None
    if consolidation_rate is not None:
        consolidation = compare_consolidation(
            book,
            consolidation_rate,
            consolidation_term,
            start_date=_start_month(start),
            max_months=config.MAX_MONTHS,
        )
        click.echo(
            f"Consolidation at {consolidation.annual_rate:.2f}% for "
            f"{consolidation.term_months} months: "
            f"${consolidation.consolidated_payment:,.2f}/month "
            f"({consolidation.monthly_payment_difference:+,.2f} vs minimums), "
            f"interest ${consolidation.consolidated_interest:,.2f} "
            f"vs ${consolidation.current_interest:,.2f}"
        )
        if not consolidation.is_recommended:
            click.echo("Consolidation is not recommended for these debts.")

    for insight in generate_insights(
        book.debts(),
        results["avalanche"],
        results,
        consolidation=consolidation,
        horizon_months=config.MAX_MONTHS,
    ):
        if insight.category in ("comparison", "consolidation"):
            click.echo(insight.message)


@main.command("validate")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--extra", type=MoneyParam(), default="0", show_default=True)
def validate_command(csv_path: Path, extra: Decimal) -> None:
    """Report every problem with the debts in CSV_PATH."""

    book = _load_checked(csv_path, extra)
    click.echo(f"OK: {len(book)} debt(s) ready to plan")


if __name__ == "__main__":  # pragma: no cover
    main()
