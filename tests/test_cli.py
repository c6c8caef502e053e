"""Tests for the debtplanner command line."""

from __future__ import annotations

import csv
import json

import pytest
from click.testing import CliRunner

from debtplanner.cli import main


@pytest.fixture
def runner():
    return CliRunner()


def _write(tmp_path, content):
    path = tmp_path / "input.csv"
    path.write_text(content, encoding="utf-8")
    return path


def test_validate_ok(runner, debts_csv):
    result = runner.invoke(main, ["validate", str(debts_csv), "--extra", "100"])

    assert result.exit_code == 0, result.output
    assert "OK: 2 debt(s) ready to plan" in result.output


def test_validate_reports_every_issue(runner, tmp_path):
    path = _write(
        tmp_path,
        "id,name,balance,apr,minimum\n"
        "A,,0,20,50\n"
        "B,Loan,500,140,600\n",
    )

    result = runner.invoke(main, ["validate", str(path), "--extra=-5"])

    assert result.exit_code == 1
    assert "debt-A-name: Name is required" in result.output
    assert "debt-A-balance: Balance must be greater than 0" in result.output
    assert "debt-B-rate: Interest rate must be between 0 and 100" in result.output
    assert "debt-B-minimum: Minimum payment cannot exceed balance" in result.output
    assert "extra_payment: Extra payment cannot be negative" in result.output


def test_missing_column_is_a_usage_error(runner, tmp_path):
    path = _write(tmp_path, "name,balance\nCard,100\n")

    result = runner.invoke(main, ["validate", str(path)])

    assert result.exit_code == 1
    assert "missing required column(s): annual_rate, minimum_payment" in result.output


def test_plan_summary(runner, debts_csv):
    result = runner.invoke(
        main, ["plan", str(debts_csv), "--extra", "100", "--start", "2025-01"]
    )

    assert result.exit_code == 0, result.output
    assert "Strategy:          avalanche" in result.output
    assert "Monthly payment:   $210.00" in result.output
    assert "Payoff order:" in result.output
    assert "1. Card (month" in result.output
    assert "2. Loan (month" in result.output
    assert "[success] Smart Mathematical Choice" in result.output


def test_plan_json(runner, debts_csv):
    result = runner.invoke(
        main, ["plan", str(debts_csv), "--extra", "$100", "--start", "2025-01-15", "--json"]
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["strategy"] == "avalanche"
    assert data["payoff_order"] == ["A", "B"]
    assert data["monthly_payment"] == 210.0
    assert data["schedule"][0]["payment_date"] == "2025-02-01"
    assert data["schedule"][0]["payment"] == 150.0
    assert data["total_interest_saved"] > 0


def test_plan_custom_priorities(runner, debts_csv):
    result = runner.invoke(
        main,
        ["plan", str(debts_csv), "--extra", "100", "--strategy", "custom",
         "--priority", "B=10", "--json"],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["strategy"] == "custom"
    assert data["payoff_order"] == ["B", "A"]


def test_plan_bad_priority(runner, debts_csv):
    result = runner.invoke(
        main, ["plan", str(debts_csv), "--strategy", "custom", "--priority", "B"]
    )

    assert result.exit_code == 2
    assert "expected ID=PRIORITY" in result.output


def test_plan_default_strategy_from_environment(runner, debts_csv, monkeypatch):
    monkeypatch.setenv("DEBTPLANNER_DEFAULT_STRATEGY", "snowball")

    result = runner.invoke(main, ["plan", str(debts_csv)])

    assert result.exit_code == 0, result.output
    assert "Strategy:          snowball" in result.output


def test_plan_writes_schedule_and_chart(runner, debts_csv, tmp_path):
    schedule_out = tmp_path / "out" / "schedule.csv"
    chart_out = tmp_path / "out" / "payoff.png"

    result = runner.invoke(
        main,
        ["plan", str(debts_csv), "--extra", "100", "--start", "2025-01",
         "--schedule-out", str(schedule_out), "--chart-out", str(chart_out)],
    )

    assert result.exit_code == 0, result.output
    assert f"Schedule written: {schedule_out}" in result.output
    assert f"Chart written: {chart_out}" in result.output
    with schedule_out.open(newline="", encoding="utf-8") as fh:
        rows = list(csv.DictReader(fh))
    assert rows[0]["debt_name"] == "Card"
    assert chart_out.read_bytes()[:4] == b"\x89PNG"


def test_plan_not_converging_exits_2(runner, debts_csv, monkeypatch):
    monkeypatch.setenv("DEBTPLANNER_MAX_MONTHS", "3")

    result = runner.invoke(main, ["plan", str(debts_csv)])

    assert result.exit_code == 2
    assert "did not converge after 3 months" in result.output


def test_bad_extra_amount(runner, debts_csv):
    result = runner.invoke(main, ["plan", str(debts_csv), "--extra", "lots"])

    assert result.exit_code == 2
    assert "is not a valid amount" in result.output


def test_invalid_configuration(runner, debts_csv, monkeypatch):
    monkeypatch.setenv("DEBTPLANNER_MAX_MONTHS", "0")

    result = runner.invoke(main, ["validate", str(debts_csv)])

    assert result.exit_code == 1
    assert "DEBTPLANNER_MAX_MONTHS must be positive" in result.output


def test_compare(runner, debts_csv):
    result = runner.invoke(main, ["compare", str(debts_csv), "--extra", "100"])

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0].startswith("Total debt $3,000.00 at 13.33% average APR")
    assert any(line.startswith("avalanche") and line.endswith("Card, Loan") for line in lines)
    assert any(line.startswith("snowball") and line.endswith("Card, Loan") for line in lines)
    assert "Avalanche and snowball cost the same interest for these debts." in result.output


def test_validate_non_finite_amount_is_reported(runner, tmp_path):
    path = _write(tmp_path, "id,name,balance,apr,minimum\nA,Card,nan,20,50\n")

    result = runner.invoke(main, ["validate", str(path)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Row 1: column 'balance' is not a number: 'nan'" in result.output


def test_verbose_logs_to_console(runner, debts_csv):
    result = runner.invoke(main, ["--verbose", "validate", str(debts_csv)])

    assert result.exit_code == 0, result.output
    assert "Logging initialized" in result.output


def test_compare_with_recommended_consolidation(runner, tmp_path):
    path = _write(
        tmp_path,
        "id,name,balance,apr,minimum\n"
        "cc1,CC1,5000,24,200\n"
        "cc2,CC2,5000,22,200\n",
    )

    result = runner.invoke(main, ["compare", str(path), "--consolidation-rate", "10"])

    assert result.exit_code == 0, result.output
    assert "Consolidation at 10.00% for 36 months: $322.67/month (-77.33 vs minimums)" in (
        result.output
    )
    assert "Debt consolidation could save $" in result.output
    assert "not recommended" not in result.output


def test_compare_with_unhelpful_consolidation(runner, debts_csv):
    result = runner.invoke(
        main,
        ["compare", str(debts_csv), "--consolidation-rate", "8", "--consolidation-term", "36"],
    )

    assert result.exit_code == 0, result.output
    assert "Consolidation is not recommended for these debts." in result.output
    assert "Debt consolidation could save" not in result.output


def test_compare_rejects_out_of_range_consolidation_rate(runner, debts_csv):
    result = runner.invoke(main, ["compare", str(debts_csv), "--consolidation-rate", "150"])
    assert result.exit_code == 2
