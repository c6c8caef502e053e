"""Tests for payoff schedule CSV export."""

from __future__ import annotations

import csv

from debtplanner.services.debts import simulate_payoff
from debtplanner.services.export_csv import SCHEDULE_HEADERS, export_schedule_csv
from tests.conftest import START


def test_export_schedule_writes_headers_and_rows(tmp_path, two_debts):
    result = simulate_payoff(two_debts, 100, start_date=START)
    out = tmp_path / "exports" / "schedule.csv"

    written = export_schedule_csv(result=result, output_path=out, names={"A": "Debt A"})

    assert written == out
    with out.open(newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        assert reader.fieldnames == SCHEDULE_HEADERS
        rows = list(reader)

    assert len(rows) == len(result.schedule)
    first = rows[0]
    assert first["month"] == "1"
    assert first["payment_date"] == "2025-02-01"
    assert first["debt_id"] == "A"
    assert first["debt_name"] == "Debt A"
    assert first["payment"] == "150.00"
    assert first["extra_payment"] == "100.00"
    assert first["interest"] == "16.67"
    assert first["completed"] == "no"
    # unnamed debts fall back to their id
    assert rows[1]["debt_name"] == "B"
    assert rows[-1]["completed"] == "yes"
    assert rows[-1]["ending_balance"] == "0.00"


def test_export_empty_schedule(tmp_path):
    result = simulate_payoff([], 0, start_date=START)
    out = export_schedule_csv(result=result, output_path=tmp_path / "empty.csv")

    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines == [",".join(SCHEDULE_HEADERS)]
