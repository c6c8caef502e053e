"""Tests for debt CSV import."""

from __future__ import annotations

from decimal import Decimal

import pytest

from debtplanner.models import DebtCategory
from debtplanner.services.import_csv import ColumnMapping, load_debts, parse_debts


def _write(tmp_path, content):
    path = tmp_path / "debts.csv"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_debts_with_fixture_headers(debts_csv):
    book = load_debts(csv_path=debts_csv)

    assert list(book) == ["A", "B"]
    card = book["A"]
    assert card.name == "Card"
    assert card.balance == Decimal("1000")
    assert card.annual_rate == Decimal("20")
    assert card.minimum_payment == Decimal("50")
    assert card.category is DebtCategory.CREDIT_CARD
    assert book["B"].category is DebtCategory.PERSONAL_LOAN


def test_header_aliases_and_money_formatting(tmp_path):
    path = _write(
        tmp_path,
        "Debt,Interest Rate,Balance,Min Payment,Priority\n"
        'Visa,19.99,"$2,450.75",$65,3\n'
        ",,,,\n"
        "Dentist,0,300,25,\n",
    )

    book = load_debts(csv_path=path)

    assert list(book) == ["1", "3"]
    visa = book["1"]
    assert visa.name == "Visa"
    assert visa.balance == Decimal("2450.75")
    assert visa.minimum_payment == Decimal("65")
    assert visa.priority == 3
    assert book["3"].priority is None
    assert book["3"].annual_rate == 0


def test_missing_required_columns(tmp_path):
    path = _write(tmp_path, "name,balance\nCard,100\n")

    with pytest.raises(ValueError, match="missing required column"):
        load_debts(csv_path=path)


def test_bad_number_names_row_and_column(tmp_path):
    path = _write(tmp_path, "name,balance,apr,minimum\nCard,100,12,10\nLoan,lots,5,10\n")

    with pytest.raises(ValueError, match=r"Row 2: column 'balance' is not a number"):
        load_debts(csv_path=path)


def test_duplicate_ids_are_made_unique():
    rows = [
        {"id": "x", "balance": "100", "apr": "5", "minimum": "10"},
        {"id": "x", "balance": "200", "apr": "5", "minimum": "10"},
    ]
    columns = ["id", "balance", "apr", "minimum"]

    debts = parse_debts(rows=rows, mapping=ColumnMapping(), columns=columns)

    assert [debt.id for debt in debts] == ["x", "x-2"]
    assert [debt.name for debt in debts] == ["Debt 1", "Debt 2"]


def test_custom_mapping():
    mapping = ColumnMapping(balance=("owed",), annual_rate=("pct",), minimum_payment=("due",))
    rows = [{"owed": "450", "pct": "9.5", "due": "30"}]

    (debt,) = parse_debts(rows=rows, mapping=mapping, columns=["owed", "pct", "due"])

    assert debt.balance == Decimal("450")
    assert debt.annual_rate == Decimal("9.5")


@pytest.mark.parametrize("cell", ["nan", "inf"])
def test_non_finite_number_names_row_and_column(tmp_path, cell):
    path = _write(tmp_path, f"name,balance,apr,minimum\nCard,{cell},12,10\n")

    with pytest.raises(ValueError, match=rf"Row 1: column 'balance' is not a number: '{cell}'"):
        load_debts(csv_path=path)


def test_infinite_priority_is_reported(tmp_path):
    path = _write(tmp_path, "name,balance,apr,minimum,priority\nCard,100,12,10,inf\n")

    with pytest.raises(ValueError, match=r"Row 1: column 'priority' is not an integer: 'inf'"):
        load_debts(csv_path=path)
