"""Tests for the minimum-payment baseline estimate."""

from __future__ import annotations

import logging
from decimal import Decimal

from debtplanner.services.baseline import (
    baseline_interest,
    baseline_months,
    estimate,
    total_baseline_interest,
)
from tests.conftest import assert_float_equal


def test_zero_rate_counts_whole_months(debt_factory):
    debt = debt_factory(balance=5000, annual_rate=0, minimum_payment=200)
    assert baseline_months(debt) == 25
    assert baseline_interest(debt) == 0

    uneven = debt_factory(balance=5010, annual_rate=0, minimum_payment=200)
    assert baseline_months(uneven) == 26


def test_one_percent_monthly_loan(debt_factory):
    debt = debt_factory(balance=1000, annual_rate=12, minimum_payment=50)
    assert baseline_months(debt) == 23


def test_final_payment_only_covers_what_is_left(debt_factory):
    # 100 -> 101 -> pay 100 -> 1 -> 1.01 final payment
    debt = debt_factory(balance=100, annual_rate=12, minimum_payment=100)

    result = estimate(debt)

    assert result.months == 2
    assert result.amortizes is True
    assert_float_equal(float(result.interest), 1.01, tolerance=0.0001)


def test_single_month_payoff(debt_factory):
    debt = debt_factory(balance=100, annual_rate=12, minimum_payment=150)
    result = estimate(debt)
    assert result.months == 1
    assert_float_equal(float(result.interest), 1.00, tolerance=0.0001)


def test_non_amortizing_debt_uses_horizon(debt_factory, caplog):
    debt = debt_factory(balance=10000, annual_rate=24, minimum_payment=50)

    with caplog.at_level(logging.WARNING, logger="debtplanner"):
        result = estimate(debt, horizon_months=12)

    assert result.amortizes is False
    assert result.months == 12
    # interest alone is 200 a month and compounds; well above 12 * 200
    assert result.interest > Decimal("2400")
    assert "never amortizes" in caplog.text


def test_total_baseline_sums_debts(two_debts):
    total = total_baseline_interest(two_debts)
    assert total == baseline_interest(two_debts[0]) + baseline_interest(two_debts[1])
    assert total_baseline_interest([]) == 0
