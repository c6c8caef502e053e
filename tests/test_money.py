"""Tests for Decimal money helpers."""

from __future__ import annotations

import math
from decimal import Decimal

import pytest

from debtplanner.money import (
    money_sum,
    monthly_rate,
    quantize_cents,
    to_decimal,
    to_float,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        (0.1, Decimal("0.1")),
        (200, Decimal("200")),
        ("1,250.50", Decimal("1250.50")),
        ("$75", Decimal("75")),
        ("  ", Decimal("0")),
        (None, Decimal("0")),
        (Decimal("3.333"), Decimal("3.333")),
    ],
)
def test_to_decimal(raw, expected):
    assert to_decimal(raw) == expected


def test_to_decimal_rejects_text_and_bools():
    with pytest.raises(ValueError, match="Not a monetary amount"):
        to_decimal("twelve")
    with pytest.raises(TypeError):
        to_decimal(True)


@pytest.mark.parametrize("raw", ["nan", "NaN", "inf", "-Infinity", float("nan"), Decimal("Infinity")])
def test_to_decimal_rejects_non_finite(raw):
    with pytest.raises(ValueError, match="Not a monetary amount"):
        to_decimal(raw)


def test_quantize_rounds_half_up():
    assert quantize_cents(Decimal("2.345")) == Decimal("2.35")
    assert quantize_cents(Decimal("2.344")) == Decimal("2.34")
    assert quantize_cents(Decimal("-2.345")) == Decimal("-2.35")


def test_to_float_returns_cents_and_no_negative_zero():
    assert to_float(Decimal("16.6666")) == 16.67
    value = to_float(Decimal("-0.001"))
    assert value == 0.0
    assert math.copysign(1.0, value) == 1.0


def test_monthly_rate():
    assert monthly_rate(Decimal("18")) == Decimal("0.015")
    assert monthly_rate(Decimal("0")) == 0


def test_money_sum_of_nothing_is_decimal():
    total = money_sum([])
    assert isinstance(total, Decimal)
    assert total == 0
