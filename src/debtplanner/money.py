"""Decimal helpers for money math.

Every amount entering the payoff engine is converted once with ``to_decimal``
and stays a ``Decimal`` until ``to_float`` turns it back into cents for
schedule rows and summary fields.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Union

MoneyLike = Union[Decimal, int, float, str]

ZERO = Decimal("0")
ONE = Decimal("1")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")


def to_decimal(value: MoneyLike | None) -> Decimal:
    """Convert *value* to ``Decimal`` without float artifacts.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` rather than
    its binary expansion. ``None`` and blank strings are treated as zero;
    non-finite values raise ``ValueError``.
    """

    if value is None:
        return ZERO
    if isinstance(value, bool):
        raise TypeError("Boolean is not a monetary amount")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    else:
        text = str(value).strip().replace(",", "").lstrip("$")
        if not text:
            return ZERO
        try:
            result = Decimal(text)
        except InvalidOperation as exc:
            raise ValueError(f"Not a monetary amount: {value!r}") from exc
    # NaN and infinities cannot be compared or amortized
    if not result.is_finite():
        raise ValueError(f"Not a monetary amount: {value!r}")
    return result


def quantize_cents(value: Decimal) -> Decimal:
    """Round to cents using half-up rounding."""

    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_float(value: Decimal) -> float:
    """Output boundary: cents-rounded native float."""

    # + 0.0 turns -0.0 into 0.0
    return float(quantize_cents(value)) + 0.0


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    """Annual percentage rate to a monthly fraction (18 -> 0.015)."""

    return annual_rate_percent / HUNDRED / MONTHS_PER_YEAR


def money_min(*values: Decimal) -> Decimal:
    return min(values)


def money_max(*values: Decimal) -> Decimal:
    return max(values)


def money_sum(values: Iterable[Decimal]) -> Decimal:
    """Sum starting from ``Decimal(0)`` so an empty iterable stays Decimal."""

    return sum(values, ZERO)


__all__ = [
    "CENT",
    "HUNDRED",
    "MoneyLike",
    "ONE",
    "ZERO",
    "money_max",
    "money_min",
    "money_sum",
    "monthly_rate",
    "quantize_cents",
    "to_decimal",
    "to_float",
]
