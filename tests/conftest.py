"""Pytest configuration and shared fixtures for debtplanner tests.

Factories build ``Debt`` inputs with sensible defaults; helpers compare the
engine's float outputs within a cent.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

import pytest

from debtplanner.models import Debt, DebtCategory

START = date(2025, 1, 1)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Point config at a temp dir and drop handlers a CLI run installed."""

    monkeypatch.setenv("DEBTPLANNER_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("DEBTPLANNER_DEV_MODE", "0")
    monkeypatch.delenv("DEBTPLANNER_MAX_MONTHS", raising=False)
    monkeypatch.delenv("DEBTPLANNER_DEFAULT_STRATEGY", raising=False)
    yield
    logger = logging.getLogger("debtplanner")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def debt_factory():
    """Factory for ``Debt`` inputs.

    Returns:
        Callable: Function that creates Debt instances
    """

    def _create_debt(
        id: str = "1",
        name: str = "Test Debt",
        balance: float = 1000.00,
        annual_rate: float = 18.0,
        minimum_payment: float = 50.00,
        category: DebtCategory = DebtCategory.CREDIT_CARD,
        priority: int | None = None,
    ) -> Debt:
        return Debt(
            id=id,
            name=name,
            balance=balance,
            annual_rate=annual_rate,
            minimum_payment=minimum_payment,
            category=category,
            priority=priority,
        )

    return _create_debt


@pytest.fixture
def two_debts(debt_factory):
    """Debt A (1000 @ 20%, min 50) and Debt B (2000 @ 10%, min 60)."""

    return [
        debt_factory(id="A", name="Debt A", balance=1000, annual_rate=20, minimum_payment=50),
        debt_factory(id="B", name="Debt B", balance=2000, annual_rate=10, minimum_payment=60),
    ]


@pytest.fixture
def three_debts(debt_factory):
    """Large high-APR card, small low-APR loan, medium mid-APR card."""

    return [
        debt_factory(id="1", name="Card", balance=5000, annual_rate=18, minimum_payment=100),
        debt_factory(id="2", name="Loan", balance=1000, annual_rate=12, minimum_payment=50),
        debt_factory(id="3", name="Store Card", balance=3000, annual_rate=15, minimum_payment=75),
    ]


@pytest.fixture
def debts_csv(tmp_path) -> Path:
    path = tmp_path / "debts.csv"
    path.write_text(
        "ID,Name,Category,Balance,APR,Minimum Payment\n"
        "A,Card,credit_card,1000,20,50\n"
        "B,Loan,personal loan,2000,10,60\n",
        encoding="utf-8",
    )
    return path


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    diff = abs(actual - expected)
    assert diff <= tolerance + 1e-9, (
        f"Expected {expected}, got {actual} (difference: {diff}, tolerance: {tolerance})"
    )
