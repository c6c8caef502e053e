"""Debt inputs and the keyed collection callers edit before simulating."""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping, Optional

from ..money import MoneyLike, money_sum, to_decimal


class DebtCategory(str, Enum):
    """Kind of debt; drives default-rate suggestions only."""

    CREDIT_CARD = "credit_card"
    STUDENT_LOAN = "student_loan"
    AUTO_LOAN = "auto_loan"
    PERSONAL_LOAN = "personal_loan"
    MORTGAGE = "mortgage"
    OTHER = "other"

    @classmethod
    def parse(cls, value: "DebtCategory | str | None") -> "DebtCategory":
        """Lenient lookup used by importers; unknown labels map to ``OTHER``."""

        if isinstance(value, cls):
            return value
        if not value:
            return cls.OTHER
        key = str(value).strip().lower().replace(" ", "_").replace("-", "_")
        try:
            return cls(key)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True, slots=True)
class CategoryDefaults:
    """Suggested starting values when a caller adds a debt of a category."""

    label: str
    annual_rate: Decimal
    balance: Decimal
    minimum_payment: Decimal


CATEGORY_DEFAULTS: dict[DebtCategory, CategoryDefaults] = {
    DebtCategory.CREDIT_CARD: CategoryDefaults(
        "Credit Card", Decimal("18.99"), Decimal("5000"), Decimal("125")
    ),
    DebtCategory.STUDENT_LOAN: CategoryDefaults(
        "Student Loan", Decimal("5.5"), Decimal("25000"), Decimal("300")
    ),
    DebtCategory.AUTO_LOAN: CategoryDefaults(
        "Auto Loan", Decimal("6.5"), Decimal("15000"), Decimal("350")
    ),
    DebtCategory.PERSONAL_LOAN: CategoryDefaults(
        "Personal Loan", Decimal("12.5"), Decimal("12000"), Decimal("280")
    ),
    DebtCategory.MORTGAGE: CategoryDefaults(
        "Mortgage", Decimal("6.75"), Decimal("250000"), Decimal("1650")
    ),
    DebtCategory.OTHER: CategoryDefaults("Other", Decimal("15"), Decimal("1000"), Decimal("50")),
}


def suggested_rate(category: DebtCategory | str) -> Decimal:
    """Return the typical APR for *category* (percent)."""

    return CATEGORY_DEFAULTS[DebtCategory.parse(category)].annual_rate


@dataclass(frozen=True, slots=True)
class Debt:
    """A liability as entered by the caller.

    Money fields accept floats, ints, strings or Decimals; they are normalized
    to ``Decimal`` on construction so equal inputs compare equal.
    """

    id: str
    name: str
    balance: Decimal
    annual_rate: Decimal
    minimum_payment: Decimal
    category: DebtCategory = DebtCategory.OTHER
    priority: Optional[int] = None

    def __post_init__(self) -> None:
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "balance", to_decimal(self.balance))
        object.__setattr__(self, "annual_rate", to_decimal(self.annual_rate))
        object.__setattr__(self, "minimum_payment", to_decimal(self.minimum_payment))
        object.__setattr__(self, "category", DebtCategory.parse(self.category))
        if self.priority is not None:
            object.__setattr__(self, "priority", int(self.priority))


class DebtBook(Mapping[str, Debt]):
    """Insertion-ordered debts keyed by id.

    Edits never touch the receiver: ``add``, ``update`` and ``remove`` return a
    new book, so a caller can keep the previous version for undo or diffing.
    """

    __slots__ = ("_debts",)

    def __init__(self, debts: Iterable[Debt] = ()) -> None:
        entries: dict[str, Debt] = {}
        for debt in debts:
            if debt.id in entries:
                raise ValueError(f"Duplicate debt id: {debt.id}")
            entries[debt.id] = debt
        self._debts = entries

    def __getitem__(self, debt_id: str) -> Debt:
        return self._debts[debt_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._debts)

    def __len__(self) -> int:
        return len(self._debts)

    def __repr__(self) -> str:
        return f"DebtBook({list(self._debts.values())!r})"

    def debts(self) -> list[Debt]:
        """Debts in insertion order."""

        return list(self._debts.values())

    def next_id(self) -> str:
        numeric = [int(key) for key in self._debts if key.isdigit()]
        return str(max(numeric, default=0) + 1)

    def add(self, debt: Debt) -> "DebtBook":
        if debt.id in self._debts:
            raise ValueError(f"Duplicate debt id: {debt.id}")
        return DebtBook([*self._debts.values(), debt])

    def add_default(
        self, category: DebtCategory | str = DebtCategory.OTHER, *, name: str | None = None
    ) -> "DebtBook":
        """Append a debt pre-filled from the category's suggested values."""

        kind = DebtCategory.parse(category)
        defaults = CATEGORY_DEFAULTS[kind]
        debt = Debt(
            id=self.next_id(),
            name=name or f"New {defaults.label}",
            balance=defaults.balance,
            annual_rate=defaults.annual_rate,
            minimum_payment=defaults.minimum_payment,
            category=kind,
        )
        return self.add(debt)

    def update(self, debt_id: str, **changes: Any) -> "DebtBook":
        """Return a book where *debt_id* has *changes* applied.

        The id itself cannot be changed; remove and re-add instead.
        """

        if "id" in changes:
            raise ValueError("Debt id is immutable")
        current = self._debts[debt_id]
        updated = replace(current, **changes)
        return DebtBook(updated if key == debt_id else debt for key, debt in self._debts.items())

    def remove(self, debt_id: str) -> "DebtBook":
        if debt_id not in self._debts:
            raise KeyError(debt_id)
        return DebtBook(debt for key, debt in self._debts.items() if key != debt_id)


def total_balance(debts: Iterable[Debt]) -> Decimal:
    return money_sum(debt.balance for debt in debts)


def total_minimum_payment(debts: Iterable[Debt]) -> Decimal:
    return money_sum(debt.minimum_payment for debt in debts)


def weighted_average_rate(debts: Iterable[Debt]) -> Decimal:
    """Balance-weighted APR across *debts*; zero when there is no balance."""

    items = list(debts)
    balance = total_balance(items)
    if balance <= 0:
        return Decimal("0")
    return money_sum(debt.balance * debt.annual_rate for debt in items) / balance


def coerce_debt(value: Debt | Mapping[str, MoneyLike]) -> Debt:
    """Accept a ``Debt`` or a plain mapping with the same field names."""

    if isinstance(value, Debt):
        return value
    data = dict(value)
    return Debt(
        id=str(data["id"]),
        name=str(data.get("name", "")),
        balance=data.get("balance"),  # type: ignore[arg-type]
        annual_rate=data.get("annual_rate"),  # type: ignore[arg-type]
        minimum_payment=data.get("minimum_payment"),  # type: ignore[arg-type]
        category=data.get("category"),  # type: ignore[arg-type]
        priority=data.get("priority"),  # type: ignore[arg-type]
    )
