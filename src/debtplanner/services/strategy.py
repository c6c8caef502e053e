"""Payoff strategies: which debt gets extra money first."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Mapping, Union

from ..constants import STRATEGY_NAMES
from ..models.payoff import DebtSnapshot


@dataclass(frozen=True, slots=True)
class Avalanche:
    """Highest interest rate first."""

    name = "avalanche"


@dataclass(frozen=True, slots=True)
class Snowball:
    """Smallest balance first."""

    name = "snowball"


@dataclass(frozen=True, slots=True)
class Custom:
    """Caller-chosen order: higher priority number first.

    ``priorities`` overrides the debts' own ``priority`` field; debts found in
    neither default to 0.
    """

    priorities: Mapping[str, int] = field(default_factory=dict)

    name = "custom"

    def __post_init__(self) -> None:
        frozen = MappingProxyType({str(k): int(v) for k, v in dict(self.priorities).items()})
        object.__setattr__(self, "priorities", frozen)

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.priorities.items())))

    def priority_of(self, snapshot: DebtSnapshot) -> int:
        return self.priorities.get(snapshot.debt_id, snapshot.priority)


Strategy = Union[Avalanche, Snowball, Custom]


def rank(snapshot: DebtSnapshot, strategy: Strategy) -> Decimal | int:
    """Sort key for extra-payment order; larger keys are paid first."""

    match strategy:
        case Avalanche():
            return snapshot.annual_rate
        case Snowball():
            # same order as 1/balance descending without dividing
            return -snapshot.balance
        case Custom():
            return strategy.priority_of(snapshot)
        case _:
            raise TypeError(f"Unsupported payoff strategy: {strategy!r}")


def order_by_priority(snapshots: Iterable[DebtSnapshot], strategy: Strategy) -> list[DebtSnapshot]:
    """Return *snapshots* highest rank first; equal keys go by input position."""

    return sorted(
        snapshots, key=lambda snap: (rank(snap, strategy), -snap.position), reverse=True
    )


def parse_strategy(
    value: "Strategy | str", priorities: Mapping[str, int] | None = None
) -> Strategy:
    """Map a strategy name (or variant) to a strategy variant.

    *priorities* given alongside a ``Custom`` variant are layered over its own
    map, winning on conflicts.
    """

    if isinstance(value, Custom) and priorities:
        return Custom({**value.priorities, **priorities})
    if isinstance(value, (Avalanche, Snowball, Custom)):
        return value
    name = str(value or "").strip().lower()
    if name == "avalanche":
        return Avalanche()
    if name == "snowball":
        return Snowball()
    if name == "custom":
        return Custom(priorities or {})
    raise ValueError("Invalid debt payoff strategy.")


__all__ = [
    "Avalanche",
    "Custom",
    "STRATEGY_NAMES",
    "Snowball",
    "Strategy",
    "order_by_priority",
    "parse_strategy",
    "rank",
]
