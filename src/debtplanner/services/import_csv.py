"""CSV ingestion for debt lists."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Iterable, Mapping, Optional

import pandas as pd

from ..logging_config import get_logger
from ..models.debt import Debt, DebtBook, DebtCategory
from ..money import to_decimal

logger = get_logger(__name__)


@dataclass(slots=True)
class ColumnMapping:
    """Maps debt fields to (lower-cased) CSV headers; first match wins."""

    id: tuple[str, ...] = ("id", "debt_id")
    name: tuple[str, ...] = ("name", "debt", "description")
    category: tuple[str, ...] = ("category", "type")
    balance: tuple[str, ...] = ("balance",)
    annual_rate: tuple[str, ...] = ("rate", "interest_rate", "apr", "annual_rate")
    minimum_payment: tuple[str, ...] = ("minimum_payment", "minimum", "min_payment")
    priority: tuple[str, ...] = ("priority",)

    def resolve(self, columns: Iterable[str]) -> dict[str, Optional[str]]:
        """Return field -> header actually present in the file (or None)."""

        present = set(columns)
        resolved: dict[str, Optional[str]] = {}
        for item in fields(self):
            candidates = getattr(self, item.name)
            resolved[item.name] = next((c for c in candidates if c in present), None)
        return resolved


REQUIRED_FIELDS = ("balance", "annual_rate", "minimum_payment")


def normalize_frame(*, file_path: Path, encoding: str = "utf-8") -> pd.DataFrame:
    """Load a CSV file as strings with consistent column casing."""

    frame = pd.read_csv(file_path, encoding=encoding, dtype=str, keep_default_na=False)
    frame.columns = [c.strip().lower().replace(" ", "_") for c in frame.columns]
    return frame


def _cell(row: Mapping[str, str], column: Optional[str]) -> str:
    if column is None:
        return ""
    value = row.get(column, "")
    return str(value).strip() if value is not None else ""


def parse_debts(
    *, rows: Iterable[Mapping[str, str]], mapping: ColumnMapping, columns: Iterable[str]
) -> list[Debt]:
    """Convert dict-like rows into ``Debt`` objects.

    Rows that are entirely blank are skipped. Numbers that cannot be parsed
    raise ``ValueError`` naming the (1-based, header excluded) row and column;
    range checks are left to ``validate_plan``.
    """

    resolved = mapping.resolve(columns)
    missing = [name for name in REQUIRED_FIELDS if resolved[name] is None]
    if missing:
        raise ValueError(f"Debt CSV is missing required column(s): {', '.join(missing)}")

    debts: list[Debt] = []
    used_ids: set[str] = set()
    for index, row in enumerate(rows, start=1):
        if not any(str(v).strip() for v in row.values() if v is not None):
            continue

        values: dict[str, object] = {}
        for field_name in REQUIRED_FIELDS:
            raw = _cell(row, resolved[field_name])
            try:
                values[field_name] = to_decimal(raw)
            except ValueError as exc:
                raise ValueError(
                    f"Row {index}: column '{resolved[field_name]}' is not a number: {raw!r}"
                ) from exc

        priority: Optional[int] = None
        raw_priority = _cell(row, resolved["priority"])
        if raw_priority:
            try:
                priority = int(float(raw_priority))
            except (ValueError, OverflowError) as exc:
                raise ValueError(
                    f"Row {index}: column '{resolved['priority']}' is not an integer: "
                    f"{raw_priority!r}"
                ) from exc

        debt_id = _cell(row, resolved["id"]) or str(index)
        while debt_id in used_ids:
            debt_id = f"{debt_id}-{index}"
        used_ids.add(debt_id)

        debts.append(
            Debt(
                id=debt_id,
                # a blank name in a named column is left for validation to report
                name=_cell(row, resolved["name"]) if resolved["name"] else f"Debt {index}",
                category=DebtCategory.parse(_cell(row, resolved["category"])),
                priority=priority,
                **values,  # type: ignore[arg-type]
            )
        )
    return debts


def load_debts(*, csv_path: Path, mapping: ColumnMapping | None = None) -> DebtBook:
    """Parse a debts CSV into a ``DebtBook`` preserving file order."""

    frame = normalize_frame(file_path=csv_path)
    rows = [{c: r[c] for c in frame.columns} for _, r in frame.iterrows()]
    debts = parse_debts(rows=rows, mapping=mapping or ColumnMapping(), columns=frame.columns)
    logger.info("Loaded debts from CSV", extra={"path": str(csv_path), "count": len(debts)})
    return DebtBook(debts)


__all__ = ["ColumnMapping", "load_debts", "normalize_frame", "parse_debts"]
