"""CSV export helpers for payoff schedules."""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path
from typing import Mapping

from ..models.payoff import PayoffResult

SCHEDULE_HEADERS = [
    "month",
    "payment_date",
    "debt_id",
    "debt_name",
    "starting_balance",
    "payment",
    "extra_payment",
    "interest",
    "principal",
    "ending_balance",
    "completed",
]


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def export_schedule_csv(
    *,
    result: PayoffResult,
    output_path: Path,
    names: Mapping[str, str] | None = None,
) -> Path:
    """Write the payoff schedule to CSV at `output_path`.

    Columns are deterministic (see ``SCHEDULE_HEADERS``); ``debt_name`` comes
    from *names* and falls back to the id. Returns the path written.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)
    lookup = names or {}

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(
            fh, fieldnames=SCHEDULE_HEADERS, extrasaction="ignore", quoting=csv.QUOTE_MINIMAL
        )
        writer.writeheader()
        for entry in result.schedule:
            row = {
                "month": entry.month,
                "payment_date": entry.payment_date,
                "debt_id": entry.debt_id,
                "debt_name": lookup.get(entry.debt_id, entry.debt_id),
                "starting_balance": entry.starting_balance,
                "payment": entry.payment,
                "extra_payment": entry.extra_payment,
                "interest": entry.interest,
                "principal": entry.principal,
                "ending_balance": entry.ending_balance,
                "completed": entry.completed,
            }
            writer.writerow({key: _serialize_value(value) for key, value in row.items()})

    return output_path


__all__ = ["SCHEDULE_HEADERS", "export_schedule_csv"]
