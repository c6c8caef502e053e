"""Service module exports."""

from . import (
    allocator,
    baseline,
    consolidation,
    debts,
    export_csv,
    import_csv,
    insights,
    strategy,
    validation,
)

__all__ = [
    "allocator",
    "baseline",
    "consolidation",
    "debts",
    "export_csv",
    "import_csv",
    "insights",
    "strategy",
    "validation",
]
