"""Budget entities and their derived totals.

Entities are immutable snapshots taken when the repository reads the store.
The aggregates below are plain functions over a snapshot, recomputed on
every call.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Transaction:
    """A single expense recorded against a category."""

    id: int
    category_id: int
    title: str
    total: float
    date_created: datetime


@dataclass(frozen=True)
class BudgetCategory:
    """A named spending bucket with a target amount and its transactions."""

    id: int
    title: str
    total: float
    date_created: datetime
    transactions: tuple[Transaction, ...] = ()


def transactions_total(category: BudgetCategory) -> float:
    return sum((t.total for t in category.transactions), 0.0)


def remaining_budget_total(category: BudgetCategory) -> float:
    return category.total - transactions_total(category)


def over_spent(category: BudgetCategory) -> bool:
    return remaining_budget_total(category) < 0
