from typing import Any, Iterable

import pandas as pd

from .config import load_format_settings
from .models import BudgetCategory, over_spent, remaining_budget_total, transactions_total

SUMMARY_COLUMNS = ["id", "title", "total", "spent", "remaining", "over_spent", "status"]


def format_currency(value: float, settings: dict[str, Any] | None = None) -> str:
    """Format an amount with the configured symbol. Pass ``settings`` when
    formatting many values so budget.ini is read only once."""
    if settings is None:
        settings = load_format_settings()
    decimals = settings["decimals"]
    symbol = settings["currency_symbol"]
    # Treat tiny float residue as zero so it never prints as "-$0.00".
    if abs(value) < 0.5 * 10 ** -decimals:
        value = 0.0
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{decimals}f}"


def status_label(category: BudgetCategory, settings: dict[str, Any] | None = None) -> str:
    if settings is None:
        settings = load_format_settings()
    prefix = "Overspent" if over_spent(category) else "Remaining"
    return f"{prefix} {format_currency(remaining_budget_total(category), settings)}"


def total_budget(categories: Iterable[BudgetCategory]) -> float:
    return sum((c.total for c in categories), 0.0)


def summary_frame(
    categories: Iterable[BudgetCategory], settings: dict[str, Any] | None = None
) -> pd.DataFrame:
    """One row per category with its spent/remaining figures, in input order."""
    if settings is None:
        settings = load_format_settings()
    rows = [
        {
            "id": c.id,
            "title": c.title,
            "total": c.total,
            "spent": transactions_total(c),
            "remaining": remaining_budget_total(c),
            "over_spent": over_spent(c),
            "status": status_label(c, settings),
        }
        for c in categories
    ]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
