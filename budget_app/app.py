from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pandas as pd

from . import config
from .db import Store
from .repository import CategoryRepository, TransactionRepository
from .summary import summary_frame


class BudgetApp:
    """Wires one store to the category and transaction repositories."""

    def __init__(self, store: Store, clock=datetime.now):
        self.store = store
        self.categories = CategoryRepository(store, clock=clock)
        self.transactions = TransactionRepository(store, clock=clock)

    @classmethod
    def open(cls, db_path: Path | str | None = None, clock=datetime.now) -> "BudgetApp":
        """Open (creating if needed) the budget database and remember its path.

        The path comes from the argument, then the last database recorded in
        ``budget.ini``, then ``budget.db`` beside the config file.
        """
        path = Path(db_path) if db_path else (config.DB_PATH or config.default_db_path())
        path = path.expanduser().resolve()
        store = Store.open(path)
        config.DB_PATH = path
        config.save_last_db(path)
        return cls(store, clock=clock)

    @classmethod
    def in_memory(cls, clock=datetime.now) -> "BudgetApp":
        return cls(Store.in_memory(), clock=clock)

    def overview(self) -> pd.DataFrame:
        return summary_frame(self.categories.list_all())

    def total_budget(self) -> float:
        return self.categories.total_budget()

    def close(self) -> None:
        self.store.close()

    def __enter__(self) -> "BudgetApp":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
