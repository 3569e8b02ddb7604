from collections import defaultdict
from datetime import datetime
import logging

import pandas as pd

from .db import CATEGORY_TABLE, TRANSACTION_TABLE, Store
from .errors import NotFoundError, ValidationError
from .models import BudgetCategory, Transaction
from .validation import parse_total, validate_category, validate_transaction

logger = logging.getLogger(__name__)


def _timestamp(value: datetime) -> str:
    return value.isoformat(timespec="microseconds")


def _to_transaction(row) -> Transaction:
    return Transaction(
        id=int(row.id),
        category_id=int(row.category_id),
        title=str(row.title),
        total=float(row.total),
        date_created=datetime.fromisoformat(row.date_created),
    )


def _to_transactions(df: pd.DataFrame) -> list[Transaction]:
    return [_to_transaction(row) for row in df.itertuples(index=False)]


def _to_category(row, transactions=()) -> BudgetCategory:
    return BudgetCategory(
        id=int(row.id),
        title=str(row.title),
        total=float(row.total),
        date_created=datetime.fromisoformat(row.date_created),
        transactions=tuple(transactions),
    )


class CategoryRepository:
    def __init__(self, store: Store, clock=datetime.now):
        self.store = store
        self.clock = clock

    def list_all(self) -> list[BudgetCategory]:
        """All categories, newest first, each with its transactions loaded."""
        categories = self.store.query(CATEGORY_TABLE)
        by_category = defaultdict(list)
        for t in _to_transactions(self.store.query(TRANSACTION_TABLE)):
            by_category[t.category_id].append(t)
        return [
            _to_category(row, by_category[int(row.id)])
            for row in categories.itertuples(index=False)
        ]

    def get_by_id(self, category_id: int) -> BudgetCategory:
        categories = self.store.query(CATEGORY_TABLE, {"id": category_id}, order_by=())
        if categories.empty:
            raise NotFoundError("BudgetCategory", category_id)
        transactions = _to_transactions(
            self.store.query(TRANSACTION_TABLE, {"category_id": category_id})
        )
        row = next(categories.itertuples(index=False))
        return _to_category(row, transactions)

    def create(self, title: str, total) -> int:
        messages = validate_category(title, total)
        if messages:
            raise ValidationError(messages)
        with self.store.atomic():
            return self.store.insert(
                CATEGORY_TABLE,
                {
                    "title": title.strip(),
                    "total": parse_total(total),
                    "date_created": _timestamp(self.clock()),
                },
            )

    def update(self, category_id: int, title: str, total) -> None:
        messages = validate_category(title, total)
        if messages:
            raise ValidationError(messages)
        with self.store.atomic():
            updated = self.store.update(
                CATEGORY_TABLE,
                category_id,
                {"title": title.strip(), "total": parse_total(total)},
            )
            if not updated:
                raise NotFoundError("BudgetCategory", category_id)

    def delete(self, category_id: int) -> None:
        with self.store.atomic():
            # Owned transactions go first; the foreign key forbids orphans.
            removed = self.store.delete_where(TRANSACTION_TABLE, "category_id", category_id)
            if not self.store.delete(CATEGORY_TABLE, category_id):
                raise NotFoundError("BudgetCategory", category_id)
        logger.info("Deleted category %s and %d transaction(s)", category_id, removed)

    def total_budget(self) -> float:
        df = self.store.query(CATEGORY_TABLE, order_by=())
        return float(df["total"].sum()) if not df.empty else 0.0


class TransactionRepository:
    def __init__(self, store: Store, clock=datetime.now):
        self.store = store
        self.clock = clock

    def list_for_category(self, category_id: int) -> list[Transaction]:
        """Transactions of one category, newest first."""
        return _to_transactions(
            self.store.query(TRANSACTION_TABLE, {"category_id": category_id})
        )

    def get_by_id(self, transaction_id: int) -> Transaction:
        df = self.store.query(TRANSACTION_TABLE, {"id": transaction_id}, order_by=())
        if df.empty:
            raise NotFoundError("Transaction", transaction_id)
        return _to_transaction(next(df.itertuples(index=False)))

    def create(self, category_id: int, title: str, total) -> int:
        messages = validate_transaction(title, total)
        if messages:
            raise ValidationError(messages)
        if self.store.get(CATEGORY_TABLE, category_id) is None:
            raise NotFoundError("BudgetCategory", category_id)
        with self.store.atomic():
            return self.store.insert(
                TRANSACTION_TABLE,
                {
                    "category_id": category_id,
                    "title": title.strip(),
                    "total": parse_total(total),
                    "date_created": _timestamp(self.clock()),
                },
            )

    def delete(self, transaction_id: int) -> None:
        with self.store.atomic():
            if not self.store.delete(TRANSACTION_TABLE, transaction_id):
                raise NotFoundError("Transaction", transaction_id)
