from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterable, Iterator

import pandas as pd

from . import config
from .errors import PersistenceError

logger = logging.getLogger(__name__)

CATEGORY_TABLE = "budget_category"
TRANSACTION_TABLE = "budget_transaction"

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS budget_category (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    total REAL NOT NULL CHECK (total >= 0),
    date_created TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS budget_transaction (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    category_id INTEGER NOT NULL REFERENCES budget_category (id),
    title TEXT NOT NULL,
    total REAL NOT NULL,
    date_created TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS ix_transaction_category
ON budget_transaction (category_id, date_created);
"""

COLUMNS: dict[str, tuple[str, ...]] = {
    CATEGORY_TABLE: ("id", "title", "total", "date_created"),
    TRANSACTION_TABLE: ("id", "category_id", "title", "total", "date_created"),
}

# Newest first; id breaks ties between rows created in the same instant.
NEWEST_FIRST = (("date_created", True), ("id", True))


def get_conn(db_path: Path | None = None) -> sqlite3.Connection:
    """Return a sqlite3 connection to the given or configured DB path."""
    db_path = db_path or config.DB_PATH
    if not db_path:
        raise RuntimeError("Database path is not configured. Please choose a DB file.")
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(str(db_path))


def _check_columns(table: str, columns: Iterable[str]) -> None:
    if table not in COLUMNS:
        raise ValueError(f"Unknown table: {table}")
    unknown = [c for c in columns if c not in COLUMNS[table]]
    if unknown:
        raise ValueError(f"Unknown columns for {table}: {', '.join(unknown)}")


class Store:
    """Keyed row store over a single sqlite connection.

    Mutating calls leave the change pending until ``commit``. Every
    ``sqlite3`` failure is re-raised as ``PersistenceError``.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self.conn.execute("PRAGMA foreign_keys = ON")

    @classmethod
    def open(cls, db_path: Path | None = None) -> "Store":
        try:
            conn = get_conn(db_path)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Unable to open database {db_path}: {e}") from e
        try:
            store = cls(conn)
            store.init_schema()
        except PersistenceError:
            conn.close()
            raise
        except sqlite3.Error as e:
            conn.close()
            raise PersistenceError(f"Unable to open database {db_path}: {e}") from e
        logger.info("Opened budget database %s", db_path or config.DB_PATH)
        return store

    @classmethod
    def in_memory(cls) -> "Store":
        store = cls(sqlite3.connect(":memory:"))
        store.init_schema()
        return store

    def init_schema(self) -> None:
        try:
            self.conn.executescript(SCHEMA_SQL)
            self.conn.commit()
        except sqlite3.Error as e:
            raise PersistenceError(f"Unable to initialise schema: {e}") from e

    def _execute(self, sql: str, params: Iterable[Any] = ()) -> sqlite3.Cursor:
        try:
            return self.conn.execute(sql, tuple(params))
        except sqlite3.Error as e:
            raise PersistenceError(str(e)) from e

    def insert(self, table: str, values: dict[str, Any]) -> int:
        _check_columns(table, values)
        names = ", ".join(values)
        marks = ", ".join("?" * len(values))
        cur = self._execute(f"INSERT INTO {table} ({names}) VALUES ({marks})", values.values())
        logger.debug("Inserted %s id=%s", table, cur.lastrowid)
        return int(cur.lastrowid)

    def update(self, table: str, row_id: int, values: dict[str, Any]) -> bool:
        _check_columns(table, values)
        assignments = ", ".join(f"{name}=?" for name in values)
        cur = self._execute(
            f"UPDATE {table} SET {assignments} WHERE id=?",
            [*values.values(), row_id],
        )
        return cur.rowcount > 0

    def delete(self, table: str, row_id: int) -> bool:
        _check_columns(table, ())
        cur = self._execute(f"DELETE FROM {table} WHERE id=?", (row_id,))
        logger.debug("Deleted %s id=%s (%d row)", table, row_id, cur.rowcount)
        return cur.rowcount > 0

    def delete_where(self, table: str, column: str, value: Any) -> int:
        _check_columns(table, (column,))
        cur = self._execute(f"DELETE FROM {table} WHERE {column}=?", (value,))
        logger.debug("Deleted %d %s rows where %s=%s", cur.rowcount, table, column, value)
        return cur.rowcount

    def query(
        self,
        table: str,
        where: dict[str, Any] | None = None,
        order_by: Iterable[tuple[str, bool]] = NEWEST_FIRST,
    ) -> pd.DataFrame:
        """Return matching rows as a DataFrame with the table's columns."""
        where = where or {}
        order_by = list(order_by)
        _check_columns(table, [*where, *(name for name, _ in order_by)])
        sql = f"SELECT {', '.join(COLUMNS[table])} FROM {table}"
        if where:
            sql += " WHERE " + " AND ".join(f"{name}=?" for name in where)
        if order_by:
            sql += " ORDER BY " + ", ".join(
                f"{name} {'DESC' if descending else 'ASC'}" for name, descending in order_by
            )
        try:
            return pd.read_sql_query(sql, self.conn, params=list(where.values()))
        except (sqlite3.Error, pd.errors.DatabaseError) as e:
            raise PersistenceError(str(e)) from e

    def get(self, table: str, row_id: int) -> dict[str, Any] | None:
        df = self.query(table, {"id": row_id}, order_by=())
        if df.empty:
            return None
        return df.to_dict("records")[0]

    @contextmanager
    def atomic(self) -> Iterator["Store"]:
        """Commit the enclosed changes, or roll them all back on error."""
        try:
            yield self
        except Exception:
            self.rollback()
            raise
        self.commit()

    def commit(self) -> None:
        try:
            self.conn.commit()
        except sqlite3.Error as e:
            logger.error("Commit failed: %s", e)
            try:
                self.conn.rollback()
            except sqlite3.Error:
                logger.exception("Rollback after failed commit also failed")
            raise PersistenceError(f"Commit failed: {e}") from e

    def rollback(self) -> None:
        """Discard pending changes so the failed operation can be retried."""
        try:
            self.conn.rollback()
        except sqlite3.Error as e:
            raise PersistenceError(f"Rollback failed: {e}") from e

    def close(self) -> None:
        self.conn.close()
