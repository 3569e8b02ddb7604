import itertools
import sqlite3
from datetime import datetime, timedelta

import pytest

from budget_app import config
from budget_app.db import Store
from budget_app.repository import CategoryRepository, TransactionRepository


@pytest.fixture(autouse=True)
def config_file(tmp_path, monkeypatch):
    """Point budget.ini at a temporary file so tests never touch the real one."""
    path = tmp_path / "budget.ini"
    monkeypatch.setattr(config, "CONFIG_FILE", path)
    monkeypatch.setattr(config, "DB_PATH", None)
    return path


@pytest.fixture
def clock():
    start = datetime(2024, 1, 1, 9, 0)
    ticks = itertools.count()
    return lambda: start + timedelta(minutes=next(ticks))


@pytest.fixture
def store():
    store = Store.in_memory()
    yield store
    store.close()


@pytest.fixture
def categories(store, clock):
    return CategoryRepository(store, clock=clock)


@pytest.fixture
def transactions(store, clock):
    return TransactionRepository(store, clock=clock)


class FlakyConnection(sqlite3.Connection):
    """sqlite connection whose next ``fail_commits`` commits raise."""

    fail_commits = 0

    def commit(self):
        if self.fail_commits:
            self.fail_commits -= 1
            raise sqlite3.OperationalError("disk I/O error")
        super().commit()


@pytest.fixture
def flaky_store():
    store = Store(sqlite3.connect(":memory:", factory=FlakyConnection))
    store.init_schema()
    yield store
    store.close()
