from datetime import datetime

from budget_app import summary
from budget_app.models import BudgetCategory, Transaction
from budget_app.summary import (
    SUMMARY_COLUMNS,
    format_currency,
    status_label,
    summary_frame,
    total_budget,
)

USD = {"currency_symbol": "$", "decimals": 2}
CREATED = datetime(2024, 1, 1)


def _category(cid, title, total, *amounts):
    txs = tuple(
        Transaction(id=i, category_id=cid, title="t", total=a, date_created=CREATED)
        for i, a in enumerate(amounts)
    )
    return BudgetCategory(id=cid, title=title, total=total, date_created=CREATED, transactions=txs)


def test_format_currency():
    assert format_currency(1200, USD) == "$1,200.00"
    assert format_currency(-50, USD) == "-$50.00"
    assert format_currency(-0.001, USD) == "$0.00"
    assert format_currency(3.5, {"currency_symbol": "€", "decimals": 0}) == "€4"


def test_format_currency_reads_config_by_default():
    assert format_currency(9.99) == "$9.99"


def test_status_label():
    assert status_label(_category(1, "Food", 200, 50), USD) == "Remaining $150.00"
    assert status_label(_category(2, "Fun", 100, 150), USD) == "Overspent -$50.00"


def test_summary_frame_rows_follow_input_order():
    cats = [_category(2, "Fun", 100, 150), _category(1, "Food", 200, 20, 30)]

    df = summary_frame(cats, USD)

    assert list(df.columns) == SUMMARY_COLUMNS
    assert df["title"].tolist() == ["Fun", "Food"]
    assert df["spent"].tolist() == [150, 50]
    assert df["remaining"].tolist() == [-50, 150]
    assert df["over_spent"].tolist() == [True, False]


def test_summary_frame_empty():
    df = summary_frame([], USD)
    assert df.empty
    assert list(df.columns) == SUMMARY_COLUMNS


def test_total_budget():
    assert total_budget([]) == 0
    assert total_budget([_category(1, "A", 100), _category(2, "B", 50.5)]) == 150.5


def test_format_settings_are_read_once_per_call(monkeypatch):
    calls = []

    def counting_settings():
        calls.append(1)
        return USD

    monkeypatch.setattr(summary, "load_format_settings", counting_settings)
    cats = [_category(1, "Food", 200, 50), _category(2, "Fun", 100, 150)]

    summary_frame(cats)
    assert len(calls) == 1

    status_label(cats[0])
    assert len(calls) == 2
