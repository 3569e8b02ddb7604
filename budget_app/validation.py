import math
from typing import Any

TITLE_REQUIRED = "Title is required"
CATEGORY_TOTAL_TOO_SMALL = "Total should be greater than 1"
TOTAL_REQUIRED = "Total is required"
TOTAL_NOT_A_NUMBER = "Total must be a number"
TRANSACTION_TOTAL_TOO_SMALL = "Total should be greater than 0"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _missing_title(title: Any) -> bool:
    return not isinstance(title, str) or not title.strip()


def parse_total(value: Any) -> float | None:
    """Convert user input such as ``"1,200.50"`` to a float.

    Returns None for empty, unparseable or non-finite input.
    """
    if _is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        amount = float(value)
    else:
        try:
            amount = float(str(value).strip().replace(",", ""))
        except ValueError:
            return None
    if not math.isfinite(amount):
        return None
    return amount


def validate_category(title: Any, total: Any) -> list[str]:
    messages = []
    if _missing_title(title):
        messages.append(TITLE_REQUIRED)
    amount = parse_total(total)
    if amount is None or amount <= 0:
        messages.append(CATEGORY_TOTAL_TOO_SMALL)
    return messages


def validate_transaction(title: Any, total: Any) -> list[str]:
    messages = []
    if _missing_title(title):
        messages.append(TITLE_REQUIRED)
    if _is_blank(total):
        messages.append(TOTAL_REQUIRED)
    else:
        amount = parse_total(total)
        if amount is None:
            messages.append(TOTAL_NOT_A_NUMBER)
        elif amount <= 0:
            messages.append(TRANSACTION_TOTAL_TOO_SMALL)
    return messages
