"""Extract item name / quantity / price candidates from normalized lines."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from .models import CENTS, MAX_NAME_LENGTH, ReceiptLineItem

MAX_ITEMS = 25

_ITEM_LINE_RE = re.compile(
    r"^(?P<name>.*?)\s+"
    r"(?:(?P<qty>x?\d+)(?:\s+|(?=[$£€])))?"
    r"[$£€]?(?P<price>\d+(?:\.\d{2})?)$",
    re.IGNORECASE,
)

# Labels made only of summary or payment words ("Sub Total", "Amount Due:",
# "VISA ****1234"); product names that merely contain one are still items.
_SUMMARY_RE = re.compile(
    r"^(?:(?:sub-?\s?total|total|sales|tax|vat|balance|amount|due|change|cash|"
    r"tender(?:ed)?|paid|payment|visa|mastercard|amex|debit|credit|card)\b"
    r"[\s:#*\d-]*)+$",
    re.IGNORECASE,
)


def parse_item_line(line: str) -> ReceiptLineItem | None:
    """Parse one line into a line item, or None if it is not an item."""
    match = _ITEM_LINE_RE.match(line)
    if not match:
        return None

    name = match.group("name").strip()
    if not name or _SUMMARY_RE.search(name):
        return None

    try:
        price = Decimal(match.group("price")).quantize(CENTS)
    except InvalidOperation:
        return None
    if price < 0:
        return None

    raw_qty = (match.group("qty") or "1").lower().lstrip("x")
    quantity = max(1, int(raw_qty))

    return ReceiptLineItem(
        name=name[:MAX_NAME_LENGTH],
        quantity=quantity,
        price=price,
    )


def parse_line_items(lines: list[str], limit: int = MAX_ITEMS) -> list[ReceiptLineItem]:
    """Parse every line, dropping the ones that are not items."""
    items: list[ReceiptLineItem] = []
    for line in lines:
        item = parse_item_line(line)
        if item is None:
            continue
        items.append(item)
        if len(items) >= limit:
            break
    return items
