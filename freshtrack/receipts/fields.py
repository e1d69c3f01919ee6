"""Extract store name, transaction date and total from normalized lines."""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation

from .models import CENTS, MAX_NAME_LENGTH, UNKNOWN_STORE

_STORE_NAME_RE = re.compile(r"[A-Za-z]{3,}")

_ISO_DATE_RE = re.compile(r"\b(\d{4})[-/.](\d{1,2})[-/.](\d{1,2})\b")
_SHORT_DATE_RE = re.compile(r"\b(\d{1,2})[-/.](\d{1,2})[-/.](\d{2,4})\b")

_MONEY_RE = re.compile(
    r"(?:(?:USD|INR|EUR|GBP|CAD|AUD)\s*)?[$£€]?\s*"
    r"(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d{2})?"
)
_TOTAL_LINE_RE = re.compile(r"total|amount due|balance", re.IGNORECASE)
_NON_NUMERIC_RE = re.compile(r"[^0-9.]")


def extract_store_name(lines: list[str]) -> str:
    """First line with at least three consecutive letters."""
    for line in lines:
        if _STORE_NAME_RE.search(line):
            return line[:MAX_NAME_LENGTH]
    return UNKNOWN_STORE


def resolve_date_parts(first: int, middle: int, last: int) -> date | None:
    """Order three numeric date components into a calendar date.

    A first component above 31 is the year (year-month-day). Otherwise the
    last component must be a four-digit year; the component above 12 is then
    the day, and month-day-year is assumed when neither is.
    Returns None when the order cannot be decided or the date does not exist.
    """
    if first > 31:
        year, month, day = first, middle, last
    elif last > 31:
        if last < 1000:
            return None
        year = last
        if first > 12:
            day, month = first, middle
        else:
            month, day = first, middle
    else:
        return None

    try:
        return date(year, month, day)
    except ValueError:
        return None


def extract_date(text: str, today: date) -> date:
    """Find the transaction date in ``text``, defaulting to ``today``."""
    for pattern in (_ISO_DATE_RE, _SHORT_DATE_RE):
        match = pattern.search(text)
        if match:
            parts = [int(g) for g in match.groups()]
            return resolve_date_parts(*parts) or today
    return today


def parse_amount(raw: str) -> Decimal | None:
    """Parse a matched money string like ``"USD $1,234.50"``."""
    digits = _NON_NUMERIC_RE.sub("", raw)
    if not digits:
        return None
    try:
        return Decimal(digits).quantize(CENTS)
    except InvalidOperation:
        return None


def find_amounts(text: str) -> list[Decimal]:
    amounts = (parse_amount(m.group(0)) for m in _MONEY_RE.finditer(text))
    return [a for a in amounts if a is not None]


def extract_total(lines: list[str]) -> Decimal:
    """Pick the receipt total.

    The last amount on the first total/amount due/balance line wins; without
    one, the largest amount anywhere is used.
    """
    total = Decimal("0.00")
    for line in lines:
        if _TOTAL_LINE_RE.search(line):
            in_line = find_amounts(line)
            if in_line:
                total = in_line[-1]
            break

    if not total:
        amounts = find_amounts("\n".join(lines))
        if amounts:
            total = max(amounts)
    return total
