"""Data models for parsed receipts and ingestion results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

UNKNOWN_STORE = "Unknown Store"
DEFAULT_CATEGORY = "other"
DEFAULT_EXPIRATION_DAYS = 7
MAX_NAME_LENGTH = 60
MAX_RAW_TEXT_LENGTH = 5000

CENTS = Decimal("0.01")


@dataclass
class ReceiptLineItem:
    """A single item line parsed from a receipt."""

    name: str
    quantity: int = 1
    price: Decimal = Decimal("0.00")  # unit price
    category: str = DEFAULT_CATEGORY
    expiration_days: int = DEFAULT_EXPIRATION_DAYS
    is_placeholder: bool = False

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "quantity": str(self.quantity),
            "price": format_amount(self.price),
            "category": self.category,
            "expirationDays": self.expiration_days,
        }


@dataclass
class ParsedReceipt:
    store_name: str
    date: date
    total: Decimal = Decimal("0.00")
    items: list[ReceiptLineItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "storeName": self.store_name,
            "date": self.date.isoformat(),
            "total": format_amount(self.total),
        }


@dataclass
class IngestionResult:
    success: bool
    data: ParsedReceipt | None = None
    raw_text: str | None = None
    error: str | None = None
    note: str | None = None

    def to_dict(self) -> dict:
        result: dict = {"success": self.success}
        if self.data is not None:
            result["data"] = self.data.to_dict()
        if self.raw_text:
            result["rawText"] = self.raw_text[:MAX_RAW_TEXT_LENGTH]
        if self.error is not None:
            result["error"] = self.error
        if self.note is not None:
            result["note"] = self.note
        return result


def format_amount(value: Decimal) -> str:
    return str(value.quantize(CENTS))


def placeholder_item(name: str = "Receipt items detected") -> ReceiptLineItem:
    """Synthetic entry used when a receipt yields no parseable items."""
    return ReceiptLineItem(name=name, is_placeholder=True)


def fallback_receipt(today: date) -> ParsedReceipt:
    """Receipt returned when OCR could not read the image at all."""
    return ParsedReceipt(
        store_name=UNKNOWN_STORE,
        date=today,
        items=[placeholder_item("Unable to process receipt")],
    )
