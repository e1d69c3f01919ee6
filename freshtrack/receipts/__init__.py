"""Receipt ingestion: OCR text normalization, field and line-item extraction."""

from .fields import extract_date, extract_store_name, extract_total, find_amounts
from .line_items import MAX_ITEMS, parse_item_line, parse_line_items
from .models import (
    IngestionResult,
    ParsedReceipt,
    ReceiptLineItem,
    fallback_receipt,
    placeholder_item,
)
from .normalize import clean_line, normalize, split_lines
from .pipeline import ReceiptIngestionPipeline, parse_receipt_text

__all__ = [
    "ReceiptIngestionPipeline",
    "parse_receipt_text",
    "IngestionResult",
    "ParsedReceipt",
    "ReceiptLineItem",
    "fallback_receipt",
    "placeholder_item",
    "normalize",
    "split_lines",
    "clean_line",
    "extract_store_name",
    "extract_date",
    "extract_total",
    "find_amounts",
    "parse_item_line",
    "parse_line_items",
    "MAX_ITEMS",
]
