"""Pantry freshness tracking and receipt ingestion."""

from .config import (
    DatabaseConfig,
    FreshtrackConfig,
    OCRConfig,
    SchedulerConfig,
    ShelfLifeConfig,
    load_config,
)
from .lifecycle import (
    FreshnessStatus,
    ItemLifecycleStore,
    PantryItem,
    ShelfLifeResolver,
    ShelfLifeTable,
    evaluate,
)
from .ocr import OCRBackend, create_backend
from .receipts import (
    IngestionResult,
    ParsedReceipt,
    ReceiptIngestionPipeline,
    ReceiptLineItem,
    parse_receipt_text,
)
from .shopping import ShoppingItem, ShoppingList

__all__ = [
    "FreshnessStatus",
    "PantryItem",
    "ShelfLifeTable",
    "ShelfLifeResolver",
    "ItemLifecycleStore",
    "evaluate",
    "OCRBackend",
    "create_backend",
    "ReceiptIngestionPipeline",
    "parse_receipt_text",
    "IngestionResult",
    "ParsedReceipt",
    "ReceiptLineItem",
    "ShoppingList",
    "ShoppingItem",
    "FreshtrackConfig",
    "OCRConfig",
    "ShelfLifeConfig",
    "SchedulerConfig",
    "DatabaseConfig",
    "load_config",
]
