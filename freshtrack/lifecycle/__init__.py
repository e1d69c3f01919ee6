"""Perishable-item lifecycle: shelf life, freshness status and the item store."""

from .models import FreshnessStatus, PantryItem, ShelfLifeTable
from .shelf_life import (
    DEFAULT_SHELF_LIFE_TABLE,
    GLOBAL_DEFAULT_DAYS,
    ShelfLifeResolver,
    load_shelf_life_table,
)
from .status import (
    Clock,
    StatusEvaluation,
    evaluate,
    expiring_threshold,
    system_clock,
)
from .store import CartPort, ItemLifecycleStore, ItemRepository

__all__ = [
    "FreshnessStatus",
    "PantryItem",
    "ShelfLifeTable",
    "ShelfLifeResolver",
    "DEFAULT_SHELF_LIFE_TABLE",
    "GLOBAL_DEFAULT_DAYS",
    "load_shelf_life_table",
    "Clock",
    "StatusEvaluation",
    "evaluate",
    "expiring_threshold",
    "system_clock",
    "CartPort",
    "ItemLifecycleStore",
    "ItemRepository",
]
