"""Shelf-life reference data and resolution."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from .models import ShelfLifeTable

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

GLOBAL_DEFAULT_DAYS = 7

# Category → default shelf life (days from purchase)
_CATEGORY_DEFAULTS: dict[str, int] = {
    "Dairy": 7,
    "Produce": 7,
    "Bakery": 5,
    "Meat": 3,
    "Seafood": 2,
    "Snacks": 60,
    "Beverages": 30,
    "Frozen Foods": 180,
    "Grains": 365,
    "Pantry": 365,
    "Breakfast": 180,
    "Other": 7,
}

_ITEM_DAYS: dict[str, dict[str, int]] = {
    "Dairy": {
        "Milk": 7,
        "Whole Milk": 7,
        "Whole Milk 2%": 7,
        "Greek Yogurt": 14,
        "Yogurt": 14,
        "Cheddar Cheese": 30,
        "Cheese": 30,
        "Butter": 90,
        "Cream Cheese": 14,
        "Sour Cream": 21,
        "Eggs": 21,
    },
    "Produce": {
        "Bananas": 7,
        "Organic Bananas": 7,
        "Apples": 30,
        "Carrots": 21,
        "Spinach": 5,
        "Fresh Spinach": 5,
        "Tomatoes": 7,
        "Lettuce": 7,
        "Potatoes": 30,
        "Onions": 30,
        "Berries": 5,
    },
    "Bakery": {
        "Whole Wheat Bread": 5,
        "Bread": 5,
        "Bagels": 5,
        "Tortillas": 14,
    },
    "Meat": {
        "Chicken Breast": 2,
        "Ground Beef": 2,
        "Bacon": 7,
        "Ham": 7,
        "Sausage": 7,
    },
    "Seafood": {
        "Salmon Fillet": 2,
        "Shrimp": 2,
    },
    "Beverages": {
        "Orange Juice": 10,
        "Coffee": 180,
    },
    "Pantry": {
        "Brown Rice": 365,
        "Olive Oil": 540,
        "Pasta": 730,
    },
    "Breakfast": {
        "Oatmeal": 365,
        "Cereal": 180,
    },
}

DEFAULT_SHELF_LIFE_TABLE = ShelfLifeTable(
    items=_ITEM_DAYS, category_defaults=_CATEGORY_DEFAULTS
)


def load_shelf_life_table(path: str | Path) -> ShelfLifeTable:
    """Load a shelf-life table from a TOML file.

    The file holds a ``[defaults]`` table (category → days) and one
    ``[items.<Category>]`` table per category (item name → days).
    """
    with open(Path(path).expanduser(), "rb") as f:
        raw = tomllib.load(f)
    table = ShelfLifeTable(
        items=raw.get("items", {}),
        category_defaults=raw.get("defaults", {}),
    )
    logger.info(
        "Loaded shelf-life table from %s (%d categories)",
        path,
        len(table.category_defaults),
    )
    return table


class ShelfLifeResolver:
    """Resolves the shelf life of an item in days.

    Precedence, highest first: explicit override, exact item-name match in
    the category table, category default, global default.
    """

    def __init__(
        self,
        table: ShelfLifeTable = DEFAULT_SHELF_LIFE_TABLE,
        global_default: int = GLOBAL_DEFAULT_DAYS,
    ) -> None:
        self._table = table
        self._global_default = global_default

    @property
    def table(self) -> ShelfLifeTable:
        return self._table

    def resolve(
        self, item_name: str, category: str, override: int | None = None
    ) -> int:
        if override is not None:
            return int(override)

        days = self._table.item_days(category, item_name)
        if days is not None:
            return days

        days = self._table.category_default(category)
        if days is not None:
            return days

        return self._global_default
