"""In-memory shopping list fed by consumed pantry items."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .lifecycle.models import PantryItem

logger = logging.getLogger(__name__)


@dataclass
class ShoppingItem:
    id: str
    name: str
    category: str
    quantity: int = 1
    is_checked: bool = False
    added_date: date = field(default_factory=date.today)


class ShoppingList:
    """Shopping list that doubles as the pantry store's cart port."""

    def __init__(self) -> None:
        self._items: dict[str, ShoppingItem] = {}

    def add_to_cart(self, item: PantryItem) -> ShoppingItem:
        """Add one unit of a used-up pantry item."""
        entry = self.add(item.name, item.category)
        logger.info("Added %s to the shopping list", item.name)
        return entry

    def add(self, name: str, category: str = "Other") -> ShoppingItem:
        """Add ``name``; an unpurchased entry with the same name gets one more unit."""
        name = name.strip()
        for existing in self._items.values():
            if not existing.is_checked and existing.name.casefold() == name.casefold():
                existing.quantity += 1
                return existing
        entry = ShoppingItem(id=uuid.uuid4().hex, name=name, category=category)
        self._items[entry.id] = entry
        return entry

    def update_quantity(self, item_id: str, delta: int) -> ShoppingItem | None:
        entry = self._items.get(item_id)
        if entry is not None:
            entry.quantity = max(0, entry.quantity + delta)
        return entry

    def toggle_purchased(self, item_id: str) -> ShoppingItem | None:
        entry = self._items.get(item_id)
        if entry is not None:
            entry.is_checked = not entry.is_checked
        return entry

    def clear_purchased(self) -> int:
        """Drop checked-off entries. Returns how many were removed."""
        purchased = [i for i, e in self._items.items() if e.is_checked]
        for item_id in purchased:
            del self._items[item_id]
        return len(purchased)

    def remove(self, item_id: str) -> ShoppingItem | None:
        return self._items.pop(item_id, None)

    def items(self) -> list[ShoppingItem]:
        return list(self._items.values())

    def pending(self) -> list[ShoppingItem]:
        return [e for e in self._items.values() if not e.is_checked]
