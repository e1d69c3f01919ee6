"""Data models for pantry items and shelf-life reference data."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class FreshnessStatus(str, Enum):
    FRESH = "fresh"
    EXPIRING = "expiring"
    EXPIRED = "expired"
    CONSUMED = "consumed"


@dataclass
class PantryItem:
    """A tracked pantry item.

    ``total_shelf_life_days``, ``days_remaining`` and ``status`` are derived
    by the lifecycle store; callers should treat them as read-only.
    """

    id: str
    name: str
    category: str
    quantity: int
    purchase_date: date
    expiry_date: date
    custom_shelf_life: int | None = None
    total_shelf_life_days: int = 0
    days_remaining: int = 0
    status: FreshnessStatus = FreshnessStatus.FRESH
    expiry_derived: bool = True
    status_override: FreshnessStatus | None = None
    # computed status when the override was set; a change in it ends the override
    override_basis: FreshnessStatus | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "quantity": self.quantity,
            "purchase_date": self.purchase_date.isoformat(),
            "expiry_date": self.expiry_date.isoformat(),
            "custom_shelf_life": self.custom_shelf_life,
            "total_shelf_life_days": self.total_shelf_life_days,
            "days_remaining": self.days_remaining,
            "status": self.status.value,
        }


def _normalize_key(value: str) -> str:
    return " ".join(value.split()).casefold()


@dataclass(frozen=True)
class ShelfLifeTable:
    """Category → item name → days, plus per-category default days.

    Keys are stored case-folded so lookups ignore case and stray whitespace.
    """

    items: Mapping[str, Mapping[str, int]] = field(default_factory=dict)
    category_defaults: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        items = {
            _normalize_key(category): MappingProxyType(
                {_normalize_key(name): int(days) for name, days in names.items()}
            )
            for category, names in self.items.items()
        }
        defaults = {
            _normalize_key(category): int(days)
            for category, days in self.category_defaults.items()
        }
        object.__setattr__(self, "items", MappingProxyType(items))
        object.__setattr__(self, "category_defaults", MappingProxyType(defaults))

    def item_days(self, category: str, name: str) -> int | None:
        names = self.items.get(_normalize_key(category))
        if names is None:
            return None
        return names.get(_normalize_key(name))

    def category_default(self, category: str) -> int | None:
        return self.category_defaults.get(_normalize_key(category))

    def has_category(self, category: str) -> bool:
        key = _normalize_key(category)
        return key in self.category_defaults or key in self.items
