"""Authoritative in-process collection of pantry items."""

from __future__ import annotations

import logging
import uuid
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any, Protocol

from .models import FreshnessStatus, PantryItem
from .shelf_life import ShelfLifeResolver
from .status import (
    Clock,
    StatusEvaluation,
    evaluate,
    expiring_threshold,
    system_clock,
)

if TYPE_CHECKING:
    from ..receipts.models import ParsedReceipt

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = frozenset(
    {"name", "category", "quantity", "purchase_date", "expiry_date", "custom_shelf_life"}
)


class CartPort(Protocol):
    """Receives items that were used up so they can be bought again."""

    def add_to_cart(self, item: PantryItem) -> Any: ...


class ItemRepository(Protocol):
    def load_items(self) -> list[PantryItem]: ...

    def save_item(self, item: PantryItem) -> None: ...

    def delete_item(self, item_id: str) -> None: ...


class ItemLifecycleStore:
    """Holds pantry items and keeps their freshness state current.

    Every mutating operation re-evaluates the touched item before returning.
    ``refresh()`` re-evaluates everything and is what the background
    scheduler calls as time passes.

    Operations are not synchronized; the store assumes a single writer.
    """

    def __init__(
        self,
        resolver: ShelfLifeResolver | None = None,
        *,
        clock: Clock = system_clock,
        cart: CartPort | None = None,
        repository: ItemRepository | None = None,
    ) -> None:
        self._resolver = resolver or ShelfLifeResolver()
        self._clock = clock
        self._cart = cart
        self._repository = repository
        self._items: dict[str, PantryItem] = {}

        if repository is not None:
            for item in repository.load_items():
                self._items[item.id] = item
            self.refresh()

    # -- mutations ---------------------------------------------------------

    def add_item(
        self,
        name: str,
        category: str,
        quantity: int,
        purchase_date: date,
        expiry_date: date | None = None,
        custom_shelf_life: int | None = None,
    ) -> PantryItem:
        """Add an item, deriving its expiry date from the shelf life if omitted."""
        shelf_life = self._resolver.resolve(name, category, custom_shelf_life)
        derived = expiry_date is None
        item = PantryItem(
            id=uuid.uuid4().hex,
            name=name,
            category=category,
            quantity=max(0, int(quantity)),
            purchase_date=purchase_date,
            expiry_date=(
                purchase_date + timedelta(days=shelf_life) if derived else expiry_date
            ),
            custom_shelf_life=custom_shelf_life,
            total_shelf_life_days=shelf_life,
            expiry_derived=derived,
        )
        self._items[item.id] = item
        self._recompute(item)
        self._persist(item)
        logger.debug("Added %s (%s), expires %s", item.name, item.id, item.expiry_date)
        return item

    def update_item(self, item_id: str, **changes: Any) -> PantryItem | None:
        """Apply field edits and re-derive everything that depends on them.

        Raises:
            TypeError: If a change names a field that cannot be edited.
        """
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise TypeError(f"Cannot edit pantry item fields: {sorted(unknown)}")

        item = self._lookup(item_id)
        if item is None:
            return None

        shelf_life_changed = False
        for key in ("name", "category", "custom_shelf_life"):
            if key in changes and changes[key] != getattr(item, key):
                setattr(item, key, changes[key])
                shelf_life_changed = True
        if shelf_life_changed:
            new_shelf_life = self._resolver.resolve(
                item.name, item.category, item.custom_shelf_life
            )
            shelf_life_changed = new_shelf_life != item.total_shelf_life_days
            item.total_shelf_life_days = new_shelf_life

        purchase_changed = (
            "purchase_date" in changes and changes["purchase_date"] != item.purchase_date
        )
        if purchase_changed:
            item.purchase_date = changes["purchase_date"]

        if changes.get("expiry_date") is not None:
            item.expiry_date = changes["expiry_date"]
            item.expiry_derived = False
        elif item.expiry_derived and (purchase_changed or shelf_life_changed):
            item.expiry_date = item.purchase_date + timedelta(
                days=item.total_shelf_life_days
            )

        if "quantity" in changes:
            item.quantity = max(0, int(changes["quantity"]))

        _clear_override(item)
        self._recompute(item)
        self._persist(item)
        return item

    def update_quantity(self, item_id: str, delta: int) -> PantryItem | None:
        """Adjust quantity by ``delta``, never going below zero."""
        item = self._lookup(item_id)
        if item is None:
            return None
        item.quantity = max(0, item.quantity + int(delta))
        _clear_override(item)
        self._recompute(item)
        self._persist(item)
        return item

    def set_status(
        self, item_id: str, status: FreshnessStatus | str
    ) -> PantryItem | None:
        """Manually override an item's status.

        Marking an item consumed empties it and sends it to the cart.
        """
        item = self._lookup(item_id)
        if item is None:
            return None
        status = FreshnessStatus(status)
        if status is FreshnessStatus.CONSUMED:
            item.quantity = 0
        item.status_override = status
        item.override_basis = self._evaluate(item).status
        self._recompute(item)
        self._persist(item)

        if status is FreshnessStatus.CONSUMED:
            self._notify_cart(item)
        return item

    def remove_item(self, item_id: str) -> PantryItem | None:
        item = self._items.pop(item_id, None)
        if item is None:
            logger.warning("Pantry item not found: %s", item_id)
            return None
        if self._repository is not None:
            self._repository.delete_item(item_id)
        return item

    def add_from_receipt(self, receipt: ParsedReceipt) -> list[PantryItem]:
        """Import the parsed line items of a receipt.

        Placeholder lines are skipped. The receipt date becomes the purchase
        date and each line's expiration window becomes its shelf life.
        """
        added: list[PantryItem] = []
        for line in receipt.items:
            if line.is_placeholder:
                continue
            added.append(
                self.add_item(
                    name=line.name,
                    category=line.category,
                    quantity=line.quantity,
                    purchase_date=receipt.date,
                    custom_shelf_life=line.expiration_days,
                )
            )
        logger.info("Imported %d items from %s", len(added), receipt.store_name)
        return added

    def refresh(self) -> int:
        """Re-evaluate every item against the current time.

        Returns:
            Number of items whose status changed.
        """
        changed = 0
        for item in self._items.values():
            before = item.status
            before_override = item.status_override
            self._recompute(item)
            if item.status is not before:
                changed += 1
            if item.status is not before or item.status_override is not before_override:
                self._persist(item)
        if changed:
            logger.info("Freshness refresh: %d item(s) changed status", changed)
        return changed

    # -- queries -----------------------------------------------------------

    def get_item(self, item_id: str) -> PantryItem | None:
        return self._items.get(item_id)

    def list_items(
        self,
        *,
        category: str | None = None,
        status: FreshnessStatus | str | None = None,
        search: str | None = None,
    ) -> list[PantryItem]:
        """Return items, optionally filtered, ordered by expiry date."""
        items = list(self._items.values())
        if category is not None:
            wanted = category.casefold()
            items = [i for i in items if i.category.casefold() == wanted]
        if status is not None:
            wanted_status = FreshnessStatus(status)
            items = [i for i in items if i.status is wanted_status]
        if search:
            needle = search.casefold()
            items = [i for i in items if needle in i.name.casefold()]
        return sorted(items, key=lambda i: i.expiry_date)

    def expiring_items(self) -> list[PantryItem]:
        """Items still in stock whose days remaining fall inside the expiring window."""
        return [
            item
            for item in self.list_items()
            if item.status is not FreshnessStatus.CONSUMED
            and 0 <= item.days_remaining <= expiring_threshold(item.total_shelf_life_days)
        ]

    def summary(self) -> dict[str, dict[str, int]]:
        """Item count and total quantity per status."""
        result = {s.value: {"items": 0, "quantity": 0} for s in FreshnessStatus}
        for item in self._items.values():
            bucket = result[item.status.value]
            bucket["items"] += 1
            bucket["quantity"] += item.quantity
        return result

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items.values()))

    # -- internals ---------------------------------------------------------

    def _lookup(self, item_id: str) -> PantryItem | None:
        item = self._items.get(item_id)
        if item is None:
            logger.warning("Pantry item not found: %s", item_id)
        return item

    def _evaluate(self, item: PantryItem) -> StatusEvaluation:
        return evaluate(
            item.quantity, item.expiry_date, item.total_shelf_life_days, self._clock()
        )

    def _recompute(self, item: PantryItem) -> None:
        result = self._evaluate(item)
        item.days_remaining = result.days_remaining
        if (
            item.status_override is not None
            and result.status is not item.override_basis
        ):
            logger.debug(
                "Dropping manual %s status of %s, now %s",
                item.status_override.value,
                item.name,
                result.status.value,
            )
            _clear_override(item)
        if item.status_override is not None and item.quantity > 0:
            item.status = item.status_override
        else:
            item.status = result.status

    def _persist(self, item: PantryItem) -> None:
        if self._repository is not None:
            self._repository.save_item(item)

    def _notify_cart(self, item: PantryItem) -> None:
        if self._cart is None:
            return
        try:
            self._cart.add_to_cart(item)
        except Exception:
            logger.exception("Failed to add %s to the shopping list", item.name)


def _clear_override(item: PantryItem) -> None:
    item.status_override = None
    item.override_basis = None
