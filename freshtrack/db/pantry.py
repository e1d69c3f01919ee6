"""SQLite repository for pantry items."""

from __future__ import annotations

import sqlite3
from datetime import date
from pathlib import Path

from ..lifecycle.models import FreshnessStatus, PantryItem
from .schema import ensure_schema


class PantryDB:
    """Manages the pantry_items table.

    Implements the repository interface the lifecycle store writes through.
    """

    def __init__(self, db_path: str | Path = "~/.config/freshtrack/pantry.db") -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def save_item(self, item: PantryItem) -> None:
        """Insert or update an item."""
        conn = self._get_conn()
        conn.execute(
            """INSERT INTO pantry_items
               (id, name, category, quantity, purchase_date, expiry_date,
                custom_shelf_life, total_shelf_life_days, expiry_derived,
                status, status_override, override_basis)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
               ON CONFLICT(id) DO UPDATE SET
                   name = excluded.name,
                   category = excluded.category,
                   quantity = excluded.quantity,
                   purchase_date = excluded.purchase_date,
                   expiry_date = excluded.expiry_date,
                   custom_shelf_life = excluded.custom_shelf_life,
                   total_shelf_life_days = excluded.total_shelf_life_days,
                   expiry_derived = excluded.expiry_derived,
                   status = excluded.status,
                   status_override = excluded.status_override,
                   override_basis = excluded.override_basis,
                   updated_at = datetime('now', 'localtime')""",
            (
                item.id,
                item.name,
                item.category,
                item.quantity,
                item.purchase_date.isoformat(),
                item.expiry_date.isoformat(),
                item.custom_shelf_life,
                item.total_shelf_life_days,
                int(item.expiry_derived),
                item.status.value,
                item.status_override.value if item.status_override else None,
                item.override_basis.value if item.override_basis else None,
            ),
        )
        conn.commit()

    def load_items(self) -> list[PantryItem]:
        """Return every stored item, ordered by expiry date."""
        conn = self._get_conn()
        rows = conn.execute(
            "SELECT * FROM pantry_items ORDER BY expiry_date"
        ).fetchall()
        return [_row_to_item(r) for r in rows]

    def delete_item(self, item_id: str) -> None:
        """Delete a pantry item by ID."""
        conn = self._get_conn()
        conn.execute("DELETE FROM pantry_items WHERE id = ?", (item_id,))
        conn.commit()


def _row_to_item(row: sqlite3.Row) -> PantryItem:
    override = row["status_override"]
    basis = row["override_basis"]
    return PantryItem(
        id=row["id"],
        name=row["name"],
        category=row["category"],
        quantity=row["quantity"],
        purchase_date=date.fromisoformat(row["purchase_date"]),
        expiry_date=date.fromisoformat(row["expiry_date"]),
        custom_shelf_life=row["custom_shelf_life"],
        total_shelf_life_days=row["total_shelf_life_days"],
        status=FreshnessStatus(row["status"]),
        expiry_derived=bool(row["expiry_derived"]),
        status_override=FreshnessStatus(override) if override else None,
        override_basis=FreshnessStatus(basis) if basis else None,
    )
