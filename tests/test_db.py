"""Tests for the SQLite schema and PantryDB repository."""

from datetime import date, datetime

import pytest

from freshtrack.db import PantryDB, ensure_schema
from freshtrack.db.schema import _SCHEMA_VERSION
from freshtrack.lifecycle import FreshnessStatus, ItemLifecycleStore, PantryItem


def fixed_clock():
    return datetime(2025, 1, 30)


@pytest.fixture
def db(tmp_path):
    """Create a temporary PantryDB."""
    pantry = PantryDB(db_path=tmp_path / "test.db")
    yield pantry
    pantry.close()


@pytest.fixture
def milk():
    return PantryItem(
        id="milk-1",
        name="Whole Milk",
        category="Dairy",
        quantity=2,
        purchase_date=date(2025, 1, 25),
        expiry_date=date(2025, 2, 1),
        custom_shelf_life=None,
        total_shelf_life_days=7,
        days_remaining=2,
        status=FreshnessStatus.EXPIRING,
    )


class TestSchema:
    def test_creates_tables(self, tmp_path):
        conn = ensure_schema(tmp_path / "test.db")
        tables = {
            row["name"]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        }
        assert {"pantry_items", "schema_version"} <= tables
        conn.close()

    def test_creates_parent_dirs(self, tmp_path):
        db_path = tmp_path / "sub" / "dir" / "test.db"
        conn = ensure_schema(db_path)
        assert db_path.exists()
        conn.close()

    def test_sets_version_once(self, tmp_path):
        db_path = tmp_path / "test.db"
        ensure_schema(db_path).close()
        conn = ensure_schema(db_path)
        rows = conn.execute("SELECT version FROM schema_version").fetchall()
        assert [r["version"] for r in rows] == [_SCHEMA_VERSION]
        conn.close()

    def test_reopen_existing_database_keeps_rows(self, tmp_path, milk):
        db_path = tmp_path / "test.db"
        db = PantryDB(db_path)
        db.save_item(milk)
        db.close()

        for _ in range(2):
            conn = ensure_schema(db_path)
            versions = conn.execute("SELECT version FROM schema_version").fetchall()
            assert [r["version"] for r in versions] == [_SCHEMA_VERSION]
            conn.close()

        db = PantryDB(db_path)
        assert [i.id for i in db.load_items()] == ["milk-1"]
        db.close()


class TestPantryDB:
    def test_save_and_load(self, db, milk):
        db.save_item(milk)
        items = db.load_items()

        assert len(items) == 1
        loaded = items[0]
        assert loaded.id == "milk-1"
        assert loaded.name == "Whole Milk"
        assert loaded.purchase_date == date(2025, 1, 25)
        assert loaded.expiry_date == date(2025, 2, 1)
        assert loaded.total_shelf_life_days == 7
        assert loaded.status is FreshnessStatus.EXPIRING
        assert loaded.expiry_derived is True
        assert loaded.status_override is None

    def test_save_is_upsert(self, db, milk):
        db.save_item(milk)
        milk.quantity = 0
        milk.status = FreshnessStatus.CONSUMED
        milk.status_override = FreshnessStatus.CONSUMED
        db.save_item(milk)

        items = db.load_items()
        assert len(items) == 1
        assert items[0].quantity == 0
        assert items[0].status_override is FreshnessStatus.CONSUMED

    def test_override_round_trip(self, db, milk):
        milk.status = FreshnessStatus.FRESH
        milk.status_override = FreshnessStatus.FRESH
        milk.override_basis = FreshnessStatus.EXPIRING
        db.save_item(milk)

        loaded = db.load_items()[0]
        assert loaded.status_override is FreshnessStatus.FRESH
        assert loaded.override_basis is FreshnessStatus.EXPIRING

    def test_delete(self, db, milk):
        db.save_item(milk)
        db.delete_item("milk-1")
        assert db.load_items() == []

    def test_ordered_by_expiry(self, db, milk):
        bread = PantryItem(
            id="bread-1",
            name="Bread",
            category="Bakery",
            quantity=1,
            purchase_date=date(2025, 1, 28),
            expiry_date=date(2025, 1, 31),
            total_shelf_life_days=5,
            expiry_derived=False,
        )
        db.save_item(milk)
        db.save_item(bread)
        assert [i.id for i in db.load_items()] == ["bread-1", "milk-1"]
        assert db.load_items()[0].expiry_derived is False


class TestStoreWriteThrough:
    def test_store_survives_reopen(self, tmp_path):
        path = tmp_path / "pantry.db"

        db = PantryDB(path)
        store = ItemLifecycleStore(clock=fixed_clock, repository=db)
        milk = store.add_item("Whole Milk", "Dairy", 2, date(2025, 1, 25))
        bread = store.add_item("Bread", "Bakery", 1, date(2025, 1, 29))
        store.update_quantity(milk.id, -1)
        store.remove_item(bread.id)
        db.close()

        db = PantryDB(path)
        reopened = ItemLifecycleStore(clock=fixed_clock, repository=db)
        assert len(reopened) == 1
        item = reopened.get_item(milk.id)
        assert item.quantity == 1
        assert item.expiry_date == date(2025, 2, 1)
        assert item.status is FreshnessStatus.EXPIRING
        db.close()

    def test_reopen_refreshes_status(self, tmp_path):
        path = tmp_path / "pantry.db"
        db = PantryDB(path)
        store = ItemLifecycleStore(clock=fixed_clock, repository=db)
        milk = store.add_item("Whole Milk", "Dairy", 1, date(2025, 1, 25))
        db.close()

        db = PantryDB(path)
        later = ItemLifecycleStore(clock=lambda: datetime(2025, 2, 5), repository=db)
        assert later.get_item(milk.id).status is FreshnessStatus.EXPIRED
        assert db.load_items()[0].status is FreshnessStatus.EXPIRED
        db.close()
