"""CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from pathlib import Path

from .config import FreshtrackConfig, load_config
from .db import PantryDB
from .lifecycle import (
    DEFAULT_SHELF_LIFE_TABLE,
    FreshnessStatus,
    ItemLifecycleStore,
    PantryItem,
    ShelfLifeResolver,
    load_shelf_life_table,
)
from .ocr import create_backend
from .receipts import ReceiptIngestionPipeline, parse_receipt_text
from .shopping import ShoppingList

_STATUS_MARKS = {
    FreshnessStatus.FRESH: "🟢",
    FreshnessStatus.EXPIRING: "🟡",
    FreshnessStatus.EXPIRED: "🔴",
    FreshnessStatus.CONSUMED: "⚪",
}


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="freshtrack",
        description="Pantry freshness tracking and receipt ingestion",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to the config file (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # parse
    parse_parser = sub.add_parser("parse", help="Parse OCR text from a file")
    parse_parser.add_argument("file", type=str, help="Text file ('-' for stdin)")
    parse_parser.add_argument(
        "--today", type=date.fromisoformat, default=None,
        help="Date to use when the receipt date is unreadable (YYYY-MM-DD)",
    )
    parse_parser.add_argument("--json", action="store_true", help="Output JSON")

    # ingest
    ingest_parser = sub.add_parser("ingest", help="OCR a receipt image and parse it")
    ingest_parser.add_argument("image", type=str, help="Receipt image file")
    ingest_parser.add_argument(
        "--add", action="store_true", help="Add the parsed items to the pantry"
    )
    ingest_parser.add_argument("--json", action="store_true", help="Output JSON")

    # shelf-life
    shelf_parser = sub.add_parser("shelf-life", help="Look up an item's shelf life")
    shelf_parser.add_argument("name", type=str)
    shelf_parser.add_argument("category", type=str)
    shelf_parser.add_argument("--override", type=int, default=None)

    # add
    add_parser = sub.add_parser("add", help="Add an item to the pantry")
    add_parser.add_argument("name", type=str)
    add_parser.add_argument("category", type=str)
    add_parser.add_argument("--quantity", "-q", type=int, default=1)
    add_parser.add_argument(
        "--purchased", type=date.fromisoformat, default=None,
        help="Purchase date (YYYY-MM-DD, default today)",
    )
    add_parser.add_argument(
        "--expires", type=date.fromisoformat, default=None,
        help="Expiry date (YYYY-MM-DD, default from shelf life)",
    )
    add_parser.add_argument(
        "--shelf-life", type=int, default=None, dest="shelf_life",
        help="Shelf life override in days",
    )

    # list
    list_parser = sub.add_parser("list", help="List pantry items")
    list_parser.add_argument(
        "--expiring", action="store_true", help="Only items about to expire"
    )
    list_parser.add_argument("--category", type=str, default=None)
    list_parser.add_argument(
        "--status", type=str, default=None,
        choices=[s.value for s in FreshnessStatus],
    )
    list_parser.add_argument("--json", action="store_true", help="Output JSON")

    # consume / remove
    consume_parser = sub.add_parser("consume", help="Mark an item as consumed")
    consume_parser.add_argument("item_id", type=str)
    remove_parser = sub.add_parser("remove", help="Delete an item")
    remove_parser.add_argument("item_id", type=str)

    # watch
    sub.add_parser("watch", help="Keep item statuses refreshed in the background")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.verbose)
    config = load_config(args.config)

    match args.command:
        case "parse":
            _cmd_parse(args)
        case "ingest":
            asyncio.run(_cmd_ingest(config, args))
        case "shelf-life":
            _cmd_shelf_life(config, args)
        case "add":
            _cmd_add(config, args)
        case "list":
            _cmd_list(config, args)
        case "consume":
            _cmd_consume(config, args)
        case "remove":
            _cmd_remove(config, args)
        case "watch":
            asyncio.run(_cmd_watch(config))


def configure_logging(verbose: bool = False) -> None:
    """Configure package logging with a single stream handler."""
    logger = logging.getLogger("freshtrack")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def build_resolver(config: FreshtrackConfig) -> ShelfLifeResolver:
    table = DEFAULT_SHELF_LIFE_TABLE
    if config.shelf_life.table_path:
        table = load_shelf_life_table(config.shelf_life.table_path)
    return ShelfLifeResolver(table, global_default=config.shelf_life.global_default)


def build_store(
    config: FreshtrackConfig, db: PantryDB, cart: ShoppingList | None = None
) -> ItemLifecycleStore:
    return ItemLifecycleStore(build_resolver(config), cart=cart, repository=db)


def _print_item(item: PantryItem) -> None:
    mark = _STATUS_MARKS[item.status]
    print(
        f"  {mark} {item.name:<24} x{item.quantity:<3} "
        f"[{item.category}] expires {item.expiry_date} "
        f"({item.days_remaining:+d}d, {item.status.value})  id={item.id}"
    )


def _cmd_parse(args) -> None:
    if args.file == "-":
        text = sys.stdin.read()
    else:
        text = Path(args.file).read_text(encoding="utf-8")

    receipt = parse_receipt_text(text, args.today or date.today())

    if args.json:
        print(json.dumps(receipt.to_dict(), ensure_ascii=False, indent=2))
        return
    print(f"🧾 {receipt.store_name}  {receipt.date}  total {receipt.total}")
    for item in receipt.items:
        print(f"  {item.name:<30} x{item.quantity:<3} {item.price}")


async def _cmd_ingest(config: FreshtrackConfig, args) -> None:
    image = Path(args.image).read_bytes()
    pipeline = ReceiptIngestionPipeline(
        create_backend(config), timeout=config.ocr.timeout
    )
    print("🔍 Reading receipt...", file=sys.stderr)
    result = await pipeline.ingest(image)

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        receipt = result.data
        if result.note:
            print(f"⚠  {result.note}")
        if receipt is not None:
            print(f"🧾 {receipt.store_name}  {receipt.date}  total {receipt.total}")
            for item in receipt.items:
                print(f"  {item.name:<30} x{item.quantity:<3} {item.price}")

    if args.add and result.data is not None:
        db = PantryDB(config.database.path)
        try:
            store = build_store(config, db)
            added = store.add_from_receipt(result.data)
            print(f"📦 Added {len(added)} item(s) to the pantry")
        finally:
            db.close()


def _cmd_shelf_life(config: FreshtrackConfig, args) -> None:
    days = build_resolver(config).resolve(args.name, args.category, args.override)
    print(f"{args.name} [{args.category}]: {days} days")


def _cmd_add(config: FreshtrackConfig, args) -> None:
    db = PantryDB(config.database.path)
    try:
        store = build_store(config, db)
        item = store.add_item(
            name=args.name,
            category=args.category,
            quantity=args.quantity,
            purchase_date=args.purchased or date.today(),
            expiry_date=args.expires,
            custom_shelf_life=args.shelf_life,
        )
    finally:
        db.close()
    _print_item(item)


def _cmd_list(config: FreshtrackConfig, args) -> None:
    db = PantryDB(config.database.path)
    try:
        store = build_store(config, db)
        if args.expiring:
            items = store.expiring_items()
        else:
            items = store.list_items(category=args.category, status=args.status)
    finally:
        db.close()

    if args.json:
        print(json.dumps([i.to_dict() for i in items], ensure_ascii=False, indent=2))
        return
    if not items:
        print("No items.")
        return
    print(f"Pantry items ({len(items)}):")
    for item in items:
        _print_item(item)


def _cmd_consume(config: FreshtrackConfig, args) -> None:
    cart = ShoppingList()
    db = PantryDB(config.database.path)
    try:
        store = build_store(config, db, cart=cart)
        item = store.set_status(args.item_id, FreshnessStatus.CONSUMED)
    finally:
        db.close()

    if item is None:
        print(f"Item not found: {args.item_id}", file=sys.stderr)
        sys.exit(1)
    _print_item(item)
    for entry in cart.pending():
        print(f"  🛒 {entry.name} added to the shopping list")


def _cmd_remove(config: FreshtrackConfig, args) -> None:
    db = PantryDB(config.database.path)
    try:
        store = build_store(config, db)
        item = store.remove_item(args.item_id)
    finally:
        db.close()

    if item is None:
        print(f"Item not found: {args.item_id}", file=sys.stderr)
        sys.exit(1)
    print(f"Removed {item.name}")


async def _cmd_watch(config: FreshtrackConfig) -> None:
    from .scheduler import RecomputeScheduler

    db = PantryDB(config.database.path)
    scheduler = None
    try:
        store = build_store(config, db)
        scheduler = RecomputeScheduler(
            store, interval_seconds=config.scheduler.interval_seconds
        )
        scheduler.start()
        print(f"👀 Watching {len(store)} item(s); Ctrl+C to stop", file=sys.stderr)
        await asyncio.Event().wait()
    finally:
        if scheduler is not None:
            scheduler.stop()
        db.close()


if __name__ == "__main__":
    main()
