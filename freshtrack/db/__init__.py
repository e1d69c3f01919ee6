"""SQLite storage for pantry items."""

from .pantry import PantryDB
from .schema import ensure_schema

__all__ = [
    "PantryDB",
    "ensure_schema",
]
