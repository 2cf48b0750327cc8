"""Storage layer for moneyjar application."""

from moneyjar.database.base import Storage
from moneyjar.database.factories import create_sqlite_storage

__all__ = ["Storage", "create_sqlite_storage"]
