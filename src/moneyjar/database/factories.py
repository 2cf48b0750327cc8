"""Storage factory functions."""

import os
from pathlib import Path
from typing import Optional

from moneyjar.database.sqlalchemy_db import SQLAlchemyStorage


def create_sqlite_storage(database_path: Optional[str] = None) -> SQLAlchemyStorage:
    """Create a SQLite-backed storage instance.

    Args:
        database_path: Path to SQLite database file. If None, checks MONEYJAR_DB_PATH
            environment variable, then defaults to ~/.moneyjar/moneyjar.db

    Returns:
        SQLAlchemyStorage instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("MONEYJAR_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".moneyjar"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "moneyjar.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyStorage(database_url)
