"""Generic SQLAlchemy storage implementation."""

from typing import Mapping, Optional
from sqlalchemy.orm import Session

from moneyjar.database.base import Storage
from moneyjar.database.models import StoredValue, create_session_factory


class SQLAlchemyStorage(Storage):
    """SQLAlchemy-based implementation of the Storage interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy storage.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def get(self, key: str) -> Optional[str]:
        session = self._get_session()
        row = session.get(StoredValue, key)
        if row is None:
            return None
        return row.value

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, values: Mapping[str, str]) -> None:
        session = self._get_session()
        try:
            for key, value in values.items():
                row = session.get(StoredValue, key)
                if row is None:
                    session.add(StoredValue(key=key, value=value))
                else:
                    row.value = value
            session.commit()
        except Exception:
            session.rollback()
            raise

    def remove(self, key: str) -> None:
        session = self._get_session()
        row = session.get(StoredValue, key)
        if row is not None:
            session.delete(row)
            session.commit()

    def clear(self) -> None:
        session = self._get_session()
        session.query(StoredValue).delete()
        session.commit()

    def keys(self) -> list[str]:
        session = self._get_session()
        return [row.key for row in session.query(StoredValue).order_by(StoredValue.key).all()]
