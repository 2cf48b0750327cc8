"""Application state controller.

The whole ledger lives in one immutable ``AppState``. ``StateStore`` is its
single writer: every change builds a new state value and persists only the
fields that changed.
"""

import dataclasses
import uuid
from typing import Any

from moneyjar.database.base import Storage
from moneyjar.database.mappers import STATE_FIELD_KEYS, decode_field, encode_field
from moneyjar.domain.entities import AppState
from moneyjar.domain.errors import ValidationError
from moneyjar.utils.logger import get_logger

logger = get_logger(__name__)


def new_id() -> str:
    """Return a fresh opaque entity id."""
    return uuid.uuid4().hex[:12]


def load_state(storage: Storage) -> AppState:
    """Load state from storage, falling back to defaults per field.

    A missing key or a malformed document yields the default value for that
    field; the other fields still load.
    """
    defaults = AppState()
    values: dict[str, Any] = {}
    for field_name, key in STATE_FIELD_KEYS.items():
        text = storage.get(key)
        if text is None:
            continue
        try:
            values[field_name] = decode_field(field_name, text)
        except ValidationError as e:
            logger.warning("Falling back to default for '%s': %s", key, e)
            values[field_name] = getattr(defaults, field_name)
    return dataclasses.replace(defaults, **values)


class StateStore:
    """Owns the current AppState and persists changes to storage."""

    def __init__(self, storage: Storage):
        """Initialize the store and load persisted state.

        Args:
            storage: Storage instance
        """
        self.storage = storage
        self._state = load_state(storage)

    @property
    def state(self) -> AppState:
        return self._state

    def commit(self, **changes: Any) -> AppState:
        """Replace state fields and persist them.

        Args:
            **changes: AppState field names mapped to their new values

        Returns:
            The new state
        """
        unknown = set(changes) - set(STATE_FIELD_KEYS)
        if unknown:
            raise ValueError(f"Unknown state fields: {', '.join(sorted(unknown))}")

        new_state = dataclasses.replace(self._state, **changes)
        self.storage.set_many(
            {
                STATE_FIELD_KEYS[name]: encode_field(name, getattr(new_state, name))
                for name in changes
            }
        )
        self._state = new_state
        return new_state

    def reload(self) -> AppState:
        """Re-read state from storage."""
        self._state = load_state(self.storage)
        return self._state

    def reset(self) -> AppState:
        """Erase all persisted data and return to the default dataset."""
        self.storage.clear()
        self._state = AppState()
        logger.info("State reset to defaults")
        return self._state
