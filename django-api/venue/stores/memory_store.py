"""In-process implementation of the KeyValueStore.

Values are held as JSON text, the same way browser storage holds them, so
unreadable entries behave exactly like they do in the ORM-backed store.
"""

import json
import logging
from typing import Any

from venue.stores.interfaces import KeyValueStore

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store for tests and scripts."""

    def __init__(self, raw: dict[str, str] | None = None) -> None:
        self._raw: dict[str, str] = dict(raw or {})

    def get(self, key: str, default: Any = None) -> Any:
        payload = self._raw.get(key)
        if not payload:
            return default
        try:
            return json.loads(payload)
        except ValueError:
            logger.warning("Ignoring unreadable value for key %s", key)
            return default

    def set(self, key: str, value: Any) -> None:
        self._raw[key] = json.dumps(value)

    def raw(self, key: str) -> str | None:
        """Return the stored JSON text for key."""
        return self._raw.get(key)

    def put_raw(self, key: str, payload: str) -> None:
        """Store text verbatim, bypassing encoding."""
        self._raw[key] = payload
