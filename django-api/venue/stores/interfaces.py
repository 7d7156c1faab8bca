"""Store interfaces (repository pattern).

Stores must be swappable. The data layer only needs a key/value contract:
every collection is serialized as one JSON-compatible value under its key.
Writes replace the whole value, so concurrent writers of the same key follow
last-writer-wins; there is no version check.
"""

from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):
    """Interface for key/value persistence operations."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the decoded value for key, or default when absent or unreadable."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a JSON-compatible value under key, replacing any previous value."""
        ...
