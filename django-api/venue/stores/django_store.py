"""Django ORM implementation of the KeyValueStore."""

import json
import logging
from typing import Any

from venue.models import StoredValue
from venue.stores.interfaces import KeyValueStore

logger = logging.getLogger(__name__)


class DjangoKeyValueStore(KeyValueStore):
    """Database-backed store using one StoredValue row per key."""

    def get(self, key: str, default: Any = None) -> Any:
        payload = (
            StoredValue.objects.filter(key=key).values_list("payload", flat=True).first()
        )
        if not payload:
            return default
        try:
            return json.loads(payload)
        except ValueError:
            logger.warning("Ignoring unreadable value for key %s", key)
            return default

    def set(self, key: str, value: Any) -> None:
        StoredValue.objects.update_or_create(
            key=key, defaults={"payload": json.dumps(value)}
        )
