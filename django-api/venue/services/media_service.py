"""Media config service - the singleton site settings record."""

import logging
from collections.abc import Mapping
from typing import Any

from venue.domain.models import MediaConfig
from venue.domain.normalizers import normalize_media
from venue.stores.local_store import LocalStore

logger = logging.getLogger(__name__)


class MediaService:
    """Reads and writes the media config, always merged over the defaults."""

    def __init__(self, store: LocalStore) -> None:
        self._store = store

    def get(self) -> MediaConfig:
        return self._store.media()

    def set(self, raw: Mapping[str, Any] | None) -> MediaConfig:
        """Fields left out or blank keep their default value."""
        media = normalize_media(raw).record
        self._store.save_media(media)
        logger.info("Media config updated")
        return media
