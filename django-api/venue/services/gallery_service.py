"""Gallery service - admin-uploaded photos shown on the public site."""

import logging
from collections.abc import Mapping
from typing import Any

from venue.domain.models import GalleryItem
from venue.domain.normalizers import as_text, normalize_gallery_item
from venue.stores.local_store import LocalStore

logger = logging.getLogger(__name__)


class GalleryService:
    """Service for gallery items."""

    def __init__(self, store: LocalStore) -> None:
        self._store = store

    def list_all(self) -> list[GalleryItem]:
        """Newest first by created_at; equal timestamps keep storage order."""
        return sorted(self._store.gallery(), key=lambda i: i.created_at, reverse=True)

    def get(self, item_id: str) -> GalleryItem | None:
        wanted = as_text(item_id)
        return next((i for i in self._store.gallery() if i.id == wanted), None)

    def add(self, raw: Mapping[str, Any] | None) -> GalleryItem:
        item = normalize_gallery_item(raw, self._store.clock).record
        self._store.save_gallery([item, *self._store.gallery()])
        logger.info("Gallery item %s added (%s)", item.id, item.kind.value)
        return item

    def delete(self, item_id: str) -> bool:
        wanted = as_text(item_id)
        items = self._store.gallery()
        remaining = [i for i in items if i.id != wanted]
        if len(remaining) == len(items):
            return False
        self._store.save_gallery(remaining)
        logger.info("Gallery item %s deleted", wanted)
        return True
