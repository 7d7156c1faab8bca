"""Wiring for the venue data layer.

One DataLayer owns one KeyValueStore and the services built on it. Build it
once per unit of work and pass it to whoever needs it. Building it never
writes; seeding runs from the `bootstrap_store` management command.
"""

from collections.abc import MutableMapping
from typing import Any

from django.conf import settings

from venue.domain.normalizers import Clock
from venue.services.bootstrap import Bootstrapper, BootstrapReport
from venue.services.event_service import EventService
from venue.services.gallery_service import GalleryService
from venue.services.inventory_service import InventoryService
from venue.services.legacy_sync import LegacyViewSynchronizer
from venue.services.media_service import MediaService
from venue.services.promotion_service import PromotionService
from venue.services.registration_service import RegistrationService
from venue.services.session_service import AdminSessionService
from venue.stores.django_store import DjangoKeyValueStore
from venue.stores.interfaces import KeyValueStore
from venue.stores.local_store import LocalStore, StorageKeys


class DataLayer:
    """Every venue service, sharing one store."""

    def __init__(
        self,
        backend: KeyValueStore,
        key_prefix: str = "ecn_",
        clock: Clock | None = None,
    ) -> None:
        self.store = LocalStore(backend, StorageKeys.with_prefix(key_prefix), clock)
        self.synchronizer = LegacyViewSynchronizer(self.store)
        self.inventory = InventoryService(self.store, self.synchronizer)
        self.events = EventService(self.store, self.inventory, self.synchronizer)
        self.promotions = PromotionService(self.store)
        self.registrations = RegistrationService(self.store, self.events, self.inventory)
        self.media = MediaService(self.store)
        self.gallery = GalleryService(self.store)
        self._bootstrapper = Bootstrapper(self.store, self.inventory, self.synchronizer)

    def session_for(self, session: MutableMapping[str, Any]) -> AdminSessionService:
        """Admin flag service over one client's session mapping."""
        return AdminSessionService(session, self.store.keys.admin_session, self.store.clock)

    def bootstrap(self) -> BootstrapReport:
        return self._bootstrapper.ensure_defaults()


def build_data_layer() -> DataLayer:
    """ORM-backed DataLayer configured from settings.VENUE."""
    return DataLayer(DjangoKeyValueStore(), key_prefix=settings.VENUE["KEY_PREFIX"])
