"""First-boot seeding and the one-time legacy dates migration."""

import logging
from dataclasses import dataclass

from venue.domain.normalizers import normalize_event, normalize_promotion
from venue.services.inventory_service import InventoryService
from venue.services.legacy_sync import LegacyViewSynchronizer
from venue.services.seeds import DEFAULT_EVENTS, DEFAULT_MEDIA_RECORD, DEFAULT_PROMOS
from venue.stores.local_store import LocalStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BootstrapReport:
    """What a bootstrap run changed."""

    seeded: tuple[str, ...]
    migrated_dates: int


class Bootstrapper:
    """Populates empty collections and migrates embedded dates exactly once."""

    def __init__(
        self,
        store: LocalStore,
        inventory: InventoryService,
        synchronizer: LegacyViewSynchronizer,
    ) -> None:
        self._store = store
        self._inventory = inventory
        self._synchronizer = synchronizer

    def ensure_defaults(self) -> BootstrapReport:
        """Safe to call on every boot."""
        keys = self._store.keys
        seeded = []

        events = self._store.raw(keys.events)
        if not isinstance(events, list) or not events:
            self._store.save_events(normalize_event(e).record for e in DEFAULT_EVENTS)
            seeded.append("events")

        if not isinstance(self._store.raw(keys.media), dict):
            self._store.write_raw(keys.media, dict(DEFAULT_MEDIA_RECORD))
            seeded.append("media")

        if not isinstance(self._store.raw(keys.registrations), list):
            self._store.write_raw(keys.registrations, [])
            seeded.append("registrations")

        if not isinstance(self._store.raw(keys.promotions), list):
            self._store.save_promotions(
                normalize_promotion(p, self._store.clock).record for p in DEFAULT_PROMOS
            )
            seeded.append("promotions")

        migrated = self.migrate_legacy_dates()
        if seeded or migrated:
            logger.info(
                "Bootstrap seeded %s and migrated %d dates",
                ", ".join(seeded) or "nothing",
                migrated,
            )
        return BootstrapReport(seeded=tuple(seeded), migrated_dates=migrated)

    def migrate_legacy_dates(self) -> int:
        """Create EventDate rows from embedded dates while the collection is empty.

        Rows are written before the synchronizer runs; running it first
        would erase the embedded dates being migrated. Once any row exists
        this is a plain resynchronization.
        """
        existing = self._store.raw(self._store.keys.event_dates)
        if isinstance(existing, list) and existing:
            self._synchronizer.sync()
            return 0

        events = self._store.events()
        if not any(e.dates for e in events):
            return 0
        return len(self._inventory.migrate_legacy(events))
