"""Event service - catalog operations over the local store.

Services:
- Depend only on the local store and sibling services
- Keep the legacy `dates` view consistent after every write
- Return domain models, or None/False when nothing matched
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from venue.domain.models import Event, EventView
from venue.domain.normalizers import as_text, normalize_event
from venue.services.inventory_service import InventoryService
from venue.services.legacy_sync import LegacyViewSynchronizer
from venue.stores.local_store import LocalStore

logger = logging.getLogger(__name__)

MONTHS_ES = (
    "ENERO",
    "FEBRERO",
    "MARZO",
    "ABRIL",
    "MAYO",
    "JUNIO",
    "JULIO",
    "AGOSTO",
    "SEPTIEMBRE",
    "OCTUBRE",
    "NOVIEMBRE",
    "DICIEMBRE",
)


def months_window(from_date: date) -> list[str]:
    """Return the month key of from_date and the two months after it."""
    first = from_date.month - 1
    return [MONTHS_ES[(first + offset) % 12] for offset in range(3)]


def flatten_event(event: Event) -> EventView:
    labels = tuple(d.label.strip() for d in event.dates if d.label.strip())
    return EventView(event=event, labels=labels, seats=event.total_seats)


class EventService:
    """Service for event catalog operations."""

    def __init__(
        self,
        store: LocalStore,
        inventory: InventoryService,
        synchronizer: LegacyViewSynchronizer,
    ) -> None:
        self._store = store
        self._inventory = inventory
        self._synchronizer = synchronizer

    def _resync_if_dates_exist(self) -> None:
        if self._inventory.all():
            self._synchronizer.sync()

    def list_raw(self) -> list[Event]:
        """Return all events in storage order."""
        return self._store.events()

    def get(self, event_id: str) -> Event | None:
        wanted = as_text(event_id)
        return next((e for e in self.list_raw() if e.id == wanted), None)

    def list_views(self) -> list[EventView]:
        return [flatten_event(e) for e in self.list_raw()]

    def find_view(self, event_id: str) -> EventView | None:
        event = self.get(event_id)
        return flatten_event(event) if event else None

    def replace_all(self, raws: Iterable[Mapping[str, Any] | Event]) -> list[Event]:
        """Bulk set the catalog."""
        clean = [
            raw if isinstance(raw, Event) else normalize_event(raw).record
            for raw in raws
        ]
        self._store.save_events(clean)
        self._resync_if_dates_exist()
        return clean

    def upsert(self, raw: Mapping[str, Any] | None) -> Event:
        """Create or edit an event by id (slug of the title when absent).

        Legacy `dates` sent with the event become EventDate rows, but only
        when the event has no rows yet.
        """
        event = normalize_event(raw).record
        events = self.list_raw()
        index = next((i for i, e in enumerate(events) if e.id == event.id), None)
        if index is None:
            events.insert(0, event)
            logger.info("Created event %s", event.id)
        else:
            events[index] = event
            logger.info("Updated event %s", event.id)
        self._store.save_events(events)

        if not self._inventory.list_by_event(event.id) and event.dates:
            self._inventory.migrate_legacy([event])
        else:
            self._resync_if_dates_exist()

        return self.get(event.id) or event

    def delete(self, event_id: str) -> bool:
        """Remove an event and cascade-delete its EventDate rows."""
        wanted = as_text(event_id)
        events = self.list_raw()
        remaining = [e for e in events if e.id != wanted]
        self.replace_all(remaining)
        self._inventory.delete_by_event(wanted)
        removed = len(remaining) != len(events)
        if removed:
            logger.info("Deleted event %s", wanted)
        return removed

    @staticmethod
    def total_seats(event: Event) -> int:
        return event.total_seats
