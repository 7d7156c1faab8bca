"""Legacy view synchronization.

Older readers of the site look at `event.dates` (label + available seats).
Once EventDate rows exist they are the only authority, so the embedded array
is always rebuilt from them rather than edited in place.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import replace

from venue.domain.models import Event, EventDate, LegacyDate
from venue.stores.local_store import LocalStore

logger = logging.getLogger(__name__)


def derive_legacy_dates(
    events: Iterable[Event], dates: Iterable[EventDate]
) -> list[Event]:
    """Return events with `dates` recomputed from their EventDate rows.

    Rows are ordered by created_at ascending (stable for equal timestamps).
    An event without rows gets an empty `dates` tuple.
    """
    by_event: dict[str, list[EventDate]] = defaultdict(list)
    for row in dates:
        by_event[row.event_id].append(row)

    result = []
    for event in events:
        rows = sorted(by_event.get(event.id, []), key=lambda r: r.created_at)
        legacy = tuple(
            LegacyDate(label=r.label.strip(), seats=max(0, r.seats_available))
            for r in rows
        )
        result.append(replace(event, dates=legacy))
    return result


class LegacyViewSynchronizer:
    """Persists the derived `dates` view for every event."""

    def __init__(self, store: LocalStore) -> None:
        self._store = store

    def sync(self) -> list[Event]:
        events = self._store.events()
        if not events:
            return []
        synced = derive_legacy_dates(events, self._store.event_dates())
        self._store.save_events(synced)
        logger.debug("Synchronized legacy dates for %d events", len(synced))
        return synced
