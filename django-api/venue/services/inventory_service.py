"""Event-dates inventory service - the single authority for seat availability.

Every mutation persists the full EventDate collection first and then runs
the legacy view synchronizer, so a synchronizer read always sees committed
rows. Nothing here raises for missing rows or exhausted seats; callers get
None or False back.

Seat decrements locate the row by exact label, not by id. Two dates whose
labels differ only by whitespace or case are distinct, and renaming a label
changes which row a stored label refers to.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from venue.domain.models import Event, EventDate, LegacyDate
from venue.domain.normalizers import as_text, normalize_event_date
from venue.domain.value_objects import Capacity
from venue.services.legacy_sync import LegacyViewSynchronizer
from venue.stores.local_store import LocalStore

logger = logging.getLogger(__name__)


def _collapse_spaces(value: Any) -> str:
    return " ".join(as_text(value).split())


def _as_mapping(row: Mapping[str, Any] | EventDate | None) -> Mapping[str, Any] | None:
    if isinstance(row, EventDate):
        return row.to_record()
    return row


class InventoryService:
    """Service for EventDate rows and their seat counts."""

    def __init__(self, store: LocalStore, synchronizer: LegacyViewSynchronizer) -> None:
        self._store = store
        self._synchronizer = synchronizer

    def _commit(self, rows: list[EventDate]) -> None:
        self._store.save_event_dates(rows)
        self._synchronizer.sync()

    def all(self) -> list[EventDate]:
        """Return every stored row in storage order (newest first)."""
        return self._store.event_dates()

    def get(self, date_id: str) -> EventDate | None:
        wanted = as_text(date_id)
        return next((r for r in self.all() if r.id == wanted), None)

    def list_by_event(self, event_id: str) -> list[EventDate]:
        """Return the event's rows ordered by created_at ascending."""
        wanted = as_text(event_id)
        rows = [r for r in self.all() if r.event_id == wanted]
        return sorted(rows, key=lambda r: r.created_at)

    def replace_all(
        self, rows: Iterable[Mapping[str, Any] | EventDate]
    ) -> list[EventDate]:
        """Bulk set. Rows without an event_id are dropped."""
        clean = [
            normalize_event_date(_as_mapping(row), self._store.clock).record
            for row in rows
        ]
        clean = [r for r in clean if r.event_id]
        self._commit(clean)
        return clean

    def upsert(self, row: Mapping[str, Any] | EventDate | None) -> EventDate | None:
        """Insert or replace a row by id; the original created_at is kept."""
        candidate = normalize_event_date(_as_mapping(row), self._store.clock).record
        if not candidate.event_id:
            logger.warning("Rejected event date without event_id")
            return None

        rows = self.all()
        for index, existing in enumerate(rows):
            if existing.id == candidate.id:
                candidate = replace(candidate, created_at=existing.created_at)
                rows[index] = candidate
                break
        else:
            rows.insert(0, candidate)

        self._commit(rows)
        return candidate

    def migrate_legacy(self, events: Iterable[Event]) -> list[EventDate]:
        """Turn each event's embedded `dates` into rows, in one write and one sync.

        Rows keep the legacy order and start with every seat available.
        """
        created = []
        for event in events:
            for legacy in event.dates:
                created.append(
                    normalize_event_date(
                        {
                            "event_id": event.id,
                            "label": legacy.label,
                            "seats_total": legacy.seats,
                            "seats_available": legacy.seats,
                        },
                        self._store.clock,
                    ).record
                )
        self._commit(self.all() + created)
        logger.info("Migrated %d legacy dates into event dates", len(created))
        return created

    def create(self, event_id: str, label: Any, seats_total: Any) -> EventDate | None:
        """Add a date; a new date starts with every seat available."""
        total = Capacity.clamp(seats_total).value
        return self.upsert(
            {
                "event_id": event_id,
                "label": _collapse_spaces(label),
                "seats_total": total,
                "seats_available": total,
            }
        )

    def update(
        self,
        date_id: str,
        *,
        label: Any = None,
        seats_total: Any = None,
        seats_available: Any = None,
    ) -> EventDate | None:
        """Apply an admin edit.

        When seats_total changes, seats_available is kept within the new
        total (defaulting to the current availability). An availability-only
        edit is bounded by MAX_SEATS alone.
        """
        current = self.get(date_id)
        if current is None:
            return None

        changes: dict[str, Any] = {}
        if label is not None:
            changes["label"] = _collapse_spaces(label)
        if seats_total is not None:
            total = Capacity.clamp(seats_total).value
            available = (
                current.seats_available if seats_available is None else seats_available
            )
            changes["seats_total"] = total
            changes["seats_available"] = Capacity.clamp(available, upper=total).value
        elif seats_available is not None:
            changes["seats_available"] = Capacity.clamp(seats_available).value

        return self.upsert({**current.to_record(), **changes})

    def delete(self, date_id: str) -> bool:
        wanted = as_text(date_id)
        rows = self.all()
        remaining = [r for r in rows if r.id != wanted]
        self._commit(remaining)
        return len(remaining) != len(rows)

    def delete_by_event(self, event_id: str) -> bool:
        wanted = as_text(event_id)
        rows = self.all()
        remaining = [r for r in rows if r.event_id != wanted]
        self._commit(remaining)
        removed = len(rows) - len(remaining)
        if removed:
            logger.info("Deleted %d dates for event %s", removed, wanted)
        return removed > 0

    def decrement_seat(self, event_id: str, label: str) -> bool:
        """Take one seat from the first row of the event whose label matches exactly.

        Events that were never migrated to EventDate rows fall back to their
        embedded `dates` array with the same matching rule.
        """
        eid = as_text(event_id)
        wanted = as_text(label)

        rows = self.list_by_event(eid)
        if not rows:
            return self._decrement_legacy(eid, wanted)

        row = next((r for r in rows if r.label == wanted), None)
        if row is None or row.seats_available <= 0:
            logger.info("No seat taken for event %s date %r", eid, wanted)
            return False

        self.upsert(replace(row, seats_available=row.seats_available - 1))
        logger.info(
            "Seat taken for event %s date %r, %d left",
            eid,
            wanted,
            row.seats_available - 1,
        )
        return True

    def _decrement_legacy(self, event_id: str, label: str) -> bool:
        events = self._store.events()
        index = next((i for i, e in enumerate(events) if e.id == event_id), None)
        if index is None:
            return False

        event = events[index]
        dates = list(event.dates)
        position = next((j for j, d in enumerate(dates) if d.label == label), None)
        if position is None or dates[position].seats <= 0:
            return False

        dates[position] = LegacyDate(label=label, seats=dates[position].seats - 1)
        events[index] = replace(event, dates=tuple(dates))
        # No sync: this event has no rows, and syncing would empty its dates.
        self._store.save_events(events)
        logger.info("Seat taken from legacy dates of event %s date %r", event_id, label)
        return True
