"""Unit tests for the legacy `dates` derivation.

Run with: pytest tests/test_legacy_sync.py -v
"""

from venue.domain.models import EventDate, LegacyDate
from venue.domain.normalizers import normalize_event
from venue.services.legacy_sync import derive_legacy_dates


def _event(event_id: str, dates=None):
    return normalize_event({"id": event_id, "title": event_id, "dates": dates or []}).record


def _row(row_id: str, event_id: str, label: str, available: int, created_at: str):
    return EventDate(
        id=row_id,
        event_id=event_id,
        label=label,
        seats_total=10,
        seats_available=available,
        created_at=created_at,
    )


class TestDeriveLegacyDates:
    """Tests for the pure derivation function."""

    def test_dates_follow_rows_in_creation_order(self):
        """Rows are listed by created_at ascending with available seats."""
        events = [_event("cata")]
        rows = [
            _row("b", "cata", "22 marzo", 3, "2026-03-02T00:00:00.000000Z"),
            _row("a", "cata", "15 marzo", 8, "2026-03-01T00:00:00.000000Z"),
        ]

        [event] = derive_legacy_dates(events, rows)

        assert event.dates == (
            LegacyDate(label="15 marzo", seats=8),
            LegacyDate(label="22 marzo", seats=3),
        )

    def test_event_without_rows_gets_empty_dates(self):
        """Embedded dates are overwritten, not kept, when the event has no rows."""
        events = [_event("cata", [{"label": "viejo", "seats": 4}])]

        [event] = derive_legacy_dates(events, [])

        assert event.dates == ()

    def test_orphan_rows_are_ignored(self):
        """Rows pointing at unknown events do not leak into other events."""
        events = [_event("cata")]
        rows = [_row("x", "borrado", "1 mayo", 5, "2026-03-01T00:00:00.000000Z")]

        [event] = derive_legacy_dates(events, rows)

        assert event.dates == ()

    def test_derivation_is_idempotent(self):
        """Deriving twice yields identical records."""
        events = [_event("cata"), _event("coctel")]
        rows = [
            _row("a", "cata", "15 marzo", 8, "2026-03-01T00:00:00.000000Z"),
            _row("b", "coctel", "9 febrero", 0, "2026-03-01T00:00:00.000000Z"),
        ]

        once = derive_legacy_dates(events, rows)
        twice = derive_legacy_dates(once, rows)

        assert [e.to_record() for e in once] == [e.to_record() for e in twice]

    def test_input_events_are_not_mutated(self):
        """The input events keep their original dates."""
        events = [_event("cata", [{"label": "viejo", "seats": 4}])]

        derive_legacy_dates(events, [])

        assert events[0].dates == (LegacyDate(label="viejo", seats=4),)


class TestLegacyViewSynchronizer:
    """Tests for persisting the derived view."""

    def test_sync_twice_writes_identical_json(self, layer, backend):
        """Running the synchronizer twice produces byte-identical events."""
        layer.events.upsert({"title": "Cata"})
        layer.inventory.create("cata", "15 marzo", 8)

        layer.synchronizer.sync()
        first = backend.raw(layer.store.keys.events)
        layer.synchronizer.sync()
        second = backend.raw(layer.store.keys.events)

        assert first == second

    def test_sync_without_events_is_noop(self, layer, backend):
        """Syncing an empty catalog writes nothing."""
        assert layer.synchronizer.sync() == []
        assert backend.raw(layer.store.keys.events) is None
