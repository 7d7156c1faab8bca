"""Tests for the key/value backends and the typed local store.

Run with: pytest tests/test_stores.py -v
"""

import pytest

from venue.models import StoredValue
from venue.stores.django_store import DjangoKeyValueStore
from venue.stores.local_store import LocalStore, StorageKeys


class TestInMemoryKeyValueStore:
    """Tests for the dictionary-backed store."""

    def test_round_trip(self, backend):
        """A stored value reads back equal."""
        backend.set("k", {"a": [1, 2]})
        assert backend.get("k") == {"a": [1, 2]}

    def test_missing_key_returns_default(self, backend):
        """Missing keys yield the caller's default."""
        assert backend.get("k", []) == []

    def test_unreadable_value_returns_default(self, backend):
        """Text that is not JSON yields the default."""
        backend.put_raw("k", "{broken")
        assert backend.get("k", "fallback") == "fallback"


@pytest.mark.django_db
class TestDjangoKeyValueStore:
    """Tests for the ORM-backed store."""

    def test_set_then_get(self):
        """Setting a key twice keeps one row with the latest value."""
        store = DjangoKeyValueStore()
        store.set("ecn_media", {"logoPath": "x.png"})
        store.set("ecn_media", {"logoPath": "y.png"})

        assert store.get("ecn_media") == {"logoPath": "y.png"}
        assert StoredValue.objects.count() == 1

    def test_unreadable_value_returns_default(self):
        """A row that is not JSON yields the default."""
        StoredValue.objects.create(key="ecn_events", payload="not json")

        assert DjangoKeyValueStore().get("ecn_events", []) == []


class TestLocalStore:
    """Tests for typed collection access."""

    def test_storage_keys(self):
        """Every collection key carries the prefix."""
        keys = StorageKeys.with_prefix("test_")
        assert (keys.events, keys.event_dates, keys.registrations, keys.promotions) == (
            "test_events",
            "test_event_dates",
            "test_regs",
            "test_promos",
        )
        assert keys.gallery == "test_gallery_items"

    def test_non_list_collection_reads_empty(self, backend, clock):
        """A collection stored as something other than a list reads empty."""
        store = LocalStore(backend, clock=clock)
        backend.set(store.keys.events, {"id": "not-a-list"})
        backend.set(store.keys.gallery, "nope")

        assert store.events() == []
        assert store.promotions() == []
        assert store.gallery() == []

    def test_rows_without_event_are_dropped_on_read(self, backend, clock):
        """Date rows with no event_id are skipped."""
        store = LocalStore(backend, clock=clock)
        backend.set(
            store.keys.event_dates,
            [{"id": "a", "event_id": "cata", "label": "1 mayo"}, {"id": "b", "label": "x"}],
        )

        assert [r.id for r in store.event_dates()] == ["a"]

    def test_saved_events_use_storage_field_names(self, backend, clock):
        """Saved events are written with camelCase keys."""
        store = LocalStore(backend, clock=clock)
        backend.set(store.keys.events, [{"title": "Cata", "timeRange": "6pm"}])

        store.save_events(store.events())

        [record] = backend.get(store.keys.events)
        assert record["id"] == "cata"
        assert record["timeRange"] == "6pm"
        assert "time_range" not in record

    def test_gallery_rows_are_normalized_on_read(self, backend, clock):
        """Gallery rows read back with a kind, hashed tags and a cut name."""
        store = LocalStore(backend, clock=clock)
        backend.set(
            store.keys.gallery,
            [{"id": "g1", "type": "otro", "name": "n" * 70, "tags": "vino,vino"}],
        )

        [item] = store.gallery()

        assert item.kind.value == "maridajes"
        assert item.tags == ("#vino",)
        assert len(item.name) == 60
