"""Unit tests for first-boot seeding and the legacy dates migration.

Run with: pytest tests/test_bootstrap.py -v
"""

from venue.domain.models import LegacyDate


class TestEnsureDefaults:
    """Tests for seeding empty collections."""

    def test_first_boot_seeds_everything(self, layer):
        """An empty store receives the seed catalog, media and promotions."""
        report = layer.bootstrap()

        assert report.seeded == ("events", "media", "registrations", "promotions")
        assert [e.id for e in layer.events.list_raw()] == [
            "vino-notas-ene",
            "coctel-feb",
            "vino-marzo",
        ]
        assert layer.registrations.list_all() == []
        assert {p.id for p in layer.promotions.list_all()} == {
            "club-vino-banner",
            "club-vino-modal",
        }

    def test_first_boot_migrates_seed_dates(self, layer):
        """Seed events get one fully available row per embedded date."""
        report = layer.bootstrap()

        assert report.migrated_dates == 4
        rows = layer.inventory.list_by_event("vino-marzo")
        assert [(r.label, r.seats_total, r.seats_available) for r in rows] == [
            ("15 marzo", 8, 8),
            ("22 marzo", 8, 8),
        ]
        assert layer.events.get("coctel-feb").dates == (LegacyDate("09 febrero", 0),)

    def test_second_boot_changes_nothing(self, layer, backend):
        """A repeated bootstrap neither seeds nor rewrites anything."""
        layer.bootstrap()
        before = {key: backend.raw(key) for key in ("ecn_events", "ecn_event_dates")}

        report = layer.bootstrap()

        assert report.seeded == ()
        assert report.migrated_dates == 0
        assert {key: backend.raw(key) for key in before} == before

    def test_existing_collections_are_kept(self, layer, backend):
        """Collections that already hold data are left alone."""
        backend.set("ecn_events", [{"id": "propio", "title": "Propio"}])
        backend.set("ecn_regs", [])

        report = layer.bootstrap()

        assert "events" not in report.seeded
        assert "registrations" not in report.seeded
        assert [e.id for e in layer.events.list_raw()] == ["propio"]

    def test_empty_event_list_is_reseeded(self, layer, backend):
        """An empty event list counts as unset."""
        backend.set("ecn_events", [])

        assert "events" in layer.bootstrap().seeded

    def test_corrupt_collection_is_reseeded(self, layer, backend):
        """Unreadable JSON is replaced by the seed."""
        backend.put_raw("ecn_promos", "{not json")

        assert "promotions" in layer.bootstrap().seeded
        assert len(layer.promotions.list_all()) == 2


class TestMigrateLegacyDates:
    """Tests for turning embedded dates into EventDate rows."""

    def test_migration_runs_once(self, layer, backend):
        """Existing rows block the migration even when events carry other dates."""
        layer.events.upsert({"title": "Cata"})
        layer.inventory.create("cata", "1 mayo", 5)
        backend.set(
            "ecn_events",
            [
                {"id": "cata", "title": "Cata", "dates": [{"label": "1 mayo", "seats": 5}]},
                {"id": "otro", "title": "Otro", "dates": [{"label": "2 mayo", "seats": 9}]},
            ],
        )

        assert layer.bootstrap().migrated_dates == 0
        assert len(layer.inventory.all()) == 1
        assert layer.events.get("otro").dates == ()

    def test_nothing_to_migrate(self, layer, backend):
        """Events without embedded dates create no rows collection."""
        backend.set("ecn_events", [{"id": "cata", "title": "Cata"}])

        assert layer.bootstrap().migrated_dates == 0
        assert backend.raw("ecn_event_dates") is None

    def test_rows_start_fully_available(self, layer, backend):
        """Migrated rows start with every seat available."""
        backend.set(
            "ecn_events",
            [{"id": "cata", "title": "Cata", "dates": [{"label": "A", "seats": 3}]}],
        )

        layer.bootstrap()

        [row] = layer.inventory.all()
        assert (row.event_id, row.label, row.seats_total, row.seats_available) == (
            "cata",
            "A",
            3,
            3,
        )
