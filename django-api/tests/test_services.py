"""Unit tests for the catalog, registration, media, gallery and session services.

Run with: pytest tests/test_services.py -v
"""

from datetime import date

import pytest

from venue.domain.models import LegacyDate
from venue.domain.value_objects import GalleryKind
from venue.services.event_service import months_window
from venue.services.session_service import login_redirect, sanitize_return_file


class TestEventService:
    """Tests for EventService."""

    def test_upsert_creates_then_updates(self, layer):
        """Upserting an existing id replaces the stored event."""
        layer.events.upsert({"title": "Cata"})
        layer.events.upsert({"id": "cata", "title": "Cata de tintos"})

        events = layer.events.list_raw()
        assert [(e.id, e.title) for e in events] == [("cata", "Cata de tintos")]

    def test_new_events_are_prepended(self, layer):
        """New events go to the front of the collection."""
        layer.events.upsert({"title": "Uno"})
        layer.events.upsert({"title": "Dos"})

        assert [e.id for e in layer.events.list_raw()] == ["dos", "uno"]

    def test_upsert_with_dates_creates_rows_once(self, layer):
        """Embedded dates create inventory rows only for a new event."""
        event = layer.events.upsert(
            {"title": "Cata", "dates": [{"label": "1 mayo", "seats": 6}]}
        )

        assert event.dates == (LegacyDate("1 mayo", 6),)
        assert len(layer.inventory.list_by_event("cata")) == 1

        edited = layer.events.upsert(
            {"id": "cata", "title": "Cata", "dates": [{"label": "2 mayo", "seats": 1}]}
        )

        assert len(layer.inventory.list_by_event("cata")) == 1
        assert edited.dates == (LegacyDate("1 mayo", 6),)

    def test_get_unknown_returns_none(self, layer):
        """Unknown ids yield None rather than raising."""
        assert layer.events.get("nope") is None
        assert layer.events.find_view("nope") is None

    def test_view_flattens_labels_and_seats(self, layer):
        """The event view lists date labels and sums available seats."""
        layer.events.upsert({"title": "Cata"})
        layer.inventory.create("cata", "1 mayo", 6)
        layer.inventory.create("cata", "8 mayo", 4)

        view = layer.events.find_view("cata")

        assert view.labels == ("1 mayo", "8 mayo")
        assert view.seats == 10
        assert layer.events.total_seats(view.event) == 10

    def test_delete_cascades_to_rows(self, layer):
        """Deleting an event removes only its own date rows."""
        layer.events.upsert({"title": "Cata"})
        layer.events.upsert({"title": "Coctel"})
        layer.inventory.create("cata", "1 mayo", 6)
        kept = layer.inventory.create("coctel", "2 mayo", 6)

        assert layer.events.delete("cata") is True

        assert layer.events.get("cata") is None
        assert layer.inventory.all() == [kept]
        assert layer.events.delete("cata") is False

    def test_replace_all_resyncs_dates(self, layer):
        """Replacing the catalog rebuilds embedded dates from inventory."""
        layer.events.upsert({"title": "Cata"})
        layer.inventory.create("cata", "1 mayo", 6)

        [event] = layer.events.replace_all([{"id": "cata", "title": "Cata"}])

        assert event.dates == ()
        assert layer.events.get("cata").dates == (LegacyDate("1 mayo", 6),)

    @pytest.mark.parametrize(
        "today,expected",
        [
            (date(2026, 3, 15), ["MARZO", "ABRIL", "MAYO"]),
            (date(2026, 11, 1), ["NOVIEMBRE", "DICIEMBRE", "ENERO"]),
        ],
    )
    def test_months_window(self, today, expected):
        """The window is the current month and the next two, wrapping the year."""
        assert months_window(today) == expected


class TestRegistrationService:
    """Tests for RegistrationService."""

    def test_add_prepends(self, layer):
        """Newest registrations come first."""
        first = layer.registrations.add({"name": "Ana", "email": "ana@example.com"})
        second = layer.registrations.add({"name": "Luis", "email": "luis@example.com"})

        assert [r.id for r in layer.registrations.list_all()] == [second.id, first.id]

    def test_add_does_not_take_a_seat(self, layer):
        """Storing a registration leaves seat counts alone."""
        layer.events.upsert({"title": "Cata"})
        row = layer.inventory.create("cata", "1 mayo", 6)

        layer.registrations.add({"event_id": "cata", "event_date_id": row.id, "name": "Ana"})

        assert layer.inventory.get(row.id).seats_available == 6

    def test_search_joins_titles_and_labels(self, layer):
        """Search results carry the event title and date label."""
        layer.events.upsert({"title": "Cata"})
        row = layer.inventory.create("cata", "1 mayo", 6)
        layer.registrations.add({"event_id": "cata", "event_date_id": row.id, "name": "Ana"})

        [view] = layer.registrations.search()

        assert (view.event_title, view.date_label) == ("Cata", "1 mayo")

    def test_search_reports_missing_references(self, layer):
        """Deleted events show their id and a dash for the date."""
        layer.registrations.add({"event_id": "borrado", "name": "Ana"})

        [view] = layer.registrations.search()

        assert (view.event_title, view.date_label) == ("ID: borrado", "—")

    def test_search_filters_case_insensitively(self, layer):
        """The query matches contact fields and event titles in any case."""
        layer.events.upsert({"title": "Cata"})
        layer.registrations.add({"event_id": "cata", "name": "Ana", "phone": "8888"})
        layer.registrations.add({"event_id": "cata", "name": "Luis", "email": "LUIS@x.com"})

        assert [v.registration.name for v in layer.registrations.search("luis@")] == ["Luis"]
        assert [v.registration.name for v in layer.registrations.search("8888")] == ["Ana"]
        assert len(layer.registrations.search("CATA")) == 2


class TestMediaService:
    """Tests for MediaService."""

    def test_get_returns_defaults_when_unset(self, layer):
        """Unset media config reads as the site defaults."""
        media = layer.media.get()
        assert media.logo_path.endswith("logo-entrecopasynotas.png")

    def test_blank_fields_keep_defaults(self, layer):
        """Blank fields fall back to defaults while others are saved."""
        default_logo = layer.media.get().logo_path

        media = layer.media.set({"logoPath": "  ", "instagramUrl": "https://instagram.com/x"})

        assert media.logo_path == default_logo
        assert layer.media.get().instagram_url == "https://instagram.com/x"


class TestGalleryService:
    """Tests for GalleryService."""

    def test_add_normalizes_and_lists_newest_first(self, layer):
        """Added photos are normalized and listed newest first."""
        older = layer.gallery.add({"name": "Copa", "tags": "vino tinto"})
        newer = layer.gallery.add({"type": "cocteles", "name": "Negroni", "tags": "#coctel"})

        items = layer.gallery.list_all()

        assert [i.id for i in items] == [newer.id, older.id]
        assert items[0].kind is GalleryKind.COCTELES
        assert items[1].tags == ("#vino", "#tinto")

    def test_list_orders_by_created_at(self, layer, backend):
        """Stored order does not matter; createdAt decides."""
        backend.set(
            layer.store.keys.gallery,
            [
                {"id": "a", "name": "A", "createdAt": "2026-01-01T00:00:00.000000Z"},
                {"id": "b", "name": "B", "createdAt": "2026-02-01T00:00:00.000000Z"},
            ],
        )

        assert [i.id for i in layer.gallery.list_all()] == ["b", "a"]

    def test_get_and_delete(self, layer):
        """A deleted item is gone; deleting it again reports False."""
        item = layer.gallery.add({"name": "Copa"})

        assert layer.gallery.get(item.id) == item
        assert layer.gallery.delete(item.id) is True
        assert layer.gallery.get(item.id) is None
        assert layer.gallery.delete(item.id) is False

    def test_delete_unknown_does_not_write(self, layer, backend):
        """Deleting an unknown id leaves the stored collection untouched."""
        layer.gallery.add({"name": "Copa"})
        before = backend.raw(layer.store.keys.gallery)

        assert layer.gallery.delete("nope") is False
        assert backend.raw(layer.store.keys.gallery) == before


class TestAdminSession:
    """Tests for AdminSessionService."""

    def test_log_in_and_out(self, layer):
        """Logging in sets the flag in the given session; logging out clears it."""
        session = {}
        service = layer.session_for(session)
        assert service.is_logged_in() is False

        assert service.log_in("admin@example.com", "secreto") is True
        assert service.is_logged_in() is True
        assert session[layer.store.keys.admin_session]["email"] == "admin@example.com"

        service.log_out()
        assert service.is_logged_in() is False
        assert session == {}

    def test_sessions_are_independent(self, layer):
        """A login in one session does not unlock another."""
        layer.session_for({}).log_in("admin@example.com", "secreto")

        assert layer.session_for({}).is_logged_in() is False

    def test_nothing_is_written_to_the_store(self, layer, backend):
        """The admin flag never reaches the shared key/value store."""
        layer.session_for({}).log_in("admin@example.com", "secreto")

        assert backend.raw(layer.store.keys.admin_session) is None

    def test_malformed_email_is_rejected(self, layer):
        """An address that is not an email does not log in."""
        service = layer.session_for({})
        assert service.log_in("not-an-email", "secreto") is False
        assert service.is_logged_in() is False

    @pytest.mark.parametrize("password", ["", "12345", None])
    def test_short_password_is_rejected(self, layer, password):
        """Passwords under six characters do not log in."""
        service = layer.session_for({})
        assert service.log_in("admin@example.com", password) is False
        assert service.is_logged_in() is False

    def test_non_mapping_flag_is_ignored(self, layer):
        """A stored flag that is not a mapping reads as logged out."""
        service = layer.session_for({layer.store.keys.admin_session: "yes"})
        assert service.current() is None
        assert service.is_logged_in() is False

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("admin.html", "admin.html"),
            ("Admin-Promos.HTML", "Admin-Promos.HTML"),
            ("../etc/passwd", ""),
            ("https://evil.example/admin.html", ""),
            (None, ""),
        ],
    )
    def test_sanitize_return_file(self, value, expected):
        """Only plain page names survive."""
        assert sanitize_return_file(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("promos.html", "./promos.html"),
            ("//evil.example", "./admin.html"),
            ("", "./admin.html"),
        ],
    )
    def test_login_redirect(self, value, expected):
        """Unsafe or missing targets redirect to the admin page."""
        assert login_redirect(value) == expected
