"""Registration service.

Registrations are append-only here. Recording a registration does not take
a seat: callers run two explicit steps and check both results,

    registration = registrations.add(data)
    took_seat = inventory.decrement_seat(event_id, date_label)

and decide what to do when only one of them succeeded.
"""

import logging
from collections.abc import Mapping
from typing import Any

from venue.domain.models import Registration, RegistrationView
from venue.domain.normalizers import as_text, normalize_registration
from venue.services.event_service import EventService
from venue.services.inventory_service import InventoryService
from venue.stores.local_store import LocalStore

logger = logging.getLogger(__name__)

MISSING = "—"


def _reference(title: str, ref_id: str) -> str:
    if title:
        return title
    return f"ID: {ref_id}" if ref_id else MISSING


class RegistrationService:
    """Service for registration operations."""

    def __init__(
        self, store: LocalStore, events: EventService, inventory: InventoryService
    ) -> None:
        self._store = store
        self._events = events
        self._inventory = inventory

    def list_all(self) -> list[Registration]:
        """Return registrations, newest first."""
        return self._store.registrations()

    def add(self, raw: Mapping[str, Any] | None) -> Registration:
        registration = normalize_registration(raw, self._store.clock).record
        self._store.save_registrations([registration, *self.list_all()])
        logger.info(
            "Registration %s recorded for event %s",
            registration.id,
            registration.event_id,
        )
        return registration

    def search(self, query: Any = "") -> list[RegistrationView]:
        """Join registrations with event titles and date labels, then filter.

        The filter is a case-insensitive substring match over title, label,
        name, email and phone.
        """
        titles = {e.id: e.title for e in self._events.list_raw()}
        labels = {d.id: d.label for d in self._inventory.all()}

        views = [
            RegistrationView(
                registration=r,
                event_title=_reference(titles.get(r.event_id, ""), r.event_id),
                date_label=_reference(labels.get(r.event_date_id, ""), r.event_date_id),
            )
            for r in self.list_all()
        ]

        needle = as_text(query).strip().lower()
        if not needle:
            return views
        return [v for v in views if needle in _haystack(v)]


def _haystack(view: RegistrationView) -> str:
    r = view.registration
    return " ".join(
        (view.event_title, view.date_label, r.name, r.email, r.phone)
    ).lower()
