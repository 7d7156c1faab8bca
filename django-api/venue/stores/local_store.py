"""Typed access to the venue collections kept in a KeyValueStore.

Everything read back goes through the schema normalizers, so callers always
receive canonical records even when the stored JSON was edited by hand or
written by an older version of the site. Unreadable or mistyped values read
as empty collections.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Self

from django.utils import timezone

from venue.domain.models import (
    Event,
    EventDate,
    GalleryItem,
    MediaConfig,
    Promotion,
    Registration,
)
from venue.domain.normalizers import (
    Clock,
    normalize_all,
    normalize_event,
    normalize_event_date,
    normalize_gallery_item,
    normalize_media,
    normalize_promotion,
    normalize_registration,
)
from venue.stores.interfaces import KeyValueStore


@dataclass(frozen=True)
class StorageKeys:
    """Storage key for each collection."""

    admin_session: str  # key inside each client session, not in the store
    events: str
    event_dates: str
    registrations: str
    media: str
    promotions: str
    gallery: str

    @classmethod
    def with_prefix(cls, prefix: str = "ecn_") -> Self:
        return cls(
            admin_session=f"{prefix}admin_session",
            events=f"{prefix}events",
            event_dates=f"{prefix}event_dates",
            registrations=f"{prefix}regs",
            media=f"{prefix}media",
            promotions=f"{prefix}promos",
            gallery=f"{prefix}gallery_items",
        )


class LocalStore:
    """Reads and writes whole collections through a KeyValueStore."""

    def __init__(
        self,
        backend: KeyValueStore,
        keys: StorageKeys | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._backend = backend
        self.keys = keys or StorageKeys.with_prefix()
        self.clock = clock or timezone.now

    def raw(self, key: str) -> Any:
        """Return the undecoded collection value, or None when absent."""
        return self._backend.get(key, None)

    def write_raw(self, key: str, value: Any) -> None:
        self._backend.set(key, value)

    # Events

    def events(self) -> list[Event]:
        return normalize_all(self.raw(self.keys.events), normalize_event)

    def save_events(self, events: Iterable[Event]) -> None:
        self._backend.set(self.keys.events, [e.to_record() for e in events])

    # Event dates

    def event_dates(self) -> list[EventDate]:
        rows = normalize_all(
            self.raw(self.keys.event_dates),
            lambda row: normalize_event_date(row, self.clock),
        )
        return [row for row in rows if row.event_id]

    def save_event_dates(self, rows: Iterable[EventDate]) -> None:
        self._backend.set(
            self.keys.event_dates, [r.to_record() for r in rows if r.event_id]
        )

    # Registrations

    def registrations(self) -> list[Registration]:
        return normalize_all(
            self.raw(self.keys.registrations),
            lambda row: normalize_registration(row, self.clock),
        )

    def save_registrations(self, registrations: Iterable[Registration]) -> None:
        self._backend.set(
            self.keys.registrations, [r.to_record() for r in registrations]
        )

    # Promotions

    def promotions(self) -> list[Promotion]:
        return normalize_all(
            self.raw(self.keys.promotions),
            lambda row: normalize_promotion(row, self.clock),
        )

    def save_promotions(self, promotions: Iterable[Promotion]) -> None:
        self._backend.set(self.keys.promotions, [p.to_record() for p in promotions])

    # Media

    def media(self) -> MediaConfig:
        return normalize_media(self.raw(self.keys.media)).record

    def save_media(self, media: MediaConfig) -> None:
        self._backend.set(self.keys.media, media.to_record())

    # Gallery

    def gallery(self) -> list[GalleryItem]:
        return normalize_all(
            self.raw(self.keys.gallery),
            lambda row: normalize_gallery_item(row, self.clock),
        )

    def save_gallery(self, items: Iterable[GalleryItem]) -> None:
        self._backend.set(self.keys.gallery, [i.to_record() for i in items])
