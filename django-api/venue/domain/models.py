"""Domain models representing persisted state.

These are pure domain objects with no API input rules. Each one knows how to
render itself as the JSON-compatible record kept in the key/value store; the
key names follow the storage format the public site already reads.
Django ORM models are in venue/models.py (persistence layer).
"""

from dataclasses import dataclass
from typing import Any

from venue.domain.value_objects import GalleryKind, PromoKind

Record = dict[str, Any]


@dataclass(frozen=True)
class LegacyDate:
    """One entry of the denormalized `dates` array embedded in an Event."""

    label: str
    seats: int

    def to_record(self) -> Record:
        return {"label": self.label, "seats": self.seats}


@dataclass(frozen=True)
class Event:
    """Domain representation of a bookable Event."""

    id: str
    type: str
    month_key: str
    title: str
    description: str
    image: str
    location: str
    time_range: str
    duration_hours: str
    duration: str
    dates: tuple[LegacyDate, ...] = ()

    @property
    def total_seats(self) -> int:
        return sum(d.seats for d in self.dates)

    def to_record(self) -> Record:
        return {
            "id": self.id,
            "type": self.type,
            "monthKey": self.month_key,
            "title": self.title,
            "desc": self.description,
            "img": self.image,
            "location": self.location,
            "timeRange": self.time_range,
            "durationHours": self.duration_hours,
            "duration": self.duration,
            "dates": [d.to_record() for d in self.dates],
        }


@dataclass(frozen=True)
class EventDate:
    """Domain representation of one dated session and its seat inventory."""

    id: str
    event_id: str
    label: str
    seats_total: int
    seats_available: int
    created_at: str

    def to_record(self) -> Record:
        return {
            "id": self.id,
            "event_id": self.event_id,
            "label": self.label,
            "seats_total": self.seats_total,
            "seats_available": self.seats_available,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class Registration:
    """Domain representation of a seat reservation."""

    id: str
    event_id: str
    event_date_id: str
    name: str
    email: str
    phone: str
    marketing_opt_in: bool
    created_at: str

    def to_record(self) -> Record:
        return {
            "id": self.id,
            "event_id": self.event_id,
            "event_date_id": self.event_date_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "marketing_opt_in": self.marketing_opt_in,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class Promotion:
    """Domain representation of a scheduled banner or modal."""

    id: str
    active: bool
    kind: PromoKind
    target: str
    priority: int
    badge: str
    title: str
    description: str
    note: str
    cta_label: str
    cta_href: str
    media_img: str
    start_at: str
    end_at: str
    dismiss_days: int
    created_at: str
    updated_at: str

    def to_record(self) -> Record:
        return {
            "id": self.id,
            "active": self.active,
            "kind": self.kind.value,
            "target": self.target,
            "priority": self.priority,
            "badge": self.badge,
            "title": self.title,
            "desc": self.description,
            "note": self.note,
            "ctaLabel": self.cta_label,
            "ctaHref": self.cta_href,
            "mediaImg": self.media_img,
            "startAt": self.start_at,
            "endAt": self.end_at,
            "dismissDays": self.dismiss_days,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class MediaConfig:
    """Singleton site media settings."""

    logo_path: str
    default_hero: str
    whatsapp_number: str
    instagram_url: str

    def to_record(self) -> Record:
        return {
            "logoPath": self.logo_path,
            "defaultHero": self.default_hero,
            "whatsappNumber": self.whatsapp_number,
            "instagramUrl": self.instagram_url,
        }


@dataclass(frozen=True)
class GalleryItem:
    """A gallery photo stored inline as a data URL."""

    id: str
    kind: GalleryKind
    name: str
    tags: tuple[str, ...]
    created_at: str
    data_url: str

    def to_record(self) -> Record:
        return {
            "id": self.id,
            "type": self.kind.value,
            "name": self.name,
            "tags": list(self.tags),
            "createdAt": self.created_at,
            "dataUrl": self.data_url,
        }


@dataclass(frozen=True)
class EventView:
    """Flattened Event for list and detail screens."""

    event: Event
    labels: tuple[str, ...]
    seats: int


@dataclass(frozen=True)
class RegistrationView:
    """Registration joined with its event title and date label."""

    registration: Registration
    event_title: str
    date_label: str
