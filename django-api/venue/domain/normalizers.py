"""Schema normalizers: raw mappings in, canonical records out.

Normalizers never raise. Missing or invalid fields are replaced with
defaults, and every substitution is reported in `Normalized.defaulted` so
callers and tests can tell "input used defaults" apart from "input was
complete". User-facing validation ("title is required") belongs to the
calling layer.
"""

import math
import re
import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from datetime import timezone as dt_timezone
from typing import Any, Generic, TypeVar

from django.utils import timezone
from django.utils.text import slugify

from venue.domain.models import (
    Event,
    EventDate,
    GalleryItem,
    LegacyDate,
    MediaConfig,
    Promotion,
    Registration,
)
from venue.domain.value_objects import Capacity, GalleryKind, PromoKind, to_number

T = TypeVar("T")

TO_CONFIRM = "Por confirmar"
TO_DEFINE = "Por definir"

DEFAULT_MEDIA = MediaConfig(
    logo_path="./assets/img/logo-entrecopasynotas.png",
    default_hero="./assets/img/hero-1.jpg",
    whatsapp_number="5068845123",
    instagram_url="https://instagram.com/entrecopasynotas",
)

_NUMBER_TOKEN = re.compile(r"(\d+(?:[.,]\d+)?)")
_SCHEME = re.compile(r"^[a-z][a-z0-9+.\-]*:")
_SAFE_PREFIXES = ("http://", "https://", "mailto:", "tel:", "#", "/", "./", "../")
_WHATSAPP_PREFIXES = ("wa.me/", "www.wa.me/")
_TAG_SEPARATORS = re.compile(r"[,; ]+")
_REPEATED_HASH = re.compile(r"#+")

MAX_GALLERY_NAME = 60
MAX_GALLERY_TAGS = 12

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class Normalized(Generic[T]):
    """A canonical record plus the names of fields that were defaulted."""

    record: T
    defaulted: tuple[str, ...] = ()

    def was_defaulted(self, field: str) -> bool:
        return field in self.defaulted


class _Fields:
    """Reads raw input and remembers which fields fell back to a default."""

    def __init__(self, raw: Mapping[str, Any] | None) -> None:
        self._raw = raw if isinstance(raw, Mapping) else {}
        self.defaulted: list[str] = []

    def value(self, *keys: str) -> Any:
        for key in keys:
            if self._raw.get(key) is not None:
                return self._raw[key]
        return None

    def text(self, field: str, *keys: str, default: str = "") -> str:
        result = as_text(self.value(*(keys or (field,)))).strip()
        if result:
            return result
        if default:
            self.defaulted.append(field)
        return default

    def mark(self, field: str) -> None:
        self.defaulted.append(field)


def as_text(value: Any) -> str:
    return "" if value is None else str(value)


def iso_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC timestamp that sorts lexicographically."""
    return moment.astimezone(dt_timezone.utc).isoformat(timespec="microseconds").replace(
        "+00:00", "Z"
    )


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO timestamp; empty or unparseable input yields None."""
    text = as_text(value).strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return None
    if timezone.is_naive(moment):
        moment = timezone.make_aware(moment, dt_timezone.utc)
    return moment


def slug_id(title: Any, fallback: str) -> str:
    return slugify(as_text(title)) or fallback


def normalize_month(value: Any) -> str:
    return as_text(value).strip().upper()


def normalize_duration_hours(value: Any) -> str:
    """Reduce "3", "3hrs", "2,5 h" to the bare number token ("3", "2.5")."""
    text = as_text(value).strip()
    if not text:
        return ""
    match = _NUMBER_TOKEN.search(text)
    if not match:
        return text
    return match.group(1).replace(",", ".")


def pick_schedule(time_range: Any, legacy_duration: Any) -> str:
    """The displayed duration is the time range when set, else the legacy text."""
    tr = as_text(time_range).strip()
    if tr and tr != TO_CONFIRM:
        return tr
    return as_text(legacy_duration).strip() or TO_CONFIRM


def sanitize_href(href: Any) -> str:
    """Restrict call-to-action links to an allow-list of schemes.

    http(s), mailto, tel, in-page anchors and relative paths are kept,
    bare wa.me links get https://, and any other scheme becomes "#".
    """
    text = as_text(href).strip()
    if not text:
        return "#"
    lower = text.lower()
    if lower.startswith(_SAFE_PREFIXES):
        return text
    if lower.startswith(_WHATSAPP_PREFIXES):
        return "https://" + text
    if _SCHEME.match(lower):
        return "#"
    return text


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false", "no", "off")
    return bool(value)


def _non_negative_int(value: Any) -> int:
    number = to_number(value)
    if number is None:
        return 0
    return max(0, math.trunc(number))


def normalize_legacy_dates(raw_dates: Any) -> tuple[LegacyDate, ...]:
    if not isinstance(raw_dates, (list, tuple)):
        return ()
    result = []
    for entry in raw_dates:
        entry = entry if isinstance(entry, Mapping) else {}
        result.append(
            LegacyDate(
                label=as_text(entry.get("label")).strip() or TO_DEFINE,
                seats=_non_negative_int(entry.get("seats")),
            )
        )
    return tuple(result)


def normalize_event(raw: Mapping[str, Any] | None) -> Normalized[Event]:
    f = _Fields(raw)

    event_id = f.text("id")
    if not event_id:
        event_id = slug_id(f.value("title"), "evento")
        f.mark("id")

    time_range = f.text("time_range", "timeRange", default=TO_CONFIRM)
    duration_hours = normalize_duration_hours(f.value("durationHours", "duration_hours"))
    if not duration_hours:
        duration_hours = TO_CONFIRM
        f.mark("duration_hours")

    month_key = normalize_month(f.value("monthKey", "month_key"))
    if not month_key:
        month_key = "ENERO"
        f.mark("month_key")

    event = Event(
        id=event_id,
        type=f.text("type", default="Cata de vino"),
        month_key=month_key,
        title=f.text("title", default="Evento"),
        description=f.text("description", "desc", "description"),
        image=f.text("image", "img", "image", default=DEFAULT_MEDIA.default_hero),
        location=f.text("location", default=TO_CONFIRM),
        time_range=time_range,
        duration_hours=duration_hours,
        duration=pick_schedule(time_range, f.value("duration")),
        dates=normalize_legacy_dates(f.value("dates")),
    )
    return Normalized(record=event, defaulted=tuple(f.defaulted))


def normalize_event_date(
    raw: Mapping[str, Any] | None, clock: Clock = timezone.now
) -> Normalized[EventDate]:
    f = _Fields(raw)

    date_id = f.text("id")
    if not date_id:
        date_id = str(uuid.uuid4())
        f.mark("id")

    event_id = f.text("event_id")
    if not event_id:
        f.mark("event_id")

    seats_total = Capacity.clamp(f.value("seats_total")).value
    if to_number(f.value("seats_total")) is None:
        f.mark("seats_total")

    # Not bounded by seats_total here; InventoryService.update applies that rule.
    if to_number(f.value("seats_available")) is None:
        seats_available = seats_total
        f.mark("seats_available")
    else:
        seats_available = Capacity.clamp(f.value("seats_available")).value

    created_at = f.text("created_at")
    if not created_at:
        created_at = iso_timestamp(clock())
        f.mark("created_at")

    row = EventDate(
        id=date_id,
        event_id=event_id,
        label=f.text("label", default=TO_DEFINE),
        seats_total=seats_total,
        seats_available=seats_available,
        created_at=created_at,
    )
    return Normalized(record=row, defaulted=tuple(f.defaulted))


def normalize_promotion(
    raw: Mapping[str, Any] | None, clock: Clock = timezone.now
) -> Normalized[Promotion]:
    f = _Fields(raw)
    now = iso_timestamp(clock())

    promo_id = f.text("id")
    if not promo_id:
        promo_id = slug_id(f.value("title"), "promo")
        f.mark("id")

    if f.value("active") is None:
        f.mark("active")

    priority_number = to_number(f.value("priority"))
    if priority_number is None:
        f.mark("priority")

    dismiss_number = to_number(f.value("dismissDays", "dismiss_days"))
    if not dismiss_number:
        f.mark("dismiss_days")

    cta_raw = f.value("ctaHref", "cta_href")
    cta_href = sanitize_href(cta_raw)
    if cta_href != as_text(cta_raw).strip():
        f.mark("cta_href")

    target = as_text(f.value("target")).strip().lower()
    if not target:
        target = "home"
        f.mark("target")

    promo = Promotion(
        id=promo_id,
        active=_as_bool(f.value("active"), True),
        kind=PromoKind.from_raw(f.value("kind")),
        target=target,
        priority=math.trunc(priority_number) if priority_number is not None else 0,
        badge=f.text("badge"),
        title=f.text("title", default="Promo"),
        description=f.text("description", "desc", "description"),
        note=f.text("note"),
        cta_label=f.text("cta_label", "ctaLabel", "cta_label", default="Conocer"),
        cta_href=cta_href,
        media_img=f.text("media_img", "mediaImg", "media_img"),
        start_at=f.text("start_at", "startAt", "start_at"),
        end_at=f.text("end_at", "endAt", "end_at"),
        dismiss_days=max(1, math.trunc(dismiss_number or 7)),
        created_at=f.text("created_at", "createdAt", "created_at", default=now),
        updated_at=f.text("updated_at", "updatedAt", "updated_at", default=now),
    )
    return Normalized(record=promo, defaulted=tuple(f.defaulted))


def normalize_registration(
    raw: Mapping[str, Any] | None, clock: Clock = timezone.now
) -> Normalized[Registration]:
    f = _Fields(raw)

    registration_id = f.text("id")
    if not registration_id:
        registration_id = str(uuid.uuid4())
        f.mark("id")

    if f.value("marketing_opt_in") is None:
        f.mark("marketing_opt_in")

    registration = Registration(
        id=registration_id,
        event_id=f.text("event_id"),
        event_date_id=f.text("event_date_id"),
        name=f.text("name"),
        email=f.text("email"),
        phone=f.text("phone"),
        marketing_opt_in=_as_bool(f.value("marketing_opt_in"), False),
        created_at=f.text("created_at", default=iso_timestamp(clock())),
    )
    return Normalized(record=registration, defaulted=tuple(f.defaulted))


def normalize_media(raw: Mapping[str, Any] | None) -> Normalized[MediaConfig]:
    f = _Fields(raw)
    media = MediaConfig(
        logo_path=f.text("logo_path", "logoPath", default=DEFAULT_MEDIA.logo_path),
        default_hero=f.text(
            "default_hero", "defaultHero", default=DEFAULT_MEDIA.default_hero
        ),
        whatsapp_number=f.text(
            "whatsapp_number", "whatsappNumber", default=DEFAULT_MEDIA.whatsapp_number
        ),
        instagram_url=f.text(
            "instagram_url", "instagramUrl", default=DEFAULT_MEDIA.instagram_url
        ),
    )
    return Normalized(record=media, defaulted=tuple(f.defaulted))


def normalize_tags(value: Any) -> tuple[str, ...]:
    """Split on commas, semicolons or spaces; prefix "#", drop repeats, keep 12."""
    if isinstance(value, (list, tuple)):
        value = " ".join(as_text(v) for v in value)
    text = as_text(value).replace("\n", " ").replace("\r", " ").strip()
    tags: list[str] = []
    for part in _TAG_SEPARATORS.split(text):
        if not part:
            continue
        tag = _REPEATED_HASH.sub("#", part if part.startswith("#") else f"#{part}")
        if tag not in tags:
            tags.append(tag)
    return tuple(tags[:MAX_GALLERY_TAGS])


def normalize_gallery_item(
    raw: Mapping[str, Any] | None, clock: Clock = timezone.now
) -> Normalized[GalleryItem]:
    f = _Fields(raw)

    item_id = f.text("id")
    if not item_id:
        item_id = f"gal_{uuid.uuid4().hex[:12]}"
        f.mark("id")

    kind_raw = f.text("kind", "type", "kind")
    if kind_raw not in {k.value for k in GalleryKind}:
        f.mark("kind")

    item = GalleryItem(
        id=item_id,
        kind=GalleryKind.from_raw(kind_raw),
        name=f.text("name")[:MAX_GALLERY_NAME],
        tags=normalize_tags(f.value("tags")),
        created_at=f.text(
            "created_at", "createdAt", "created_at", default=iso_timestamp(clock())
        ),
        data_url=f.text("data_url", "dataUrl", "data_url"),
    )
    return Normalized(record=item, defaulted=tuple(f.defaulted))


def normalize_all(
    rows: Iterable[Any], normalize: Callable[[Any], Normalized[T]]
) -> list[T]:
    """Normalize a stored collection; non-list input is treated as empty."""
    if not isinstance(rows, (list, tuple)):
        return []
    return [normalize(row).record for row in rows]
