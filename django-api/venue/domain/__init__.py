from venue.domain.models import (
    Event,
    EventDate,
    EventView,
    GalleryItem,
    LegacyDate,
    MediaConfig,
    Promotion,
    Registration,
    RegistrationView,
)
from venue.domain.value_objects import Capacity, GalleryKind, PromoKind

__all__ = [
    "Event",
    "EventDate",
    "EventView",
    "GalleryItem",
    "LegacyDate",
    "MediaConfig",
    "Promotion",
    "Registration",
    "RegistrationView",
    "Capacity",
    "GalleryKind",
    "PromoKind",
]
