from venue.handlers.views import (
    ActivePromotionListView,
    EventDateDetailView,
    EventDateListView,
    EventDetailView,
    EventListView,
    GalleryDetailView,
    GalleryListView,
    MediaView,
    MonthsView,
    PromotionDetailView,
    PromotionListView,
    RegistrationListView,
    SeatView,
    SessionView,
)

__all__ = [
    "ActivePromotionListView",
    "EventDateDetailView",
    "EventDateListView",
    "EventDetailView",
    "EventListView",
    "GalleryDetailView",
    "GalleryListView",
    "MediaView",
    "MonthsView",
    "PromotionDetailView",
    "PromotionListView",
    "RegistrationListView",
    "SeatView",
    "SessionView",
]
