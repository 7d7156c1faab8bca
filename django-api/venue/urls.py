from django.urls import path

from venue.handlers import (
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

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path(
        "events/<str:event_id>/dates",
        EventDateListView.as_view(),
        name="event-date-list",
    ),
    path("events/<str:event_id>/seats", SeatView.as_view(), name="event-seats"),
    path("dates/<str:date_id>", EventDateDetailView.as_view(), name="event-date-detail"),
    path("registrations", RegistrationListView.as_view(), name="registration-list"),
    path("promotions", PromotionListView.as_view(), name="promotion-list"),
    path(
        "promotions/active",
        ActivePromotionListView.as_view(),
        name="promotion-active",
    ),
    path(
        "promotions/<str:promotion_id>",
        PromotionDetailView.as_view(),
        name="promotion-detail",
    ),
    path("media", MediaView.as_view(), name="media"),
    path("gallery", GalleryListView.as_view(), name="gallery-list"),
    path("gallery/<str:item_id>", GalleryDetailView.as_view(), name="gallery-detail"),
    path("months", MonthsView.as_view(), name="months"),
    path("session", SessionView.as_view(), name="session"),
]
