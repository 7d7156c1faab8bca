"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging
from functools import cached_property

from django.middleware.csrf import get_token
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from venue.domain.errors import (
    DomainError,
    ErrorCode,
    EventDateNotFoundError,
    EventNotFoundError,
    GalleryItemNotFoundError,
    InvalidInputError,
    NoSeatsAvailableError,
    NotAuthenticatedError,
    PromotionNotFoundError,
)
from venue.handlers.permissions import AdminOnly, ReadOnlyOrAdmin, SubmitOrAdmin
from venue.handlers.serializers import (
    EventDateInputSerializer,
    EventDateSerializer,
    EventDateUpdateSerializer,
    EventInputSerializer,
    EventSerializer,
    EventViewSerializer,
    GalleryItemInputSerializer,
    GalleryItemSerializer,
    LoginSerializer,
    MediaInputSerializer,
    MediaSerializer,
    PromotionInputSerializer,
    PromotionSerializer,
    RegistrationInputSerializer,
    RegistrationSerializer,
    RegistrationViewSerializer,
    SeatRequestSerializer,
)
from venue.services.data_layer import DataLayer, build_data_layer
from venue.services.event_service import months_window
from venue.services.session_service import AdminSessionService, login_redirect

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EVENT_DATE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PROMOTION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.GALLERY_ITEM_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.NO_SEATS_AVAILABLE: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_AUTHENTICATED: status.HTTP_403_FORBIDDEN,
}


def _first_error(errors) -> str:
    while isinstance(errors, (dict, list)):
        errors = next(iter(errors.values())) if isinstance(errors, dict) else errors[0]
    return str(errors)


def _validated(serializer_class, data) -> dict:
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        field = next(iter(serializer.errors))
        raise InvalidInputError(f"{field}: {_first_error(serializer.errors[field])}")
    return dict(serializer.validated_data)


class VenueView(APIView):
    """Base handler: one DataLayer per request and domain error mapping."""

    permission_classes = [ReadOnlyOrAdmin]

    @cached_property
    def layer(self) -> DataLayer:
        return build_data_layer()

    @cached_property
    def admin_session(self) -> AdminSessionService:
        return self.layer.session_for(self.request.session)

    def permission_denied(self, request, message=None, code=None):
        raise NotAuthenticatedError()

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            if exc.code is not ErrorCode.INVALID_INPUT:
                logger.info("Request refused: %s", exc)
            return Response(
                {"code": exc.code.value, "message": exc.message},
                status=STATUS_BY_CODE[exc.code],
            )
        return super().handle_exception(exc)

    def require_event(self, event_id: str):
        event = self.layer.events.get(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event


class EventListView(VenueView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        views = self.layer.events.list_views()
        return Response(EventViewSerializer(views, many=True).data)

    def post(self, request: Request) -> Response:
        data = _validated(EventInputSerializer, request.data)
        event = self.layer.events.upsert(data)
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(VenueView):
    """Handler for GET/DELETE /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        view = self.layer.events.find_view(event_id)
        if view is None:
            raise EventNotFoundError(event_id)
        return Response(EventViewSerializer(view).data)

    def delete(self, request: Request, event_id: str) -> Response:
        if not self.layer.events.delete(event_id):
            raise EventNotFoundError(event_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class EventDateListView(VenueView):
    """Handler for GET/POST /api/events/{event_id}/dates"""

    def get(self, request: Request, event_id: str) -> Response:
        self.require_event(event_id)
        rows = self.layer.inventory.list_by_event(event_id)
        return Response(EventDateSerializer(rows, many=True).data)

    def post(self, request: Request, event_id: str) -> Response:
        self.require_event(event_id)
        data = _validated(EventDateInputSerializer, request.data)
        row = self.layer.inventory.create(event_id, data["label"], data["seats_total"])
        return Response(EventDateSerializer(row).data, status=status.HTTP_201_CREATED)


class EventDateDetailView(VenueView):
    """Handler for PATCH/DELETE /api/dates/{date_id}"""

    def patch(self, request: Request, date_id: str) -> Response:
        data = _validated(EventDateUpdateSerializer, request.data)
        row = self.layer.inventory.update(date_id, **data)
        if row is None:
            raise EventDateNotFoundError(date_id)
        return Response(EventDateSerializer(row).data)

    def delete(self, request: Request, date_id: str) -> Response:
        if not self.layer.inventory.delete(date_id):
            raise EventDateNotFoundError(date_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SeatView(VenueView):
    """Handler for POST /api/events/{event_id}/seats (take one seat)"""

    def post(self, request: Request, event_id: str) -> Response:
        self.require_event(event_id)
        label = _validated(SeatRequestSerializer, request.data)["label"]
        if not self.layer.inventory.decrement_seat(event_id, label):
            raise NoSeatsAvailableError(event_id, label)
        return Response(EventViewSerializer(self.layer.events.find_view(event_id)).data)


class RegistrationListView(VenueView):
    """Handler for GET/POST /api/registrations

    POST records the registration and then takes the seat. The two steps are
    not atomic; the response reports both outcomes.
    """

    permission_classes = [SubmitOrAdmin]

    def get(self, request: Request) -> Response:
        views = self.layer.registrations.search(request.query_params.get("q", ""))
        return Response(RegistrationViewSerializer(views, many=True).data)

    def post(self, request: Request) -> Response:
        data = _validated(RegistrationInputSerializer, request.data)
        event = self.require_event(data["event_id"])
        label = data["date_label"]

        if not any(d.label == label and d.seats > 0 for d in event.dates):
            raise NoSeatsAvailableError(event.id, label)

        row = next(
            (r for r in self.layer.inventory.list_by_event(event.id) if r.label == label),
            None,
        )
        registration = self.layer.registrations.add(
            {
                "event_id": event.id,
                "event_date_id": row.id if row else "",
                "name": data["name"],
                "email": data["email"],
                "phone": data.get("phone", ""),
                "marketing_opt_in": data["marketing_opt_in"],
            }
        )
        seat_taken = self.layer.inventory.decrement_seat(event.id, label)
        if not seat_taken:
            logger.warning(
                "Registration %s recorded but no seat was taken", registration.id
            )
        return Response(
            {
                "registration": RegistrationSerializer(registration).data,
                "seat_taken": seat_taken,
            },
            status=status.HTTP_201_CREATED,
        )


class PromotionListView(VenueView):
    """Handler for GET/POST /api/promotions"""

    permission_classes = [AdminOnly]

    def get(self, request: Request) -> Response:
        promotions = self.layer.promotions.list_for_admin()
        return Response(PromotionSerializer(promotions, many=True).data)

    def post(self, request: Request) -> Response:
        data = _validated(PromotionInputSerializer, request.data)
        promotion = self.layer.promotions.upsert(data)
        return Response(
            PromotionSerializer(promotion).data, status=status.HTTP_201_CREATED
        )


class ActivePromotionListView(VenueView):
    """Handler for GET /api/promotions/active?target=home"""

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        target = request.query_params.get("target", "home")
        promotions = self.layer.promotions.get_active(target)
        return Response(PromotionSerializer(promotions, many=True).data)


class PromotionDetailView(VenueView):
    """Handler for GET/DELETE /api/promotions/{promotion_id}"""

    permission_classes = [AdminOnly]

    def get(self, request: Request, promotion_id: str) -> Response:
        promotion = self.layer.promotions.get(promotion_id)
        if promotion is None:
            raise PromotionNotFoundError(promotion_id)
        return Response(PromotionSerializer(promotion).data)

    def delete(self, request: Request, promotion_id: str) -> Response:
        if not self.layer.promotions.delete(promotion_id):
            raise PromotionNotFoundError(promotion_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MediaView(VenueView):
    """Handler for GET/PUT /api/media"""

    def get(self, request: Request) -> Response:
        return Response(MediaSerializer(self.layer.media.get()).data)

    def put(self, request: Request) -> Response:
        data = _validated(MediaInputSerializer, request.data)
        return Response(MediaSerializer(self.layer.media.set(data)).data)


class GalleryListView(VenueView):
    """Handler for GET/POST /api/gallery"""

    def get(self, request: Request) -> Response:
        return Response(GalleryItemSerializer(self.layer.gallery.list_all(), many=True).data)

    def post(self, request: Request) -> Response:
        data = _validated(GalleryItemInputSerializer, request.data)
        item = self.layer.gallery.add(data)
        return Response(GalleryItemSerializer(item).data, status=status.HTTP_201_CREATED)


class GalleryDetailView(VenueView):
    """Handler for GET/DELETE /api/gallery/{item_id}"""

    def get(self, request: Request, item_id: str) -> Response:
        item = self.layer.gallery.get(item_id)
        if item is None:
            raise GalleryItemNotFoundError(item_id)
        return Response(GalleryItemSerializer(item).data)

    def delete(self, request: Request, item_id: str) -> Response:
        if not self.layer.gallery.delete(item_id):
            raise GalleryItemNotFoundError(item_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MonthsView(VenueView):
    """Handler for GET /api/months (current month and the next two)"""

    def get(self, request: Request) -> Response:
        return Response({"months": months_window(timezone.localdate())})


class SessionView(VenueView):
    """Handler for GET/POST/DELETE /api/session

    The admin flag is stored in this client's Django session only.
    """

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        # Sets the csrftoken cookie that admin writes must echo back.
        get_token(request)
        return Response({"logged_in": self.admin_session.is_logged_in()})

    def post(self, request: Request) -> Response:
        data = _validated(LoginSerializer, request.data)
        request.session.cycle_key()
        if not self.admin_session.log_in(data["email"], data["password"]):
            raise InvalidInputError(
                "credentials: Enter a valid email and a password of at least 6 characters."
            )
        return Response({"logged_in": True, "redirect": login_redirect(data.get("next"))})

    def delete(self, request: Request) -> Response:
        self.admin_session.log_out()
        return Response(status=status.HTTP_204_NO_CONTENT)
