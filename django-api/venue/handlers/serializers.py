"""Serializers for request validation and for rendering domain models.

Input serializers enforce the user-facing rules the data layer does not
(required titles, labels, emails). Output serializers render the frozen
domain dataclasses using the storage field names the site already reads.
"""

import re

from rest_framework import serializers

from venue.domain.value_objects import MAX_SEATS, GalleryKind

_IMAGE_DATA_URL = re.compile(r"^data:image/[a-z0-9.+-]+;base64,", re.IGNORECASE)

# Base64 text of a 2.2 MB image.
MAX_IMAGE_BASE64_LENGTH = int(2.2 * 1024 * 1024) * 4 // 3 + 4


def _optional_text(**kwargs) -> serializers.CharField:
    return serializers.CharField(required=False, allow_blank=True, **kwargs)


# Input


class EventInputSerializer(serializers.Serializer):
    id = _optional_text()
    title = serializers.CharField()
    type = _optional_text()
    monthKey = _optional_text()
    desc = _optional_text()
    img = _optional_text()
    location = _optional_text()
    timeRange = _optional_text()
    durationHours = _optional_text()
    duration = _optional_text()
    dates = serializers.ListField(
        child=serializers.DictField(), required=False, default=list
    )


class EventDateInputSerializer(serializers.Serializer):
    label = serializers.CharField()
    seats_total = serializers.IntegerField(min_value=0, max_value=MAX_SEATS)


class EventDateUpdateSerializer(serializers.Serializer):
    label = serializers.CharField(required=False)
    seats_total = serializers.IntegerField(
        required=False, min_value=0, max_value=MAX_SEATS
    )
    seats_available = serializers.IntegerField(
        required=False, min_value=0, max_value=MAX_SEATS
    )


class SeatRequestSerializer(serializers.Serializer):
    # Labels are matched exactly, so surrounding whitespace is significant.
    label = serializers.CharField(trim_whitespace=False)


class RegistrationInputSerializer(serializers.Serializer):
    event_id = serializers.CharField()
    date_label = serializers.CharField(trim_whitespace=False)
    name = serializers.CharField()
    email = serializers.EmailField()
    phone = _optional_text()
    marketing_opt_in = serializers.BooleanField(required=False, default=False)


class PromotionInputSerializer(serializers.Serializer):
    id = _optional_text()
    title = serializers.CharField()
    active = serializers.BooleanField(required=False, default=True)
    kind = _optional_text()
    target = _optional_text()
    priority = serializers.IntegerField(required=False, default=0)
    badge = _optional_text()
    desc = _optional_text()
    note = _optional_text()
    ctaLabel = _optional_text()
    ctaHref = _optional_text()
    mediaImg = _optional_text()
    startAt = _optional_text()
    endAt = _optional_text()
    dismissDays = serializers.IntegerField(required=False, min_value=1)


class MediaInputSerializer(serializers.Serializer):
    logoPath = _optional_text()
    defaultHero = _optional_text()
    whatsappNumber = _optional_text()
    instagramUrl = _optional_text()


class GalleryItemInputSerializer(serializers.Serializer):
    type = serializers.ChoiceField(
        choices=[k.value for k in GalleryKind], required=False, default="maridajes"
    )
    name = serializers.CharField()
    # A "#a, b; c" string or a list; split and capped by the normalizer.
    tags = serializers.JSONField(required=False, default=list)
    dataUrl = serializers.CharField(trim_whitespace=False)

    def validate_dataUrl(self, value: str) -> str:
        match = _IMAGE_DATA_URL.match(value)
        if not match:
            raise serializers.ValidationError("Expected a base64 image data URL.")
        if len(value) - match.end() > MAX_IMAGE_BASE64_LENGTH:
            raise serializers.ValidationError("Image must be smaller than 2.2 MB.")
        return value


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)
    next = _optional_text()


# Output


class LegacyDateSerializer(serializers.Serializer):
    label = serializers.CharField()
    seats = serializers.IntegerField()


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.CharField()
    type = serializers.CharField()
    monthKey = serializers.CharField(source="month_key")
    title = serializers.CharField()
    desc = serializers.CharField(source="description")
    img = serializers.CharField(source="image")
    location = serializers.CharField()
    timeRange = serializers.CharField(source="time_range")
    durationHours = serializers.CharField(source="duration_hours")
    duration = serializers.CharField()
    dates = LegacyDateSerializer(many=True)


class EventViewSerializer(serializers.Serializer):
    """Flattened event: the event fields plus date labels and total seats."""

    def to_representation(self, instance):
        data = EventSerializer(instance.event).data
        data["labels"] = list(instance.labels)
        data["seats"] = instance.seats
        return data


class EventDateSerializer(serializers.Serializer):
    """Serializer for EventDate domain model."""

    id = serializers.CharField()
    event_id = serializers.CharField()
    label = serializers.CharField()
    seats_total = serializers.IntegerField()
    seats_available = serializers.IntegerField()
    created_at = serializers.CharField()


class RegistrationSerializer(serializers.Serializer):
    """Serializer for Registration domain model."""

    id = serializers.CharField()
    event_id = serializers.CharField()
    event_date_id = serializers.CharField()
    name = serializers.CharField()
    email = serializers.CharField()
    phone = serializers.CharField()
    marketing_opt_in = serializers.BooleanField()
    created_at = serializers.CharField()


class RegistrationViewSerializer(serializers.Serializer):
    def to_representation(self, instance):
        data = RegistrationSerializer(instance.registration).data
        data["event_title"] = instance.event_title
        data["date_label"] = instance.date_label
        return data


class PromotionSerializer(serializers.Serializer):
    """Serializer for Promotion domain model."""

    id = serializers.CharField()
    active = serializers.BooleanField()
    kind = serializers.CharField(source="kind.value")
    target = serializers.CharField()
    priority = serializers.IntegerField()
    badge = serializers.CharField()
    title = serializers.CharField()
    desc = serializers.CharField(source="description")
    note = serializers.CharField()
    ctaLabel = serializers.CharField(source="cta_label")
    ctaHref = serializers.CharField(source="cta_href")
    mediaImg = serializers.CharField(source="media_img")
    startAt = serializers.CharField(source="start_at")
    endAt = serializers.CharField(source="end_at")
    dismissDays = serializers.IntegerField(source="dismiss_days")
    createdAt = serializers.CharField(source="created_at")
    updatedAt = serializers.CharField(source="updated_at")


class MediaSerializer(serializers.Serializer):
    logoPath = serializers.CharField(source="logo_path")
    defaultHero = serializers.CharField(source="default_hero")
    whatsappNumber = serializers.CharField(source="whatsapp_number")
    instagramUrl = serializers.CharField(source="instagram_url")


class GalleryItemSerializer(serializers.Serializer):
    """Serializer for GalleryItem domain model."""

    id = serializers.CharField()
    type = serializers.CharField(source="kind.value")
    name = serializers.CharField()
    tags = serializers.ListField(child=serializers.CharField())
    createdAt = serializers.CharField(source="created_at")
    dataUrl = serializers.CharField(source="data_url")
