"""Domain error codes for the venue module.

The data layer itself never raises these; it reports absence with None or
False. Handlers raise them after checking a service result so that every
HTTP error body has the same shape.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    EVENT_DATE_NOT_FOUND = "EVENT_DATE_NOT_FOUND"
    PROMOTION_NOT_FOUND = "PROMOTION_NOT_FOUND"
    GALLERY_ITEM_NOT_FOUND = "GALLERY_ITEM_NOT_FOUND"
    NO_SEATS_AVAILABLE = "NO_SEATS_AVAILABLE"
    INVALID_INPUT = "INVALID_INPUT"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        object.__setattr__(self, "event_id", event_id)


class EventDateNotFoundError(DomainError):
    """Raised when an event date is not found."""

    def __init__(self, date_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_DATE_NOT_FOUND,
            message="Event date not found",
        )
        object.__setattr__(self, "date_id", date_id)


class PromotionNotFoundError(DomainError):
    """Raised when a promotion is not found."""

    def __init__(self, promotion_id: str) -> None:
        super().__init__(
            code=ErrorCode.PROMOTION_NOT_FOUND,
            message="Promotion not found",
        )
        object.__setattr__(self, "promotion_id", promotion_id)


class GalleryItemNotFoundError(DomainError):
    """Raised when a gallery item is not found."""

    def __init__(self, item_id: str) -> None:
        super().__init__(
            code=ErrorCode.GALLERY_ITEM_NOT_FOUND,
            message="Gallery item not found",
        )
        object.__setattr__(self, "item_id", item_id)


class NoSeatsAvailableError(DomainError):
    """Raised when a seat cannot be taken for a date label."""

    def __init__(self, event_id: str, label: str) -> None:
        super().__init__(
            code=ErrorCode.NO_SEATS_AVAILABLE,
            message="No seats available for that date",
        )
        object.__setattr__(self, "event_id", event_id)
        object.__setattr__(self, "label", label)


class InvalidInputError(DomainError):
    """Raised when request input fails user-facing validation."""

    def __init__(self, message: str = "Invalid input") -> None:
        super().__init__(code=ErrorCode.INVALID_INPUT, message=message)


class NotAuthenticatedError(DomainError):
    """Raised when a write is attempted without an admin session."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NOT_AUTHENTICATED,
            message="Admin session required",
        )
