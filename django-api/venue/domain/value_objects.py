"""Domain primitives that enforce validity at creation time."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Self

MAX_SEATS = 1_000_000


class PromoKind(Enum):
    """How a promotion is displayed."""

    BANNER = "BANNER"
    MODAL = "MODAL"

    @classmethod
    def from_raw(cls, value: Any) -> Self:
        """Any case-insensitive "modal" is a modal; everything else is a banner."""
        if str(value if value is not None else "").strip().lower() == "modal":
            return cls.MODAL
        return cls.BANNER


class GalleryKind(Enum):
    """Gallery section a photo belongs to."""

    MARIDAJES = "maridajes"
    COCTELES = "cocteles"

    @classmethod
    def from_raw(cls, value: Any) -> Self:
        """Only an exact "cocteles" selects cocktails; everything else is pairings."""
        if str(value if value is not None else "").strip() == cls.COCTELES.value:
            return cls.COCTELES
        return cls.MARIDAJES


def to_number(value: Any) -> float | None:
    """Coerce form or storage input to a finite number, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class Capacity:
    """Seat count bounded to [0, MAX_SEATS]."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")
        if self.value > MAX_SEATS:
            raise ValueError("Capacity exceeds maximum")

    @classmethod
    def clamp(cls, value: Any, upper: int = MAX_SEATS) -> Self:
        """Truncate and clamp any input; non-numeric input becomes zero."""
        number = to_number(value)
        if number is None:
            return cls(value=0)
        return cls(value=max(0, min(upper, math.trunc(number))))

    def __int__(self) -> int:
        return self.value
