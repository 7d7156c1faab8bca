"""Promotion service - scheduling, targeting and ordering of banners/modals."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any

from venue.domain.models import Promotion
from venue.domain.normalizers import (
    as_text,
    iso_timestamp,
    normalize_promotion,
    parse_timestamp,
)
from venue.stores.local_store import LocalStore

logger = logging.getLogger(__name__)


def normalize_target(target: Any) -> str:
    return as_text(target).strip().lower() or "home"


def is_within_window(promotion: Promotion, now: datetime) -> bool:
    """True when now falls in [start_at, end_at]; missing or unparseable bounds are open."""
    start = parse_timestamp(promotion.start_at)
    end = parse_timestamp(promotion.end_at)
    if start is not None and now < start:
        return False
    if end is not None and now > end:
        return False
    return True


class PromotionService:
    """Service for promotion operations."""

    def __init__(self, store: LocalStore) -> None:
        self._store = store

    def list_all(self) -> list[Promotion]:
        return self._store.promotions()

    def get(self, promotion_id: str) -> Promotion | None:
        wanted = as_text(promotion_id)
        return next((p for p in self.list_all() if p.id == wanted), None)

    def replace_all(self, raws: Iterable[Mapping[str, Any] | Promotion]) -> list[Promotion]:
        clean = [
            raw
            if isinstance(raw, Promotion)
            else normalize_promotion(raw, self._store.clock).record
            for raw in raws
        ]
        self._store.save_promotions(clean)
        return clean

    def upsert(self, raw: Mapping[str, Any] | None) -> Promotion:
        """Create or edit by id; created_at is kept and updated_at refreshed."""
        now = iso_timestamp(self._store.clock())
        promotion = replace(
            normalize_promotion(raw, self._store.clock).record, updated_at=now
        )
        promotions = self.list_all()
        index = next((i for i, p in enumerate(promotions) if p.id == promotion.id), None)
        if index is None:
            promotions.insert(0, promotion)
            logger.info("Created promotion %s", promotion.id)
        else:
            promotion = replace(promotion, created_at=promotions[index].created_at)
            promotions[index] = promotion
            logger.info("Updated promotion %s", promotion.id)
        self._store.save_promotions(promotions)
        return promotion

    def delete(self, promotion_id: str) -> bool:
        wanted = as_text(promotion_id)
        promotions = self.list_all()
        remaining = [p for p in promotions if p.id != wanted]
        self._store.save_promotions(remaining)
        return len(remaining) != len(promotions)

    def get_active(
        self, target: Any = "home", now: datetime | None = None
    ) -> list[Promotion]:
        """Active promotions for a target inside their schedule, highest priority first.

        Ties keep storage order.
        """
        wanted = normalize_target(target)
        moment = now or self._store.clock()
        matching = [
            p
            for p in self.list_all()
            if p.active
            and normalize_target(p.target) == wanted
            and is_within_window(p, moment)
        ]
        return sorted(matching, key=lambda p: -p.priority)

    def list_for_admin(self) -> list[Promotion]:
        """Priority desc, then newest created_at, then title and id ascending."""
        ordered = sorted(self.list_all(), key=lambda p: (p.title, p.id))
        ordered.sort(key=lambda p: p.created_at, reverse=True)
        ordered.sort(key=lambda p: p.priority, reverse=True)
        return ordered
