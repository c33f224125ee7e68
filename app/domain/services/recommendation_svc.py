import logging
from abc import ABC, abstractmethod
from collections import Counter
from typing import Iterable, List, Optional, Sequence

from app.domain.models.product import BehaviorEvent, ProductRecord, RankedResult
from app.domain.services.constants import (
    BEHAVIOR_WEIGHTS,
    STRATEGY_POPULAR,
    STRATEGY_TAG_AFFINITY,
    TOP_AFFINITY_TAGS,
)

logger = logging.getLogger(__name__)


def recommend_popular(catalog: Iterable[ProductRecord], limit: int) -> List[RankedResult]:
    """
    Rating-based popularity ranking: rating desc, product id asc, top `limit`.
    The score of each item is the product rating.
    """
    items = [RankedResult(product_id=p.product_id, score=p.rating) for p in catalog]
    items.sort(key=RankedResult.sort_key)
    return items[:max(limit, 0)]


def tag_affinity(catalog: Sequence[ProductRecord], behavior: Sequence[BehaviorEvent]) -> Counter:
    """Weighted tag counts over the products the user interacted with."""
    by_id = {p.product_id: p for p in catalog}
    weights: Counter = Counter()
    for event in behavior:
        product = by_id.get(event.product_id)
        if product is None or event.event_type not in BEHAVIOR_WEIGHTS:
            continue
        w = BEHAVIOR_WEIGHTS[event.event_type]
        for tag in product.tags:
            weights[tag] += w
    return weights


def recommend_by_tags(
    catalog: Sequence[ProductRecord],
    behavior: Sequence[BehaviorEvent],
    limit: int,
) -> List[RankedResult]:
    """
    Products sharing a favourite tag with the user's history.

    Favourite tags are the TOP_AFFINITY_TAGS heaviest (weight desc, tag asc).
    Products the user already interacted with are left out. Candidates are
    ordered like popularity: rating desc, product id asc, score = rating.
    """
    weights = tag_affinity(catalog, behavior)
    ranked_tags = sorted(weights, key=lambda t: (-weights[t], t))
    top = set(ranked_tags[:TOP_AFFINITY_TAGS])
    if not top:
        return []

    seen = {e.product_id for e in behavior}
    candidates = [p for p in catalog if p.product_id not in seen and top.intersection(p.tags)]
    logger.debug("tag affinity top_tags=%s seen=%s candidates=%s", sorted(top), len(seen), len(candidates))
    return recommend_popular(candidates, limit)


class RecommendationStrategy(ABC):
    """
    A way of producing recommendations for a user.
    `behavior` holds the user's recent events, newest first (may be empty).
    """
    name: str

    @abstractmethod
    def available(self, user_id: Optional[str], behavior: Sequence[BehaviorEvent]) -> bool:
        ...

    @abstractmethod
    def recommend(
        self,
        catalog: Sequence[ProductRecord],
        limit: int,
        user_id: Optional[str] = None,
        behavior: Sequence[BehaviorEvent] = (),
    ) -> List[RankedResult]:
        ...


class PopularityFallback(RecommendationStrategy):
    """
    Top-rated products for everyone.
    Ignores the user id and behavior; always available.
    """
    name = STRATEGY_POPULAR

    def available(self, user_id, behavior) -> bool:
        return True

    def recommend(self, catalog, limit, user_id=None, behavior=()) -> List[RankedResult]:
        return recommend_popular(catalog, limit)


class TagAffinityStrategy(RecommendationStrategy):
    """Personalized: needs a user with at least one recorded event."""
    name = STRATEGY_TAG_AFFINITY

    def available(self, user_id, behavior) -> bool:
        return bool(user_id and behavior)

    def recommend(self, catalog, limit, user_id=None, behavior=()) -> List[RankedResult]:
        return recommend_by_tags(catalog, behavior, limit)


def select_strategy(
    strategies: Sequence[RecommendationStrategy],
    user_id: Optional[str],
    behavior: Sequence[BehaviorEvent] = (),
) -> RecommendationStrategy:
    """
    First strategy that has what it needs for this user; popularity otherwise.
    """
    for strategy in strategies:
        if strategy.available(user_id, behavior):
            logger.debug("recommendation strategy=%s user_id=%s behavior=%s", strategy.name, user_id, len(behavior))
            return strategy
    return PopularityFallback()
