import asyncio
import logging
import time
from typing import Awaitable, List, Optional, Sequence, Tuple, TypeVar

from app.domain.errors import CollaboratorUnavailable, NotFound
from app.domain.models.product import BehaviorEvent, ProductRecord, QueryFilter, RankedResult
from app.domain.repositories.base import BehaviorStore, CatalogStore
from app.domain.services.constants import SEARCH_LIMIT, SIMILAR_LIMIT, RECOMMENDATION_LIMIT, POPULAR_LIMIT
from app.domain.services.query_parser import parse_query
from app.domain.services.recommendation_svc import (
    PopularityFallback,
    RecommendationStrategy,
    recommend_popular,
    select_strategy,
)
from app.domain.services.relevance_svc import rank
from app.domain.services.similarity_svc import similar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SearchEngine:
    """
    Facade over parsing, relevance ranking, similarity and recommendations.

    Every call fetches its own catalog snapshot from the store and computes
    over that snapshot only, so concurrent calls share no mutable state.
    Store calls are the only await points; they are bounded by
    `fetch_timeout` and never retried here.
    """

    def __init__(
        self,
        store: CatalogStore,
        *,
        behavior_store: Optional[BehaviorStore] = None,
        strategies: Optional[Sequence[RecommendationStrategy]] = None,
        fetch_timeout: Optional[float] = None,
    ):
        self.store = store
        self.behavior_store = behavior_store
        self.strategies: Tuple[RecommendationStrategy, ...] = tuple(strategies or (PopularityFallback(),))
        self.fetch_timeout = fetch_timeout if fetch_timeout and fetch_timeout > 0 else None

    async def _call_store(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.fetch_timeout)
        except asyncio.TimeoutError as e:
            logger.error("catalog store timeout operation=%s timeout=%ss", operation, self.fetch_timeout)
            raise CollaboratorUnavailable(operation, e) from e

    async def _snapshot(self) -> Tuple[ProductRecord, ...]:
        return tuple(await self._call_store("list_products", self.store.list_products()))

    async def search_with_filter(self, query: str) -> Tuple[QueryFilter, List[RankedResult]]:
        """Parse `query`, rank the current catalog, and return both."""
        t0 = time.perf_counter()
        filt = parse_query(query)
        catalog = await self._snapshot()
        items = rank(catalog, filt, limit=SEARCH_LIMIT)
        logger.info(
            "search query=%r keywords=%s min=%s max=%s catalog=%s items=%s time=%.3fs",
            query, list(filt.keywords), filt.min_price, filt.max_price, len(catalog), len(items), time.perf_counter() - t0,
        )
        return filt, items

    async def search(self, query: str) -> List[RankedResult]:
        _, items = await self.search_with_filter(query)
        return items

    async def similar_products(self, product_id: str) -> List[RankedResult]:
        """
        Products similar to `product_id`. The target and the candidates come
        from the same snapshot; an unknown id raises NotFound before scoring.
        """
        t0 = time.perf_counter()
        catalog = await self._snapshot()
        target = next((p for p in catalog if p.product_id == product_id), None)
        if target is None:
            logger.warning("similar_products product not found product_id=%s catalog=%s", product_id, len(catalog))
            raise NotFound(product_id)

        others = [p for p in catalog if p.product_id != product_id]
        items = similar(target, others, limit=SIMILAR_LIMIT)
        logger.info(
            "similar_products product_id=%s catalog=%s items=%s time=%.3fs",
            product_id, len(catalog), len(items), time.perf_counter() - t0,
        )
        return items

    async def _behavior(self, user_id: Optional[str]) -> Sequence[BehaviorEvent]:
        if not user_id or self.behavior_store is None:
            return ()
        # popularity needs no behavior data
        if all(isinstance(s, PopularityFallback) for s in self.strategies):
            return ()
        return await self._call_store("recent_events", self.behavior_store.recent_events(user_id))

    async def recommendations(self, user_id: Optional[str] = None) -> List[RankedResult]:
        """
        Recommendations for a user: the first configured strategy with enough
        data for this user, popularity otherwise.
        """
        t0 = time.perf_counter()
        behavior = await self._behavior(user_id)
        strategy = select_strategy(self.strategies, user_id, behavior)
        catalog = await self._snapshot()
        items = strategy.recommend(catalog, RECOMMENDATION_LIMIT, user_id=user_id, behavior=behavior)
        logger.info(
            "recommendations user_id=%s strategy=%s behavior=%s catalog=%s items=%s time=%.3fs",
            user_id, strategy.name, len(behavior), len(catalog), len(items), time.perf_counter() - t0,
        )
        return items

    async def popular(self, limit: int = POPULAR_LIMIT) -> List[RankedResult]:
        """Top-rated products for everyone, up to `limit`."""
        catalog = await self._snapshot()
        items = recommend_popular(catalog, limit)
        logger.info("popular limit=%s catalog=%s items=%s", limit, len(catalog), len(items))
        return items
