"""
Tests for the SearchEngine facade (async, over in-memory and mocked stores)
"""
import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from app.domain.errors import CollaboratorUnavailable, NotFound
from app.domain.repositories.memory_catalog_repo import InMemoryCatalogStore
from app.domain.services.recommendation_svc import PopularityFallback, RecommendationStrategy, TagAffinityStrategy
from app.domain.services.search_engine import SearchEngine
from app.domain.models.product import BehaviorEvent, RankedResult
from conftest import make_product


def ids(results):
    return [r.product_id for r in results]


class SlowStore(InMemoryCatalogStore):
    async def list_products(self):
        await asyncio.sleep(1)
        return await super().list_products()


class TestEndToEnd:

    async def test_search_under(self, two_products):
        engine = SearchEngine(InMemoryCatalogStore(two_products))
        assert ids(await engine.search("bluetooth under 100")) == ["A"]

    async def test_search_between(self, two_products):
        engine = SearchEngine(InMemoryCatalogStore(two_products))
        assert ids(await engine.search("gaming between 50 and 70")) == ["B"]

    async def test_search_with_filter_echoes_parsed_query(self, engine):
        parsed, items = await engine.search_with_filter("bluetooth headphones under 100")
        assert parsed.max_price == 10000
        assert parsed.keywords == ("bluetooth", "headphones")
        # C mentions bluetooth twice, D mentions headphones once
        assert ids(items) == ["A", "C", "D"]

    async def test_search_without_keywords_is_empty(self, engine):
        assert await engine.search("under 100") == []

    async def test_similar_without_overlap_is_empty(self, two_products):
        engine = SearchEngine(InMemoryCatalogStore(two_products))
        assert await engine.similar_products("A") == []

    async def test_similar_excludes_target(self, engine):
        assert ids(await engine.similar_products("A")) == ["C", "D"]

    async def test_recommendations_ignore_user(self, engine):
        anonymous = await engine.recommendations()
        assert anonymous == await engine.recommendations("u42")
        assert ids(anonymous) == ["E", "A", "F", "C", "B", "D"]

    async def test_recommendations_capped_at_ten(self):
        store = InMemoryCatalogStore(make_product(f"p{i:02d}", "lamp", rating=i / 10) for i in range(30))
        results = await SearchEngine(store).recommendations()
        assert len(results) == 10
        assert results[0].product_id == "p29"

    async def test_empty_catalog(self):
        engine = SearchEngine(InMemoryCatalogStore())
        assert await engine.search("bluetooth headphones") == []
        assert await engine.recommendations() == []


class TestErrors:

    async def test_unknown_product_raises_before_scoring(self, catalog):
        store = AsyncMock()
        store.list_products.return_value = tuple(catalog)
        engine = SearchEngine(store)

        with patch("app.domain.services.search_engine.similar") as scorer:
            with pytest.raises(NotFound) as exc_info:
                await engine.similar_products("missing")

        assert exc_info.value.product_id == "missing"
        scorer.assert_not_called()
        store.list_products.assert_awaited_once()
        store.find_product.assert_not_awaited()

    async def test_timeout_becomes_collaborator_unavailable(self, catalog):
        engine = SearchEngine(SlowStore(catalog), fetch_timeout=0.05)
        with pytest.raises(CollaboratorUnavailable) as exc_info:
            await engine.search("bluetooth")
        assert isinstance(exc_info.value.__cause__, asyncio.TimeoutError)
        assert exc_info.value.operation == "list_products"

    async def test_store_errors_propagate_unchanged(self):
        store = AsyncMock()
        store.list_products.side_effect = RuntimeError("boom")
        with pytest.raises(RuntimeError, match="boom"):
            await SearchEngine(store).recommendations()

    async def test_store_unavailable_is_not_retried(self):
        store = AsyncMock()
        store.list_products.side_effect = CollaboratorUnavailable("list_products")
        with pytest.raises(CollaboratorUnavailable):
            await SearchEngine(store).search("lamp")
        assert store.list_products.await_count == 1


class TestStrategySelection:

    async def test_behavior_not_fetched_for_popularity_only(self, store):
        behavior = AsyncMock()
        engine = SearchEngine(store, behavior_store=behavior)
        await engine.recommendations("u1")
        behavior.recent_events.assert_not_awaited()

    async def test_personalized_strategy_used_when_behavior_exists(self, store):
        class SeenAgain(RecommendationStrategy):
            name = "seen_again"

            def available(self, user_id, behavior):
                return bool(behavior)

            def recommend(self, catalog, limit, user_id=None, behavior=()):
                return [RankedResult(product_id=e.product_id, score=1.0) for e in behavior]

        behavior = AsyncMock()
        behavior.recent_events.return_value = [BehaviorEvent(product_id="F", event_type="view")]
        engine = SearchEngine(store, behavior_store=behavior, strategies=[SeenAgain(), PopularityFallback()])

        assert ids(await engine.recommendations("u1")) == ["F"]
        behavior.recent_events.assert_awaited_once_with("u1")

        # anonymous users get the fallback
        assert ids(await engine.recommendations())[0] == "E"

    async def test_tag_affinity_from_recent_events(self, store):
        behavior = AsyncMock()
        behavior.recent_events.return_value = [
            BehaviorEvent(product_id="A", event_type="purchase"),
            BehaviorEvent(product_id="E", event_type="view"),
        ]
        engine = SearchEngine(store, behavior_store=behavior, strategies=[TagAffinityStrategy(), PopularityFallback()])

        # audio/wireless/gaming/keyboard, seen A and E left out, rating desc
        assert ids(await engine.recommendations("u1")) == ["C", "B", "D"]

    async def test_user_without_events_gets_popular(self, store):
        behavior = AsyncMock()
        behavior.recent_events.return_value = []
        engine = SearchEngine(store, behavior_store=behavior, strategies=[TagAffinityStrategy(), PopularityFallback()])

        assert ids(await engine.recommendations("u1")) == ["E", "A", "F", "C", "B", "D"]

    async def test_behavior_store_timeout_is_unavailable(self, store):
        async def hang(user_id):
            await asyncio.sleep(1)

        behavior = AsyncMock()
        behavior.recent_events.side_effect = hang
        engine = SearchEngine(store, behavior_store=behavior, strategies=[TagAffinityStrategy()], fetch_timeout=0.05)

        with pytest.raises(CollaboratorUnavailable) as exc_info:
            await engine.recommendations("u1")
        assert exc_info.value.operation == "recent_events"


class TestPopular:

    async def test_default_limit_is_twenty(self):
        store = InMemoryCatalogStore(make_product(f"p{i:02d}", "lamp", rating=i / 10) for i in range(30))
        results = await SearchEngine(store).popular()
        assert len(results) == 20
        assert results[0].product_id == "p29"

    async def test_custom_limit(self, engine):
        assert ids(await engine.popular(2)) == ["E", "A"]


class TestConcurrency:

    async def test_concurrent_calls_see_consistent_snapshots(self, catalog):
        store = InMemoryCatalogStore(catalog)
        engine = SearchEngine(store)

        async def swap():
            store.replace([make_product("Z", "bluetooth bluetooth", rating=5.0)])

        results = await asyncio.gather(
            *[engine.search("bluetooth") for _ in range(10)],
            swap(),
            *[engine.search("bluetooth") for _ in range(10)],
        )
        searches = [r for r in results if r is not None]
        # each call ranks one whole catalog version, never a mix
        for items in searches:
            assert ids(items) in (["C", "A"], ["Z"])
