# app/api/deps.py
from fastapi import Depends
from app.core.config import Settings, get_settings
from app.db.mongo import get_db
from app.db.redis import get_redis
from app.domain.errors import CollaboratorUnavailable
from app.domain.repositories.behavior_repo import BehaviorRepo
from app.domain.repositories.catalog_cache_repo import CachedCatalogStore
from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.recommendation_svc import PopularityFallback, TagAffinityStrategy
from app.domain.services.search_engine import SearchEngine

# Dependency for injecting the MongoDB database into endpoints/services
def mongo_db():
    db = get_db()
    if db is None:
        raise CollaboratorUnavailable("connect")
    return db

# Dependency for injecting the Redis client (None when disabled)
def redis_dep():
    return get_redis()

# Catalog store: Mongo products, optionally behind the Redis snapshot cache
def catalog_store(
    db = Depends(mongo_db),
    redis = Depends(redis_dep),
    settings: Settings = Depends(get_settings),
):
    return CachedCatalogStore(
        ProductRepo(db, settings.catalog_collection),
        redis,
        ttl=settings.catalog_cache_ttl,
        prefix=settings.catalog_cache_prefix,
    )

def search_engine(
    store = Depends(catalog_store),
    db = Depends(mongo_db),
    settings: Settings = Depends(get_settings),
) -> SearchEngine:
    # Personalized recommendations read the events collection; off by default
    if not settings.personalized_recommendations:
        return SearchEngine(store, fetch_timeout=settings.catalog_fetch_timeout_s)
    return SearchEngine(
        store,
        behavior_store=BehaviorRepo(db, settings.events_collection),
        strategies=[TagAffinityStrategy(), PopularityFallback()],
        fetch_timeout=settings.catalog_fetch_timeout_s,
    )
