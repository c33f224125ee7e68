from typing import Optional, Tuple
from redis.asyncio import Redis
from redis.exceptions import RedisError
from app.domain.models.product import ProductRecord
from app.domain.repositories.base import CatalogStore
import json
import logging

logger = logging.getLogger(__name__)

class CachedCatalogStore:
    """
    Catalog store decorator keeping the whole snapshot in Redis.

    - The snapshot is stored as one JSON value under "{prefix}:snapshot:{version}",
      so a single GET always returns one consistent catalog version.
    - invalidate() bumps "{prefix}:version"; older snapshots expire by TTL.
    - Redis errors bypass the cache; the wrapped store stays the source of truth.
    """
    def __init__(self, store: CatalogStore, redis: Optional[Redis], *, ttl: int, prefix: str = "catalog"):
        self.store = store
        self.cache = redis
        self.ttl = ttl
        self.prefix = prefix

    @property
    def enabled(self) -> bool:
        return self.cache is not None and self.ttl > 0

    def _version_key(self) -> str:
        return f"{self.prefix}:version"

    def _snapshot_key(self, version: str) -> str:
        return f"{self.prefix}:snapshot:{version}"

    async def _current_version(self) -> str:
        v = await self.cache.get(self._version_key())
        if isinstance(v, bytes):
            v = v.decode()
        return v or "0"

    async def _read_snapshot(self, version: str) -> Optional[Tuple[ProductRecord, ...]]:
        raw = await self.cache.get(self._snapshot_key(version))
        if not raw:
            return None
        data = json.loads(raw)
        return tuple(ProductRecord.model_validate(x) for x in data)

    async def list_products(self) -> Tuple[ProductRecord, ...]:
        if not self.enabled:
            return tuple(await self.store.list_products())

        version = None
        try:
            version = await self._current_version()
            snapshot = await self._read_snapshot(version)
            if snapshot is not None:
                logger.debug("catalog cache_hit version=%s items=%s", version, len(snapshot))
                return snapshot
        except (RedisError, ValueError) as e:
            logger.warning("catalog cache read error err=%s", e)

        logger.debug("catalog cache_miss version=%s", version)
        products = tuple(await self.store.list_products())

        if version is not None:
            try:
                payload = json.dumps([p.model_dump(mode="json") for p in products])
                await self.cache.set(self._snapshot_key(version), payload, ex=self.ttl)
                logger.debug("catalog cache_set version=%s ttl=%ds bytes=%s", version, self.ttl, len(payload))
            except RedisError as e:
                logger.warning("catalog cache write error version=%s err=%s", version, e)
        return products

    async def find_product(self, product_id: str) -> Optional[ProductRecord]:
        if self.enabled:
            try:
                snapshot = await self._read_snapshot(await self._current_version())
                if snapshot is not None:
                    return next((p for p in snapshot if p.product_id == product_id), None)
            except (RedisError, ValueError) as e:
                logger.warning("catalog cache read error product_id=%s err=%s", product_id, e)
        return await self.store.find_product(product_id)

    async def invalidate(self) -> None:
        """Call after any catalog write so the next call refetches."""
        if self.cache is None:
            return
        try:
            version = await self.cache.incr(self._version_key())
            logger.info("catalog cache invalidated new_version=%s", version)
        except RedisError as e:
            logger.warning("catalog cache invalidate error err=%s", e)
