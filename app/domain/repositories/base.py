# app/domain/repositories/base.py
from typing import Optional, Protocol, Sequence

from app.domain.models.product import BehaviorEvent, ProductRecord


class CatalogStore(Protocol):
    """Read-only view of the product catalog consumed by the search engine."""

    async def list_products(self) -> Sequence[ProductRecord]:
        ...

    async def find_product(self, product_id: str) -> Optional[ProductRecord]:
        ...


class BehaviorStore(Protocol):
    """User interaction history (most recent first)."""

    async def recent_events(self, user_id: str, limit: int = 20) -> Sequence[BehaviorEvent]:
        ...
