# app/domain/repositories/memory_catalog_repo.py
from typing import Dict, Iterable, Optional, Tuple

from app.domain.models.product import ProductRecord


class InMemoryCatalogStore:
    """
    Catalog store over a fixed set of records.
    Handy for embedding the engine without a database, and in tests.
    """

    def __init__(self, products: Iterable[ProductRecord] = ()):
        self._products: Tuple[ProductRecord, ...] = tuple(products)
        self._by_id: Dict[str, ProductRecord] = {p.product_id: p for p in self._products}

    async def list_products(self) -> Tuple[ProductRecord, ...]:
        return self._products

    async def find_product(self, product_id: str) -> Optional[ProductRecord]:
        return self._by_id.get(product_id)

    def replace(self, products: Iterable[ProductRecord]) -> None:
        """Swap the whole catalog; in-flight calls keep the tuple they already hold."""
        products = tuple(products)
        self._by_id = {p.product_id: p for p in products}
        self._products = products
