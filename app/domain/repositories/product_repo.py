# app/domain/repositories/product_repo.py

from __future__ import annotations
import logging
import time
from typing import Optional, Tuple
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from pydantic import ValidationError
from app.domain.errors import CollaboratorUnavailable
from app.domain.models.product import ProductRecord

logger = logging.getLogger(__name__)

# Only the fields the engine reads; keeps snapshot payloads small
_PROJECTION = {
    "_id": 0,
    "product_id": 1,
    "title": 1,
    "description": 1,
    "slug": 1,
    "price": 1,
    "rating": 1,
    "tags": 1,
    "stock": 1,
    "image_url": 1,
    "created_at": 1,
    "updated_at": 1,
}

class ProductRepo:
    """
    Catalog store backed by the 'products' collection.
    Documents are converted into frozen ProductRecord snapshots; documents
    that fail validation are skipped with a warning.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "products"):
        self.col = db[collection_name]

    async def list_products(self) -> Tuple[ProductRecord, ...]:
        t0 = time.perf_counter()
        try:
            docs = await self.col.find({}, _PROJECTION).to_list(length=None)
        except PyMongoError as e:
            raise CollaboratorUnavailable("list_products", e) from e

        products = []
        for doc in docs:
            try:
                products.append(ProductRecord.model_validate(doc))
            except ValidationError as e:
                logger.warning("skipping invalid product doc product_id=%s err=%s", doc.get("product_id"), e)
        logger.info("list_products db_ok items=%s db_time=%.3fs", len(products), time.perf_counter() - t0)
        return tuple(products)

    async def find_product(self, product_id: str) -> Optional[ProductRecord]:
        try:
            doc = await self.col.find_one({"product_id": product_id}, _PROJECTION)
        except PyMongoError as e:
            raise CollaboratorUnavailable("find_product", e) from e
        return ProductRecord.model_validate(doc) if doc else None
