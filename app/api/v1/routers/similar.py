# app/api/v1/routers/similar.py
from fastapi import APIRouter, Depends
import time
import logging

from app.api.deps import search_engine
from app.api.v1.schemas.reco import RecoResultOut
from app.domain.models.product import RecoResult
from app.domain.services.search_engine import SearchEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["similar"])

@router.get("/recommend/{product_id}", response_model=RecoResultOut)
async def similar_products(
    product_id: str,
    engine: SearchEngine = Depends(search_engine),
):
    """
    Products similar to `product_id` (cosine similarity on title + tags).
    At most 10 items; 404 if the product does not exist.
    """
    logger.info("Request: similar_products product_id=%s", product_id)
    start_time = time.perf_counter()

    items = await engine.similar_products(product_id)
    res = RecoResult(source_product_id=product_id, items=items, count=len(items))

    elapsed_time = time.perf_counter() - start_time
    logger.info(
        "Response: similar_products product_id=%s, count=%s, elapsed_time=%.4fs",
        product_id, res.count, elapsed_time,
    )
    return res.model_dump()
