# app/api/v1/routers/recommendations.py
from typing import Optional
from fastapi import APIRouter, Depends, Query
import time
import logging

from app.api.deps import search_engine
from app.api.v1.schemas.reco import RecoResultOut
from app.domain.models.product import RecoResult
from app.domain.services.constants import POPULAR_LIMIT
from app.domain.services.search_engine import SearchEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["recommendations"])

# Must be included before the similar router: "/recommend/user" would otherwise
# match "/recommend/{product_id}".
@router.get("/recommend/user", response_model=RecoResultOut)
async def user_recommendations(
    user_id: Optional[str] = Query(None, description="User to recommend for"),
    engine: SearchEngine = Depends(search_engine),
):
    """
    Recommendations for the current user, at most 10 items. Top-rated products
    unless personalized recommendations are enabled and the user has history.
    """
    logger.info("Request: user_recommendations user_id=%s", user_id)
    t0 = time.perf_counter()

    items = await engine.recommendations(user_id)
    res = RecoResult(items=items, count=len(items))

    logger.info("Response: user_recommendations count=%s in %.4fs", res.count, time.perf_counter() - t0)
    return res.model_dump()


@router.get("/popular", response_model=RecoResultOut)
async def popular_products(
    limit: int = Query(POPULAR_LIMIT, ge=1, le=100, description="Max number of products"),
    engine: SearchEngine = Depends(search_engine),
):
    """Top-rated products for everyone (search-page fallback)."""
    logger.info("Request: popular_products limit=%s", limit)
    t0 = time.perf_counter()

    items = await engine.popular(limit)
    res = RecoResult(items=items, count=len(items))

    logger.info("Response: popular_products count=%s in %.4fs", res.count, time.perf_counter() - t0)
    return res.model_dump()
