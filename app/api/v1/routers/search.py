# app/api/v1/routers/search.py
from fastapi import APIRouter, Depends
import time
import logging

from app.api.deps import search_engine
from app.api.v1.schemas.reco import SearchRequest, SearchResponse
from app.domain.models.product import SearchResult
from app.domain.services.search_engine import SearchEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["search"])

@router.post("/search", response_model=SearchResponse)
async def ai_search(
    body: SearchRequest,
    engine: SearchEngine = Depends(search_engine),
):
    """
    Natural-language product search, e.g.:
    - "bluetooth headphones under 100"
    - "gaming mouse between 50 and 150"
    Returns at most 20 items, best score first, with the parsed query echoed back.
    """
    logger.info("Request: ai_search query=%r", body.query)
    start_time = time.perf_counter()

    parsed, items = await engine.search_with_filter(body.query)
    res = SearchResult(query=body.query, parsed=parsed, items=items, count=len(items))

    logger.info("Response: ai_search count=%s, elapsed_time=%.4fs", res.count, time.perf_counter() - start_time)
    return res.model_dump()
