import logging
import math
import time
from typing import Iterable, List, Sequence

from app.domain.models.product import ProductRecord, QueryFilter, RankedResult
from app.domain.services.constants import SEARCH_LIMIT
from app.domain.services.term_vector import relevance_fields

logger = logging.getLogger(__name__)


def within_price(product: ProductRecord, filt: QueryFilter) -> bool:
    if filt.min_price is not None and product.price < filt.min_price:
        return False
    if filt.max_price is not None and product.price > filt.max_price:
        return False
    return True


def count_occurrences(haystack: str, keyword: str) -> int:
    """Non-overlapping, left-to-right substring count."""
    if not keyword:
        return 0
    return haystack.count(keyword)


def _haystack(product: ProductRecord) -> str:
    return " ".join(relevance_fields(product)).lower()


def score_product(product: ProductRecord, keywords: Sequence[str]) -> float:
    """
    TF-like relevance: sum of ln(1 + count) over matched keywords,
    boosted by (1 + rating / 10). 0.0 when nothing matches.
    """
    if not keywords:
        return 0.0

    text = _haystack(product)
    score = 0.0
    for kw in keywords:
        count = count_occurrences(text, kw)
        if count > 0:
            score += math.log1p(count)

    return score * (1 + product.rating / 10.0)


def rank(catalog: Iterable[ProductRecord], filt: QueryFilter, limit: int = SEARCH_LIMIT) -> List[RankedResult]:
    """
    Rank a catalog snapshot against a parsed query.
    Price filter → score → drop zero scores → (score desc, id asc) → top `limit`.
    """
    t0 = time.perf_counter()
    if not filt.keywords:
        logger.debug("relevance rank skipped: no keywords")
        return []

    scored: List[RankedResult] = []
    seen = 0
    for product in catalog:
        seen += 1
        if not within_price(product, filt):
            continue
        score = score_product(product, filt.keywords)
        if score > 0:
            scored.append(RankedResult(product_id=product.product_id, score=score))

    scored.sort(key=RankedResult.sort_key)
    out = scored[:limit]
    logger.debug(
        "relevance rank seen=%s matched=%s returned=%s time=%.4fs",
        seen, len(scored), len(out), time.perf_counter() - t0,
    )
    return out
