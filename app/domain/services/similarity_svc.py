import logging
import math
import time
from typing import Iterable, List, Mapping

from app.domain.models.product import ProductRecord, RankedResult
from app.domain.services.constants import SIMILAR_LIMIT, MIN_SIMILARITY
from app.domain.services.term_vector import build_vector, similarity_fields

logger = logging.getLogger(__name__)


def magnitude(vec: Mapping[str, int]) -> float:
    return math.sqrt(sum(v * v for v in vec.values()))


def cosine_similarity(a: Mapping[str, int], b: Mapping[str, int]) -> float:
    """Dot product over shared terms divided by both magnitudes; 0.0 if either vector is empty."""
    mag_a = magnitude(a)
    mag_b = magnitude(b)
    if mag_a == 0 or mag_b == 0:
        return 0.0

    # iterate the smaller vector
    if len(a) > len(b):
        a, b = b, a
    dot = sum(count * b[term] for term, count in a.items() if term in b)
    return dot / (mag_a * mag_b)


def similar(
    target: ProductRecord,
    catalog: Iterable[ProductRecord],
    limit: int = SIMILAR_LIMIT,
    threshold: float = MIN_SIMILARITY,
) -> List[RankedResult]:
    """
    Rank catalog products by title+tags cosine similarity to `target`.
    The target itself is never returned; similarities must be > threshold.
    """
    t0 = time.perf_counter()
    target_vec = build_vector(similarity_fields(target))

    results: List[RankedResult] = []
    for product in catalog:
        if product.product_id == target.product_id:
            continue
        sim = cosine_similarity(target_vec, build_vector(similarity_fields(product)))
        if sim > threshold:
            results.append(RankedResult(product_id=product.product_id, score=sim))

    results.sort(key=RankedResult.sort_key)
    out = results[:limit]
    logger.debug(
        "similar target=%s candidates=%s returned=%s time=%.4fs",
        target.product_id, len(results), len(out), time.perf_counter() - t0,
    )
    return out
